from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import func

from app.campushub.audit import record_event
from app.campushub.constants import FEEDBACK_CATEGORIES
from app.campushub.lifecycle import FEEDBACK_TRANSITIONS, PENDING, apply_transition
from app.campushub.models import owner_summary
from app.campushub.responses import iso
from app.campushub.validation import check_choice, check_required, parse_bool, text

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from app.campushub.models import User
    from app.campushub.modules.feedback.models import Feedback


def validate_feedback_payload(payload: dict) -> list[str]:
    errors: list[str] = []
    check_required(errors, payload, "subject", "Subject is required", max_len=200, too_long="Subject cannot be more than 200 characters")
    check_required(errors, payload, "message", "Message is required")
    check_choice(errors, payload, "category", FEEDBACK_CATEGORIES, "Invalid category")
    return errors


def submit_feedback(s: "Session", payload: dict, user: "User") -> "Feedback":
    """
    Store a feedback item.

    The submitter is taken from the authenticated user only, and dropped
    entirely for anonymous submissions (any client-sent submitter is ignored).
    """
    from app.campushub.modules.feedback.models import Feedback

    anonymous = parse_bool(payload.get("isAnonymous"))
    now = datetime.utcnow()
    fb = Feedback(
        subject=text(payload, "subject"),
        message=text(payload, "message"),
        category=text(payload, "category") or "Other",
        is_anonymous=anonymous,
        submitted_by_user_id=None if anonymous else user.id,
        status=PENDING,
        created_at=now,
        updated_at=now,
    )
    s.add(fb)
    s.flush()

    record_event(
        s,
        actor=None if anonymous else user,
        action="feedback.submit",
        entity_type="Feedback",
        entity_id=str(fb.id),
        metadata={"category": fb.category, "anonymous": anonymous},
    )
    return fb


def resolve_feedback(s: "Session", fb: "Feedback", user: "User") -> "Feedback":
    old, new = apply_transition(fb, FEEDBACK_TRANSITIONS, "resolve", user, owner_attr="submitted_by_user_id")
    fb.updated_at = datetime.utcnow()
    record_event(
        s,
        actor=user,
        action="feedback.resolve",
        entity_type="Feedback",
        entity_id=str(fb.id),
        metadata={"old_status": old, "new_status": new},
    )
    return fb


def feedback_stats(s: "Session") -> dict:
    from app.campushub.modules.feedback.models import Feedback

    by_status = (
        s.query(Feedback.status, func.count(Feedback.id))
        .group_by(Feedback.status)
        .order_by(Feedback.status.asc())
        .all()
    )
    by_category = (
        s.query(Feedback.category, func.count(Feedback.id))
        .group_by(Feedback.category)
        .order_by(Feedback.category.asc())
        .all()
    )
    return {
        "byStatus": [{"status": status, "count": count} for status, count in by_status],
        "byCategory": [{"category": category, "count": count} for category, count in by_category],
    }


def serialize_feedback(fb: "Feedback", *, with_email: bool = False) -> dict:
    return {
        "id": fb.id,
        "subject": fb.subject,
        "message": fb.message,
        "category": fb.category,
        "isAnonymous": fb.is_anonymous,
        "submittedBy": None if fb.is_anonymous else owner_summary(fb.submitted_by, with_email=with_email),
        "status": fb.status,
        "createdAt": iso(fb.created_at),
        "updatedAt": iso(fb.updated_at),
    }
