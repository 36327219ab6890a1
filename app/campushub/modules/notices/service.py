from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from app.campushub.audit import record_event
from app.campushub.constants import NOTICE_CATEGORIES
from app.campushub.models import owner_summary
from app.campushub.responses import iso
from app.campushub.validation import check_choice, check_date, check_required, parse_bool, parse_date, text

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from app.campushub.models import User
    from app.campushub.modules.notices.models import Notice


def validate_notice_payload(payload: dict) -> list[str]:
    """Validate notice creation/update payload. Returns list of errors."""
    errors: list[str] = []
    check_required(errors, payload, "title", "Title is required", max_len=200, too_long="Title cannot be more than 200 characters")
    check_required(errors, payload, "description", "Description is required")
    check_choice(errors, payload, "category", NOTICE_CATEGORIES, "Invalid category")
    check_date(errors, payload, "expiryDate", invalid="Invalid expiry date format")
    return errors


def create_notice(s: "Session", payload: dict, user: "User") -> "Notice":
    from app.campushub.modules.notices.models import Notice

    now = datetime.utcnow()
    notice = Notice(
        title=text(payload, "title"),
        description=text(payload, "description"),
        category=text(payload, "category") or "General",
        is_active=parse_bool(payload.get("isActive"), default=True),
        expiry_date=parse_date(payload.get("expiryDate")),
        posted_by_user_id=user.id,
        created_at=now,
        updated_at=now,
    )
    s.add(notice)
    s.flush()

    record_event(
        s,
        actor=user,
        action="notice.create",
        entity_type="Notice",
        entity_id=str(notice.id),
        metadata={"title": notice.title, "category": notice.category},
    )
    return notice


def update_notice(s: "Session", notice: "Notice", payload: dict, user: "User") -> "Notice":
    """Apply submitted fields; fields left out of the payload keep their value."""
    changes = {}

    for attr, key in (("title", "title"), ("description", "description"), ("category", "category")):
        new = text(payload, key)
        if new and new != getattr(notice, attr):
            changes[attr] = {"old": getattr(notice, attr), "new": new}
            setattr(notice, attr, new)

    if "isActive" in payload:
        new_active = parse_bool(payload.get("isActive"), default=notice.is_active)
        if new_active != notice.is_active:
            changes["is_active"] = {"old": notice.is_active, "new": new_active}
            notice.is_active = new_active

    if "expiryDate" in payload:
        new_expiry = parse_date(payload.get("expiryDate"))
        if new_expiry != notice.expiry_date:
            changes["expiry_date"] = {"old": str(notice.expiry_date), "new": str(new_expiry)}
            notice.expiry_date = new_expiry

    notice.updated_at = datetime.utcnow()

    record_event(
        s,
        actor=user,
        action="notice.edit",
        entity_type="Notice",
        entity_id=str(notice.id),
        metadata={"title": notice.title, "changes": changes},
    )
    return notice


def delete_notice(s: "Session", notice: "Notice", user: "User") -> None:
    record_event(
        s,
        actor=user,
        action="notice.delete",
        entity_type="Notice",
        entity_id=str(notice.id),
        metadata={"title": notice.title},
    )
    s.delete(notice)


def serialize_notice(notice: "Notice", *, with_email: bool = False) -> dict:
    return {
        "id": notice.id,
        "title": notice.title,
        "description": notice.description,
        "category": notice.category,
        "isActive": notice.is_active,
        "expiryDate": iso(notice.expiry_date),
        "postedBy": owner_summary(notice.posted_by, with_email=with_email),
        "createdAt": iso(notice.created_at),
        "updatedAt": iso(notice.updated_at),
    }
