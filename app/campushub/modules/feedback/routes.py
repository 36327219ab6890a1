from __future__ import annotations

from flask import Blueprint, request

from app.campushub.db import db_session, get_or_404
from app.campushub.modules.feedback.models import Feedback
from app.campushub.modules.feedback.service import (
    feedback_stats,
    resolve_feedback,
    serialize_feedback,
    submit_feedback,
    validate_feedback_payload,
)
from app.campushub.pagination import apply_equals, apply_search, paginate, parse_page_args
from app.campushub.rbac import current_user, require_admin, require_auth
from app.campushub.responses import created, ok
from app.campushub.validation import json_body, raise_first

bp = Blueprint("feedback", __name__)


@bp.get("")
@require_admin
def feedback_list():
    s = db_session()
    page, limit = parse_page_args(request.args)

    q = s.query(Feedback)
    q = apply_equals(q, Feedback.category, request.args.get("category"))
    q = apply_equals(q, Feedback.status, request.args.get("status"))
    q = apply_search(q, request.args.get("search"), Feedback.subject, Feedback.message)
    q = q.order_by(Feedback.created_at.desc(), Feedback.id.desc())

    result = paginate(q, page, limit)
    return ok(
        "Feedback retrieved successfully",
        {"feedback": [serialize_feedback(f, with_email=True) for f in result.items], "pagination": result.pagination()},
    )


@bp.get("/stats")
@require_admin
def feedback_stats_view():
    return ok("Feedback statistics retrieved successfully", feedback_stats(db_session()))


@bp.post("")
@require_auth
def feedback_submit():
    payload = json_body()
    raise_first(validate_feedback_payload(payload))

    s = db_session()
    fb = submit_feedback(s, payload, current_user())
    s.commit()
    return created("Feedback submitted successfully", serialize_feedback(fb))


@bp.patch("/<int:feedback_id>/resolve")
@require_admin
def feedback_resolve(feedback_id: int):
    s = db_session()
    fb = get_or_404(s, Feedback, feedback_id, "Feedback")
    resolve_feedback(s, fb, current_user())
    s.commit()
    return ok("Feedback marked as resolved", serialize_feedback(fb, with_email=True))
