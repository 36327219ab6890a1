from __future__ import annotations

from flask import Blueprint, request

from app.campushub.db import db_session, get_or_404
from app.campushub.modules.notices.models import Notice
from app.campushub.modules.notices.service import (
    create_notice,
    delete_notice,
    serialize_notice,
    update_notice,
    validate_notice_payload,
)
from app.campushub.pagination import apply_equals, apply_search, paginate, parse_page_args
from app.campushub.rbac import current_user, require_admin
from app.campushub.responses import created, ok
from app.campushub.validation import json_body, raise_first

bp = Blueprint("notices", __name__)


# ---------- List ----------
@bp.get("")
def notices_list():
    s = db_session()
    page, limit = parse_page_args(request.args)

    q = s.query(Notice).filter(Notice.is_active.is_(True))
    q = apply_equals(q, Notice.category, request.args.get("category"))
    q = apply_search(q, request.args.get("search"), Notice.title, Notice.description)
    q = q.order_by(Notice.created_at.desc(), Notice.id.desc())

    result = paginate(q, page, limit)
    return ok(
        "Notices retrieved successfully",
        {"notices": [serialize_notice(n) for n in result.items], "pagination": result.pagination()},
    )


# ---------- Detail ----------
@bp.get("/<int:notice_id>")
def notice_detail(notice_id: int):
    notice = get_or_404(db_session(), Notice, notice_id, "Notice")
    return ok("Notice retrieved successfully", serialize_notice(notice))


# ---------- New ----------
@bp.post("")
@require_admin
def notice_create():
    payload = json_body()
    raise_first(validate_notice_payload(payload))

    s = db_session()
    notice = create_notice(s, payload, current_user())
    s.commit()
    return created("Notice created successfully", serialize_notice(notice))


# ---------- Edit ----------
@bp.put("/<int:notice_id>")
@require_admin
def notice_update(notice_id: int):
    payload = json_body()
    raise_first(validate_notice_payload(payload))

    s = db_session()
    notice = get_or_404(s, Notice, notice_id, "Notice")
    update_notice(s, notice, payload, current_user())
    s.commit()
    return ok("Notice updated successfully", serialize_notice(notice))


# ---------- Delete ----------
@bp.delete("/<int:notice_id>")
@require_admin
def notice_delete(notice_id: int):
    s = db_session()
    notice = get_or_404(s, Notice, notice_id, "Notice")
    delete_notice(s, notice, current_user())
    s.commit()
    return ok("Notice deleted successfully")
