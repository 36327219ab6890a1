from __future__ import annotations

from flask import Blueprint, request

from app.campushub.db import db_session, get_or_404
from app.campushub.lifecycle import APPROVED
from app.campushub.modules.lostfound.models import LostAndFound
from app.campushub.modules.lostfound.service import (
    create_post,
    delete_post,
    serialize_post,
    transition_post,
    update_post,
    validate_post_payload,
)
from app.campushub.pagination import apply_equals, apply_search, paginate, parse_page_args
from app.campushub.rbac import current_user, require_admin, require_auth, require_owner_or_admin
from app.campushub.responses import created, ok
from app.campushub.validation import json_body, raise_first

bp = Blueprint("lostfound", __name__)


def _filtered_posts(*, include_status_filter: bool):
    s = db_session()
    q = s.query(LostAndFound)
    q = apply_equals(q, LostAndFound.type, request.args.get("type"))
    q = apply_equals(q, LostAndFound.category, request.args.get("category"))
    if include_status_filter:
        q = apply_equals(q, LostAndFound.status, request.args.get("status"))
    q = apply_search(q, request.args.get("search"), LostAndFound.item_name, LostAndFound.description)
    return q


# ---------- Public feed (approved only) ----------
@bp.get("")
def posts_list():
    page, limit = parse_page_args(request.args)
    q = _filtered_posts(include_status_filter=False).filter(LostAndFound.status == APPROVED)
    q = q.order_by(LostAndFound.created_at.desc(), LostAndFound.id.desc())

    result = paginate(q, page, limit)
    return ok(
        "Posts retrieved successfully",
        {"posts": [serialize_post(p) for p in result.items], "pagination": result.pagination()},
    )


# ---------- Own posts ----------
@bp.get("/my-posts")
@require_auth
def posts_mine():
    s = db_session()
    posts = (
        s.query(LostAndFound)
        .filter(LostAndFound.posted_by_user_id == current_user().id)
        .order_by(LostAndFound.created_at.desc(), LostAndFound.id.desc())
        .all()
    )
    return ok("Your posts retrieved successfully", [serialize_post(p) for p in posts])


# ---------- Moderation queue ----------
@bp.get("/all")
@require_admin
def posts_all():
    page, limit = parse_page_args(request.args)
    q = _filtered_posts(include_status_filter=True)
    q = q.order_by(LostAndFound.created_at.desc(), LostAndFound.id.desc())

    result = paginate(q, page, limit)
    return ok(
        "All posts retrieved successfully",
        {"posts": [serialize_post(p, with_email=True) for p in result.items], "pagination": result.pagination()},
    )


# ---------- Detail ----------
@bp.get("/<int:post_id>")
def post_detail(post_id: int):
    post = get_or_404(db_session(), LostAndFound, post_id, "Post")
    return ok("Post retrieved successfully", serialize_post(post))


# ---------- New ----------
@bp.post("")
@require_auth
def post_create():
    payload = json_body()
    raise_first(validate_post_payload(payload))

    s = db_session()
    post = create_post(s, payload, current_user())
    s.commit()
    return created("Post created successfully. It will be visible after admin approval.", serialize_post(post))


# ---------- Edit ----------
@bp.put("/<int:post_id>")
@require_auth
def post_update(post_id: int):
    payload = json_body()
    raise_first(validate_post_payload(payload))

    s = db_session()
    u = current_user()
    post = get_or_404(s, LostAndFound, post_id, "Post")
    require_owner_or_admin(u, post, message="Not authorized to update this post")
    update_post(s, post, payload, u)
    s.commit()
    return ok("Post updated successfully", serialize_post(post))


# ---------- Delete ----------
@bp.delete("/<int:post_id>")
@require_auth
def post_delete(post_id: int):
    s = db_session()
    u = current_user()
    post = get_or_404(s, LostAndFound, post_id, "Post")
    require_owner_or_admin(u, post, message="Not authorized to delete this post")
    delete_post(s, post, u)
    s.commit()
    return ok("Post deleted successfully")


# ---------- Status transitions ----------
@bp.patch("/<int:post_id>/approve")
@require_admin
def post_approve(post_id: int):
    return _transition(post_id, "approve", "Post approved successfully")


@bp.patch("/<int:post_id>/reject")
@require_admin
def post_reject(post_id: int):
    return _transition(post_id, "reject", "Post rejected")


@bp.patch("/<int:post_id>/claim")
@require_auth
def post_claim(post_id: int):
    return _transition(post_id, "claim", "Post marked as claimed")


def _transition(post_id: int, action: str, message: str):
    s = db_session()
    post = get_or_404(s, LostAndFound, post_id, "Post")
    transition_post(s, post, action, current_user())
    s.commit()
    return ok(message, serialize_post(post))
