from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from app.campushub.audit import record_event
from app.campushub.constants import LOST_FOUND_CATEGORIES, LOST_FOUND_TYPES
from app.campushub.lifecycle import LOST_FOUND_TRANSITIONS, PENDING, apply_transition, status_after_edit
from app.campushub.models import owner_summary
from app.campushub.responses import iso
from app.campushub.validation import check_choice, check_date, check_required, optional_text, parse_date, text

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from app.campushub.models import User
    from app.campushub.modules.lostfound.models import LostAndFound


def validate_post_payload(payload: dict) -> list[str]:
    """Validate post creation/update payload. Returns list of errors."""
    errors: list[str] = []
    check_choice(
        errors, payload, "type", LOST_FOUND_TYPES, "Type must be either lost or found", required=True, missing="Type is required"
    )
    check_required(
        errors, payload, "itemName", "Item name is required", max_len=100, too_long="Item name cannot be more than 100 characters"
    )
    check_required(errors, payload, "description", "Description is required")
    check_required(errors, payload, "contactInfo", "Contact information is required")
    check_choice(errors, payload, "category", LOST_FOUND_CATEGORIES, "Invalid category")
    check_date(errors, payload, "date")
    # "status" is resolved by status_after_edit, never rejected here.
    return errors


def create_post(s: "Session", payload: dict, user: "User") -> "LostAndFound":
    """Create a post. Any submitted status is ignored: posts always start pending."""
    from app.campushub.modules.lostfound.models import LostAndFound

    now = datetime.utcnow()
    post = LostAndFound(
        type=text(payload, "type"),
        item_name=text(payload, "itemName"),
        description=text(payload, "description"),
        category=text(payload, "category") or "Other",
        location=optional_text(payload, "location"),
        item_date=parse_date(payload.get("date")),
        contact_info=text(payload, "contactInfo"),
        image_url=optional_text(payload, "imageUrl"),
        status=PENDING,
        posted_by_user_id=user.id,
        created_at=now,
        updated_at=now,
    )
    s.add(post)
    s.flush()

    record_event(
        s,
        actor=user,
        action="lostfound.create",
        entity_type="LostAndFound",
        entity_id=str(post.id),
        metadata={"item_name": post.item_name, "type": post.type},
    )
    return post


def update_post(s: "Session", post: "LostAndFound", payload: dict, user: "User") -> "LostAndFound":
    """
    Apply an owner/admin edit. Ownership is checked by the caller.

    The owner reference is never touched; non-admin edits send the post back
    to moderation.
    """
    changes = {}

    for attr, key in (
        ("type", "type"),
        ("item_name", "itemName"),
        ("description", "description"),
        ("contact_info", "contactInfo"),
        ("category", "category"),
    ):
        new = text(payload, key)
        if new and new != getattr(post, attr):
            changes[attr] = {"old": getattr(post, attr), "new": new}
            setattr(post, attr, new)

    for attr, key in (("location", "location"), ("image_url", "imageUrl")):
        if key in payload:
            new_opt = optional_text(payload, key)
            if new_opt != getattr(post, attr):
                changes[attr] = {"old": getattr(post, attr), "new": new_opt}
                setattr(post, attr, new_opt)

    if "date" in payload:
        new_date = parse_date(payload.get("date"))
        if new_date != post.item_date:
            changes["date"] = {"old": str(post.item_date), "new": str(new_date)}
            post.item_date = new_date

    new_status = status_after_edit(user, post.status, text(payload, "status") or None)
    if new_status != post.status:
        changes["status"] = {"old": post.status, "new": new_status}
        post.status = new_status

    post.updated_at = datetime.utcnow()

    record_event(
        s,
        actor=user,
        action="lostfound.edit",
        entity_type="LostAndFound",
        entity_id=str(post.id),
        metadata={"item_name": post.item_name, "changes": changes},
    )
    return post


def delete_post(s: "Session", post: "LostAndFound", user: "User") -> None:
    record_event(
        s,
        actor=user,
        action="lostfound.delete",
        entity_type="LostAndFound",
        entity_id=str(post.id),
        metadata={"item_name": post.item_name, "status": post.status},
    )
    s.delete(post)


def transition_post(s: "Session", post: "LostAndFound", action: str, user: "User") -> "LostAndFound":
    """approve / reject / claim. Idempotent; gated by role or ownership only."""
    old, new = apply_transition(post, LOST_FOUND_TRANSITIONS, action, user)
    post.updated_at = datetime.utcnow()
    record_event(
        s,
        actor=user,
        action=f"lostfound.{action}",
        entity_type="LostAndFound",
        entity_id=str(post.id),
        metadata={"old_status": old, "new_status": new},
    )
    return post


def serialize_post(post: "LostAndFound", *, with_email: bool = False) -> dict:
    return {
        "id": post.id,
        "type": post.type,
        "itemName": post.item_name,
        "description": post.description,
        "category": post.category,
        "location": post.location,
        "date": iso(post.item_date),
        "contactInfo": post.contact_info,
        "imageUrl": post.image_url,
        "status": post.status,
        "postedBy": owner_summary(post.posted_by, with_email=with_email),
        "createdAt": iso(post.created_at),
        "updatedAt": iso(post.updated_at),
    }
