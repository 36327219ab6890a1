from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from app.campushub.audit import record_event
from app.campushub.constants import EVENT_CATEGORIES
from app.campushub.models import owner_summary
from app.campushub.responses import iso
from app.campushub.validation import check_choice, check_date, check_required, optional_text, parse_date, text

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from app.campushub.models import User
    from app.campushub.modules.events.models import Event


def validate_event_payload(payload: dict) -> list[str]:
    """Validate event creation/update payload. Returns list of errors."""
    errors: list[str] = []
    check_required(errors, payload, "title", "Title is required", max_len=200, too_long="Title cannot be more than 200 characters")
    check_required(errors, payload, "description", "Description is required")
    check_date(errors, payload, "date", required=True, missing="Event date is required")
    check_required(errors, payload, "time", "Event time is required")
    check_required(errors, payload, "venue", "Venue is required")
    check_choice(errors, payload, "category", EVENT_CATEGORIES, "Invalid category")
    return errors


def create_event(s: "Session", payload: dict, user: "User") -> "Event":
    from app.campushub.modules.events.models import Event

    now = datetime.utcnow()
    event = Event(
        title=text(payload, "title"),
        description=text(payload, "description"),
        event_date=parse_date(payload.get("date")),
        time=text(payload, "time"),
        venue=text(payload, "venue"),
        organizer=optional_text(payload, "organizer"),
        category=text(payload, "category") or "Cultural",
        posted_by_user_id=user.id,
        created_at=now,
        updated_at=now,
    )
    s.add(event)
    s.flush()

    record_event(
        s,
        actor=user,
        action="event.create",
        entity_type="Event",
        entity_id=str(event.id),
        metadata={"title": event.title, "date": str(event.event_date)},
    )
    return event


def update_event(s: "Session", event: "Event", payload: dict, user: "User") -> "Event":
    changes = {}

    for attr in ("title", "description", "time", "venue", "category"):
        new = text(payload, attr)
        if new and new != getattr(event, attr):
            changes[attr] = {"old": getattr(event, attr), "new": new}
            setattr(event, attr, new)

    if "organizer" in payload:
        new_organizer = optional_text(payload, "organizer")
        if new_organizer != event.organizer:
            changes["organizer"] = {"old": event.organizer, "new": new_organizer}
            event.organizer = new_organizer

    new_date = parse_date(payload.get("date"))
    if new_date and new_date != event.event_date:
        changes["date"] = {"old": str(event.event_date), "new": str(new_date)}
        event.event_date = new_date

    event.updated_at = datetime.utcnow()

    record_event(
        s,
        actor=user,
        action="event.edit",
        entity_type="Event",
        entity_id=str(event.id),
        metadata={"title": event.title, "changes": changes},
    )
    return event


def delete_event(s: "Session", event: "Event", user: "User") -> None:
    record_event(
        s,
        actor=user,
        action="event.delete",
        entity_type="Event",
        entity_id=str(event.id),
        metadata={"title": event.title},
    )
    s.delete(event)


def serialize_event(event: "Event", *, with_email: bool = False) -> dict:
    return {
        "id": event.id,
        "title": event.title,
        "description": event.description,
        "date": iso(event.event_date),
        "time": event.time,
        "venue": event.venue,
        "organizer": event.organizer,
        "category": event.category,
        "postedBy": owner_summary(event.posted_by, with_email=with_email),
        "createdAt": iso(event.created_at),
        "updatedAt": iso(event.updated_at),
    }
