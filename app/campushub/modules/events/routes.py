from __future__ import annotations

from datetime import date

from flask import Blueprint, request

from app.campushub.constants import UPCOMING_EVENTS_LIMIT
from app.campushub.db import db_session, get_or_404
from app.campushub.modules.events.models import Event
from app.campushub.modules.events.service import (
    create_event,
    delete_event,
    serialize_event,
    update_event,
    validate_event_payload,
)
from app.campushub.pagination import (
    apply_date_range,
    apply_equals,
    apply_search,
    paginate,
    parse_date_arg,
    parse_page_args,
)
from app.campushub.rbac import current_user, require_admin
from app.campushub.responses import created, ok
from app.campushub.validation import json_body, raise_first

bp = Blueprint("events", __name__)


# ---------- List ----------
@bp.get("")
def events_list():
    s = db_session()
    page, limit = parse_page_args(request.args)
    start = parse_date_arg(request.args.get("startDate"), "startDate")
    end = parse_date_arg(request.args.get("endDate"), "endDate")

    q = s.query(Event)
    q = apply_equals(q, Event.category, request.args.get("category"))
    q = apply_search(q, request.args.get("search"), Event.title, Event.description)
    q = apply_date_range(q, Event.event_date, start, end)
    # Events read in calendar order, not posting order.
    q = q.order_by(Event.event_date.asc(), Event.id.asc())

    result = paginate(q, page, limit)
    return ok(
        "Events retrieved successfully",
        {"events": [serialize_event(e) for e in result.items], "pagination": result.pagination()},
    )


@bp.get("/upcoming")
def events_upcoming():
    s = db_session()
    _, limit = parse_page_args(request.args, default_limit=UPCOMING_EVENTS_LIMIT)
    events = (
        s.query(Event)
        .filter(Event.event_date >= date.today())
        .order_by(Event.event_date.asc(), Event.id.asc())
        .limit(limit)
        .all()
    )
    return ok("Upcoming events retrieved successfully", [serialize_event(e) for e in events])


# ---------- Detail ----------
@bp.get("/<int:event_id>")
def event_detail(event_id: int):
    event = get_or_404(db_session(), Event, event_id, "Event")
    return ok("Event retrieved successfully", serialize_event(event))


# ---------- New ----------
@bp.post("")
@require_admin
def event_create():
    payload = json_body()
    raise_first(validate_event_payload(payload))

    s = db_session()
    event = create_event(s, payload, current_user())
    s.commit()
    return created("Event created successfully", serialize_event(event))


# ---------- Edit ----------
@bp.put("/<int:event_id>")
@require_admin
def event_update(event_id: int):
    payload = json_body()
    raise_first(validate_event_payload(payload))

    s = db_session()
    event = get_or_404(s, Event, event_id, "Event")
    update_event(s, event, payload, current_user())
    s.commit()
    return ok("Event updated successfully", serialize_event(event))


# ---------- Delete ----------
@bp.delete("/<int:event_id>")
@require_admin
def event_delete(event_id: int):
    s = db_session()
    event = get_or_404(s, Event, event_id, "Event")
    delete_event(s, event, current_user())
    s.commit()
    return ok("Event deleted successfully")
