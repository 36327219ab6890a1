from datetime import date, timedelta

import pytest


def _event(**overrides):
    payload = {
        "title": "Tech Talk",
        "description": "Intro to compilers",
        "date": "2026-11-05",
        "time": "10:00 AM",
        "venue": "Auditorium",
        "organizer": "CS Society",
        "category": "Technical",
    }
    payload.update(overrides)
    return payload


def _create(client, headers, **overrides):
    r = client.post("/api/events", headers=headers, json=_event(**overrides))
    assert r.status_code == 201, r.json
    return r.json["data"]


@pytest.mark.parametrize(
    "missing,message",
    [
        ("title", "Title is required"),
        ("date", "Event date is required"),
        ("time", "Event time is required"),
        ("venue", "Venue is required"),
    ],
)
def test_required_fields(client, admin_headers, missing, message):
    r = client.post("/api/events", headers=admin_headers, json=_event(**{missing: ""}))
    assert r.status_code == 400
    assert r.json["message"] == message


def test_create_is_admin_only(client, student_headers):
    r = client.post("/api/events", headers=student_headers, json=_event())
    assert r.status_code == 403


def test_list_orders_by_date_and_filters_range(client, admin_headers):
    _create(client, admin_headers, title="Late", date="2026-12-20", category="Sports")
    _create(client, admin_headers, title="Early", date="2026-11-01")
    _create(client, admin_headers, title="Middle", date="2026-11-15", description="Hackathon kickoff")

    r = client.get("/api/events")
    assert [e["title"] for e in r.json["data"]["events"]] == ["Early", "Middle", "Late"]

    # Both bounds are inclusive.
    r = client.get("/api/events?startDate=2026-11-01&endDate=2026-11-15")
    assert [e["title"] for e in r.json["data"]["events"]] == ["Early", "Middle"]

    r = client.get("/api/events?category=Sports")
    assert [e["title"] for e in r.json["data"]["events"]] == ["Late"]

    r = client.get("/api/events?search=hackathon")
    assert [e["title"] for e in r.json["data"]["events"]] == ["Middle"]

    r = client.get("/api/events?startDate=next-week")
    assert r.status_code == 400


def test_upcoming(client, admin_headers):
    today = date.today()
    _create(client, admin_headers, title="Yesterday", date=(today - timedelta(days=1)).isoformat())
    _create(client, admin_headers, title="Today", date=today.isoformat())
    for i in range(1, 7):
        _create(client, admin_headers, title=f"Day {i}", date=(today + timedelta(days=i)).isoformat())

    r = client.get("/api/events/upcoming")
    assert r.status_code == 200
    assert [e["title"] for e in r.json["data"]] == ["Today", "Day 1", "Day 2", "Day 3", "Day 4"]

    r = client.get("/api/events/upcoming?limit=2")
    assert len(r.json["data"]) == 2


def test_update_delete_and_detail(client, admin_headers):
    event = _create(client, admin_headers)
    assert event["postedBy"]["name"] == "Ada Admin"

    r = client.put(f"/api/events/{event['id']}", headers=admin_headers, json=_event(venue="Hall B", date="2026-11-06"))
    assert r.status_code == 200
    assert r.json["data"]["venue"] == "Hall B"
    assert r.json["data"]["date"] == "2026-11-06"

    assert client.get(f"/api/events/{event['id']}").json["data"]["venue"] == "Hall B"

    r = client.delete(f"/api/events/{event['id']}", headers=admin_headers)
    assert r.status_code == 200
    r = client.get(f"/api/events/{event['id']}")
    assert r.status_code == 404
    assert r.json["message"] == "Event not found"
