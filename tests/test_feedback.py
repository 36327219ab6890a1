from app.campushub.db import session_scope
from app.campushub.models import AuditEvent
from app.campushub.modules.feedback.models import Feedback


def _submit(client, headers, **overrides):
    payload = {"subject": "Wifi in hostel", "message": "Drops every evening", "category": "Infrastructure"}
    payload.update(overrides)
    r = client.post("/api/feedback", headers=headers, json=payload)
    assert r.status_code == 201, r.json
    return r.json["data"]


def test_submit_requires_auth(client):
    r = client.post("/api/feedback", json={"subject": "Hi", "message": "There"})
    assert r.status_code == 401


def test_submit_validation(client, student_headers):
    r = client.post("/api/feedback", headers=student_headers, json={"message": "No subject"})
    assert r.status_code == 400
    assert r.json["message"] == "Subject is required"

    r = client.post("/api/feedback", headers=student_headers, json={"subject": "Hi", "message": "x", "category": "Food"})
    assert r.json["message"] == "Invalid category"


def test_named_feedback_records_submitter(client, student_headers):
    fb = _submit(client, student_headers)
    assert fb["status"] == "pending"
    assert fb["isAnonymous"] is False
    assert fb["submittedBy"]["name"] == "Sam Student"


def test_anonymous_feedback_drops_submitter(app, client, admin_headers, student_headers):
    fb = _submit(client, student_headers, isAnonymous=True, submittedBy=1)
    assert fb["submittedBy"] is None

    with session_scope(app) as s:
        row = s.get(Feedback, fb["id"])
        assert row.submitted_by_user_id is None
        ev = s.query(AuditEvent).filter(AuditEvent.action == "feedback.submit").one()
        assert ev.actor_user_id is None

    r = client.patch(f"/api/feedback/{fb['id']}/resolve", headers=admin_headers)
    assert r.status_code == 200
    assert r.json["message"] == "Feedback marked as resolved"
    assert r.json["data"]["status"] == "resolved"
    assert r.json["data"]["submittedBy"] is None

    r = client.patch(f"/api/feedback/{fb['id']}/resolve", headers=admin_headers)
    assert r.status_code == 200
    assert r.json["data"]["status"] == "resolved"


def test_resolve_is_admin_only(client, student_headers):
    fb = _submit(client, student_headers)
    r = client.patch(f"/api/feedback/{fb['id']}/resolve", headers=student_headers)
    assert r.status_code == 403


def test_list_is_admin_only_and_filters(client, admin_headers, student_headers):
    _submit(client, student_headers)
    second = _submit(client, student_headers, subject="Canteen hours", message="Open later please", category="Services")
    client.patch(f"/api/feedback/{second['id']}/resolve", headers=admin_headers)

    r = client.get("/api/feedback", headers=student_headers)
    assert r.status_code == 403

    r = client.get("/api/feedback", headers=admin_headers)
    assert r.status_code == 200
    assert r.json["data"]["pagination"]["count"] == 2
    assert r.json["data"]["feedback"][0]["subject"] == "Canteen hours"
    assert r.json["data"]["feedback"][0]["submittedBy"]["email"] == "sam@example.com"

    r = client.get("/api/feedback?status=resolved", headers=admin_headers)
    assert [f["subject"] for f in r.json["data"]["feedback"]] == ["Canteen hours"]

    r = client.get("/api/feedback?category=Infrastructure&search=drops", headers=admin_headers)
    assert [f["subject"] for f in r.json["data"]["feedback"]] == ["Wifi in hostel"]


def test_stats(client, admin_headers, student_headers):
    _submit(client, student_headers)
    _submit(client, student_headers, category="Services")
    third = _submit(client, student_headers, category="Services")
    client.patch(f"/api/feedback/{third['id']}/resolve", headers=admin_headers)

    r = client.get("/api/feedback/stats", headers=student_headers)
    assert r.status_code == 403

    r = client.get("/api/feedback/stats", headers=admin_headers)
    assert r.status_code == 200
    assert r.json["data"] == {
        "byStatus": [{"status": "pending", "count": 2}, {"status": "resolved", "count": 1}],
        "byCategory": [{"category": "Infrastructure", "count": 1}, {"category": "Services", "count": 2}],
    }
