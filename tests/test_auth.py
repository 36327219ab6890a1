"""Tests for registration, login and admin account management."""
from app.campushub.db import session_scope
from app.campushub.models import AuditEvent, User


def test_register_login_and_wrong_password(client):
    r = client.post("/api/auth/register", json={"name": "Ann", "email": "Ann@Example.com", "password": "secret1"})
    assert r.status_code == 201
    assert r.json["success"] is True
    data = r.json["data"]
    assert data["token"]
    assert data["user"]["email"] == "ann@example.com"
    assert data["user"]["role"] == "student"
    ann_id = data["user"]["id"]

    r = client.post("/api/auth/login", json={"email": "ann@example.com", "password": "secret1"})
    assert r.status_code == 200
    assert r.json["data"]["user"]["id"] == ann_id

    r = client.post("/api/auth/login", json={"email": "ann@example.com", "password": "wrong-pass"})
    assert r.status_code == 401
    assert r.json == {"success": False, "message": "Invalid credentials", "data": None}


def test_register_ignores_requested_role(client):
    r = client.post(
        "/api/auth/register",
        json={"name": "Mallory", "email": "mallory@example.com", "password": "secret1", "role": "admin"},
    )
    assert r.status_code == 201
    assert r.json["data"]["user"]["role"] == "student"


def test_register_validation_first_error_only(client):
    r = client.post("/api/auth/register", json={"email": "bad", "password": "1"})
    assert r.status_code == 400
    assert r.json["message"] == "Name is required"

    r = client.post("/api/auth/register", json={"name": "Ann", "email": "ann@example.com", "password": "123"})
    assert r.status_code == 400
    assert r.json["message"] == "Password must be at least 6 characters"

    r = client.post("/api/auth/register", json={"name": "x" * 51, "email": "ann@example.com", "password": "secret1"})
    assert r.json["message"] == "Name cannot be more than 50 characters"


def test_register_duplicate_email(client):
    r = client.post("/api/auth/register", json={"name": "Sam", "email": "SAM@example.com", "password": "secret1"})
    assert r.status_code == 400
    assert r.json["message"] == "User already exists with this email"


def test_me_requires_valid_token(client, student_headers):
    r = client.get("/api/auth/me")
    assert r.status_code == 401
    assert r.json["message"] == "Not authorized to access this route"

    r = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert r.status_code == 401

    r = client.get("/api/auth/me", headers=student_headers)
    assert r.status_code == 200
    assert r.json["data"]["email"] == "sam@example.com"
    assert r.json["data"]["enrollmentNumber"] == "CS-001"
    assert "passwordHash" not in r.json["data"]


def test_token_for_deleted_user(app, client, student_headers):
    with session_scope(app) as s:
        s.delete(s.query(User).filter(User.email == "sam@example.com").one())
    r = client.get("/api/auth/me", headers=student_headers)
    assert r.status_code == 401
    assert r.json["message"] == "User no longer exists"


def test_logout_is_acknowledged(client, student_headers):
    r = client.post("/api/auth/logout", headers=student_headers)
    assert r.status_code == 200
    assert r.json["data"] is None


def test_failed_login_is_audited(app, client):
    client.post("/api/auth/login", json={"email": "sam@example.com", "password": "nope-nope"})
    with session_scope(app) as s:
        ev = s.query(AuditEvent).filter(AuditEvent.action == "auth.login_failed").one()
        assert ev.actor_user_id is None
        assert ev.request_id


def test_admin_management(client, admin_headers, student_headers):
    r = client.get("/api/auth/admins", headers=student_headers)
    assert r.status_code == 403
    assert r.json["message"] == "User role student is not authorized to access this route"

    r = client.post(
        "/api/auth/create-admin",
        headers=admin_headers,
        json={"name": "Second Admin", "email": "second@example.com", "password": "secret1"},
    )
    assert r.status_code == 201
    assert r.json["data"]["role"] == "admin"
    assert r.json["data"]["department"] == "Administration"
    second_id = r.json["data"]["id"]

    r = client.get("/api/auth/admins", headers=admin_headers)
    assert r.status_code == 200
    assert {a["email"] for a in r.json["data"]} == {"admin@example.com", "second@example.com"}

    r = client.delete(f"/api/auth/admins/{second_id}", headers=admin_headers)
    assert r.status_code == 200

    r = client.delete(f"/api/auth/admins/{second_id}", headers=admin_headers)
    assert r.status_code == 404
    assert r.json["message"] == "Admin not found"


def test_admin_cannot_delete_self(client, admin_headers):
    me = client.get("/api/auth/me", headers=admin_headers).json["data"]
    r = client.delete(f"/api/auth/admins/{me['id']}", headers=admin_headers)
    assert r.status_code == 400
    assert r.json["message"] == "You cannot delete your own account"

    r = client.get("/api/auth/me", headers=admin_headers)
    assert r.status_code == 200


def test_delete_admin_rejects_students(client, admin_headers):
    r = client.post("/api/auth/login", json={"email": "olu@example.com", "password": "password123"})
    olu_id = r.json["data"]["user"]["id"]
    r = client.delete(f"/api/auth/admins/{olu_id}", headers=admin_headers)
    assert r.status_code == 400
    assert r.json["message"] == "User is not an admin"


def test_deleted_admin_id_is_never_reused(client, admin_headers):
    r = client.post(
        "/api/auth/create-admin",
        headers=admin_headers,
        json={"name": "Temp Admin", "email": "temp@example.com", "password": "secret1"},
    )
    temp_id = r.json["data"]["id"]
    r = client.post("/api/auth/login", json={"email": "temp@example.com", "password": "secret1"})
    temp_headers = {"Authorization": f"Bearer {r.json['data']['token']}"}

    r = client.post(
        "/api/lostfound",
        headers=temp_headers,
        json={"type": "found", "itemName": "Laptop", "description": "Lab 3", "contactInfo": "front desk"},
    )
    post_id = r.json["data"]["id"]

    assert client.delete(f"/api/auth/admins/{temp_id}", headers=admin_headers).status_code == 200

    r = client.post("/api/auth/register", json={"name": "Eve", "email": "eve@example.com", "password": "secret1"})
    eve_id = r.json["data"]["user"]["id"]
    eve_headers = {"Authorization": f"Bearer {r.json['data']['token']}"}
    assert eve_id != temp_id

    r = client.get("/api/auth/me", headers=temp_headers)
    assert r.status_code == 401
    assert r.json["message"] == "User no longer exists"

    r = client.get(f"/api/lostfound/{post_id}")
    assert r.status_code == 200
    assert r.json["data"]["postedBy"] is None

    r = client.get("/api/lostfound/my-posts", headers=eve_headers)
    assert r.json["data"] == []


def test_sqlite_foreign_keys_are_enforced(app):
    engine = app.extensions["sqlalchemy_engine"]
    with engine.connect() as conn:
        assert conn.exec_driver_sql("PRAGMA foreign_keys").scalar() == 1
