import pytest
from werkzeug.security import generate_password_hash

from app.campushub import create_app
from app.campushub.db import session_scope
from app.campushub.models import Base, User

PASSWORD = "password123"


@pytest.fixture()
def app(tmp_path, monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("JWT_SECRET", "test-jwt-secret-0123456789abcdef")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'test.db'}")
    monkeypatch.setenv("ENV", "test")
    monkeypatch.setenv("API_PREFIX", "/api")
    monkeypatch.setenv("CORS_ORIGIN", "http://localhost:5173")
    for k in ("JWT_EXPIRES_DAYS", "ADMIN_EMAIL", "ADMIN_PASSWORD", "ADMINS_FILE"):
        monkeypatch.delenv(k, raising=False)

    app = create_app()

    engine = app.extensions["sqlalchemy_engine"]
    Base.metadata.create_all(bind=engine)

    with session_scope(app) as s:
        pw = generate_password_hash(PASSWORD)
        s.add_all(
            [
                User(name="Ada Admin", email="admin@example.com", password_hash=pw, role="admin", department="Administration"),
                User(name="Sam Student", email="sam@example.com", password_hash=pw, role="student", enrollment_number="CS-001"),
                User(name="Olu Other", email="olu@example.com", password_hash=pw, role="student"),
            ]
        )

    return app


@pytest.fixture()
def client(app):
    return app.test_client()


def _bearer(client, email):
    r = client.post("/api/auth/login", json={"email": email, "password": PASSWORD})
    assert r.status_code == 200, r.json
    return {"Authorization": f"Bearer {r.json['data']['token']}"}


@pytest.fixture()
def admin_headers(client):
    return _bearer(client, "admin@example.com")


@pytest.fixture()
def student_headers(client):
    return _bearer(client, "sam@example.com")


@pytest.fixture()
def other_headers(client):
    return _bearer(client, "olu@example.com")
