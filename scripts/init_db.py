import json
import os
import sys
from pathlib import Path

from werkzeug.security import generate_password_hash

# Ensure repo root is on sys.path when running as a script (Windows-friendly).
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.campushub.constants import DEFAULT_ADMIN_DEPARTMENT, ROLE_ADMIN
from app.campushub.models import User
from scripts._db_utils import script_session


def _admin_entries() -> list[dict]:
    """
    Admin accounts to seed.
    ADMINS_FILE (JSON list of {name, email, password, department}) wins over ADMIN_EMAIL/ADMIN_PASSWORD.
    """
    admins_file = (os.environ.get("ADMINS_FILE") or "").strip()
    if admins_file:
        with open(admins_file, "r", encoding="utf-8") as f:
            entries = json.load(f)
        if not isinstance(entries, list):
            raise RuntimeError(f"{admins_file} must contain a JSON list of admin accounts.")
        return entries

    admin_email = (os.environ.get("ADMIN_EMAIL") or "").strip()
    if not admin_email:
        return []
    return [
        {
            "name": os.environ.get("ADMIN_NAME") or "Administrator",
            "email": admin_email,
            "password": os.environ.get("ADMIN_PASSWORD") or "change-me",
            "department": DEFAULT_ADMIN_DEPARTMENT,
        }
    ]


def seed_only(*, database_url: str | None = None) -> list[str]:
    """
    Seed admin users in an idempotent way.
    Does NOT overwrite an existing account (password, role or profile).
    Returns the emails that were created.
    """
    db_url = (database_url or os.environ.get("DATABASE_URL") or "sqlite:///campushub.db").strip()
    created: list[str] = []

    # Use direct engine/session so this can run in release without importing app.wsgi (avoids recursion).
    with script_session(db_url) as s:
        for entry in _admin_entries():
            email = str(entry.get("email") or "").strip().lower()
            password = entry.get("password")
            if not email or not password:
                print(f"Skipping admin entry without email/password: {entry.get('name')!r}")
                continue
            if s.query(User).filter(User.email == email).one_or_none():
                continue
            s.add(
                User(
                    name=str(entry.get("name") or "Administrator")[:50],
                    email=email,
                    password_hash=generate_password_hash(str(password)),
                    role=ROLE_ADMIN,
                    department=entry.get("department") or DEFAULT_ADMIN_DEPARTMENT,
                )
            )
            created.append(email)

    print("Initialized database (seed_only).")
    for email in created:
        print(f"Admin created: {email}")
    if not created:
        print("No new admin accounts.")
    return created


def main() -> None:
    seed_only(database_url=None)


if __name__ == "__main__":
    main()
