"""
Bearer credential service: signed JWTs carrying user id + role.

Stateless; keyed by JWT_SECRET with a fixed expiry window (JWT_EXPIRES_DAYS).
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

JWT_ALGO = "HS256"


class InvalidCredential(Exception):
    """Token missing, expired, malformed or signed with another key."""


@dataclass(frozen=True)
class Identity:
    user_id: int
    role: str


def issue_token(user_id: int, role: str, *, secret: str, expires_days: int) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(days=expires_days)).timestamp()),
    }
    # pyjwt returns str in v2+
    return jwt.encode(payload, secret, algorithm=JWT_ALGO)


def verify_token(token: str | None, *, secret: str) -> Identity:
    if not token:
        raise InvalidCredential("No token provided")
    try:
        payload = jwt.decode(token, secret, algorithms=[JWT_ALGO], options={"require": ["exp", "sub"]})
    except jwt.ExpiredSignatureError as e:
        raise InvalidCredential("Token expired") from e
    except jwt.InvalidTokenError as e:
        raise InvalidCredential("Invalid token") from e
    try:
        return Identity(user_id=int(payload["sub"]), role=str(payload.get("role") or ""))
    except (TypeError, ValueError) as e:
        raise InvalidCredential("Invalid token subject") from e


def bearer_token(header_value: str | None) -> str | None:
    """Extract the token from an `Authorization: Bearer <token>` header."""
    if not header_value:
        return None
    scheme, _, token = header_value.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def issue_for_app(user_id: int, role: str) -> str:
    from flask import current_app

    return issue_token(
        user_id,
        role,
        secret=current_app.config["JWT_SECRET"],
        expires_days=int(current_app.config["JWT_EXPIRES_DAYS"]),
    )


def verify_for_app(token: str | None) -> Identity:
    from flask import current_app

    return verify_token(token, secret=current_app.config["JWT_SECRET"])
