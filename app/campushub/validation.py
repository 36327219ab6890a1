"""
Payload validation helpers.

Validators return a list of error messages in rule order; routes surface only
the first one (see `raise_first`).
"""
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any

from app.campushub.errors import ValidationError

_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}")


def text(payload: dict, key: str) -> str:
    """Trimmed string value; non-strings and missing keys become ''."""
    v = payload.get(key)
    if v is None:
        return ""
    if not isinstance(v, str):
        v = str(v)
    return v.strip()


def optional_text(payload: dict, key: str) -> str | None:
    return text(payload, key) or None


def check_required(errors: list[str], payload: dict, key: str, message: str, *, max_len: int | None = None, too_long: str | None = None) -> None:
    value = text(payload, key)
    if not value:
        errors.append(message)
    elif max_len is not None and len(value) > max_len:
        errors.append(too_long or f"{key} cannot be more than {max_len} characters")


def check_choice(errors: list[str], payload: dict, key: str, choices: tuple[str, ...], message: str, *, required: bool = False, missing: str | None = None) -> None:
    value = text(payload, key)
    if not value:
        if required:
            errors.append(missing or f"{key} is required")
        return
    if value not in choices:
        errors.append(message)


def check_email(errors: list[str], payload: dict, key: str = "email") -> None:
    value = text(payload, key)
    if not value:
        errors.append("Email is required")
    elif not _EMAIL_RE.match(value):
        errors.append("Please provide a valid email")


def check_date(errors: list[str], payload: dict, key: str, *, required: bool = False, missing: str | None = None, invalid: str = "Invalid date format") -> None:
    value = text(payload, key)
    if not value:
        if required:
            errors.append(missing or f"{key} is required")
        return
    if parse_date(value) is None:
        errors.append(invalid)


def parse_date(value: Any) -> date | None:
    """Parse YYYY-MM-DD or a full ISO timestamp (keeping the date); anything else is None."""
    if value is None:
        return None
    s = str(value).strip()
    if not _DATE_RE.match(s):
        return None
    try:
        if len(s) == 10:
            return date.fromisoformat(s)
        if s[10] not in "T ":
            return None
        return datetime.fromisoformat(s.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def parse_bool(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def json_body() -> dict:
    """The request's JSON object; an absent or unparseable body is treated as {}."""
    from flask import request

    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def raise_first(errors: list[str]) -> None:
    if errors:
        raise ValidationError(errors[0])
