from __future__ import annotations

from typing import Any

from flask import jsonify


def envelope(success: bool, message: str, data: Any = None, status: int = 200):
    """Every response body is {success, message, data}."""
    return jsonify({"success": success, "message": message, "data": data}), status


def ok(message: str, data: Any = None, status: int = 200):
    return envelope(True, message, data, status)


def created(message: str, data: Any = None):
    return envelope(True, message, data, 201)


def fail(message: str, status: int):
    return envelope(False, message, None, status)


def iso(value) -> str | None:
    if value is None:
        return None
    return value.isoformat()
