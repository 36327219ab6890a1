"""
API error taxonomy.

Handlers raise these; the app factory maps every APIError to the JSON envelope
with ``success: false`` and ``data: null``.
"""
from __future__ import annotations


class APIError(Exception):
    status_code = 400
    default_message = "Bad request"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(APIError):
    status_code = 400
    default_message = "Invalid input"


class Conflict(APIError):
    # Duplicate unique field (e.g. email); reported as a plain 400.
    status_code = 400
    default_message = "Resource already exists"


class Unauthenticated(APIError):
    status_code = 401
    default_message = "Not authorized to access this route"


class Forbidden(APIError):
    status_code = 403
    default_message = "Not authorized to perform this action"


class NotFound(APIError):
    status_code = 404
    default_message = "Resource not found"


class Internal(APIError):
    status_code = 500
    default_message = "Server Error"
