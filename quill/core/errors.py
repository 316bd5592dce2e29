"""
Failure taxonomy.

Services raise these; the HTTP layer maps each one to its status code
and renders only the short message.
"""

from __future__ import annotations


class QuillError(Exception):
    """Base class for failures surfaced to the caller."""

    status_code: int = 500
    error: str = "Internal Server Error"
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationFailedError(QuillError):
    """Malformed request body."""

    status_code = 400
    error = "Bad Request"
    default_detail = "Validation failed"


class UnauthorizedError(QuillError):
    """Bad credentials, or an absent, invalid, expired or orphaned token."""

    status_code = 401
    error = "Unauthorized"
    default_detail = "Unauthorized"


class ForbiddenError(QuillError):
    """Authenticated caller is not allowed to touch this record."""

    status_code = 403
    error = "Forbidden"
    default_detail = "Forbidden"


class NotFoundError(QuillError):
    """Unknown id."""

    status_code = 404
    error = "Not Found"
    default_detail = "Not found"


class ConflictError(QuillError):
    """Record collides with an existing one (duplicate email)."""

    status_code = 409
    error = "Conflict"
    default_detail = "Conflict"
