"""
Core module - data models, failure types and shared helpers.

This module contains:
- models: User / Post records and their outward views
- errors: typed failures mapped to HTTP statuses at the edge
- utils: id generation and the UTC clock
"""

from quill.core.errors import (
    QuillError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationFailedError,
)
from quill.core.models import (
    EmailAddress,
    LoginResponse,
    LoginUser,
    Post,
    UserInDB,
    UserResponse,
)
from quill.core.utils import generate_id, utc_now

__all__ = [
    # Errors
    "QuillError",
    "ConflictError",
    "ForbiddenError",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationFailedError",
    # Models
    "EmailAddress",
    "LoginResponse",
    "LoginUser",
    "Post",
    "UserInDB",
    "UserResponse",
    # Utils
    "generate_id",
    "utc_now",
]
