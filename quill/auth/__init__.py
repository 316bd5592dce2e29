"""
Authentication and authorization.

Pieces:
1. jwt: password hashing and token signing/verification primitives
2. service: the Authenticator (login, token issue, token resolution)
3. policies: the request gate used as a FastAPI dependency
4. context: the AuthUser identity handed to route handlers
"""

from quill.auth.context import AuthUser
from quill.auth.jwt import (
    PasswordHasher,
    TokenCodec,
    TokenError,
    TokenExpiredError,
    TokenInvalidError,
    TokenPayload,
    hash_password,
    verify_password,
)
from quill.auth.service import Authenticator
from quill.auth.policies import get_current_user, require_auth
from quill.auth.routes import router as auth_router

__all__ = [
    # Main interface
    "require_auth",
    "get_current_user",
    "AuthUser",
    "Authenticator",
    # Primitives
    "PasswordHasher",
    "TokenCodec",
    "TokenPayload",
    "TokenError",
    "TokenExpiredError",
    "TokenInvalidError",
    "hash_password",
    "verify_password",
    # Router
    "auth_router",
]
