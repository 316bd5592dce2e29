"""
Policies - the request gate for protected routes.

Just use: `user: AuthUser = Depends(require_auth())`

Design:
- Extract the bearer token from the Authorization header
- Verify signature + expiry, then resolve the subject to a live user
- Missing, malformed, expired or orphaned tokens all become 401
- The resolved AuthUser is passed to the handler as an argument
"""

from __future__ import annotations

from typing import Callable

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from quill.api.dependencies import get_authenticator
from quill.auth.context import AuthUser
from quill.auth.service import Authenticator
from quill.core.errors import UnauthorizedError


# Optional bearer: we raise our own 401 instead of FastAPI's 403
optional_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(optional_bearer),
    authenticator: Authenticator = Depends(get_authenticator),
) -> AuthUser:
    """Resolve the bearer token on this request to an identity."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()

    return await authenticator.authenticate(credentials.credentials)


def require_auth() -> Callable:
    """Require an authenticated caller."""
    return get_current_user
