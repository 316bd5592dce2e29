"""
Auth context - who is making this request.

Derived on every request from a verified token and handed to route
handlers as an explicit argument. Never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthUser:
    """
    Identity claim for an authenticated request.

    Usage in routes:
        async def my_route(user: AuthUser = Depends(require_auth())):
            print(f"User {user.user_id} is calling")
    """

    user_id: str
    email: str
