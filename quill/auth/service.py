"""
Authenticator - credentials in, tokens out, tokens back to identities.

Holds no state of its own:
1. validate_credentials: email + password against the user directory
2. issue_token: sign {sub, email} into a bearer token
3. resolve_token: verified claims back to an AuthUser, provided the
   account still exists (deleting a user revokes all their tokens)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi.concurrency import run_in_threadpool

from quill.auth.context import AuthUser
from quill.auth.jwt import PasswordHasher, TokenCodec, TokenError, TokenPayload
from quill.core.errors import UnauthorizedError
from quill.core.models import LoginResponse, LoginUser

if TYPE_CHECKING:
    from quill.services.users import UserDirectory

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class Authenticator:
    """Validates logins, issues tokens and resolves them to identities."""

    def __init__(self, users: UserDirectory, hasher: PasswordHasher, codec: TokenCodec):
        self.users = users
        self.hasher = hasher
        self.codec = codec

    async def validate_credentials(self, email: str, password: str) -> LoginUser:
        """
        Check an email + password pair.

        Both failure paths raise the same error so callers cannot tell
        an unknown email from a wrong password.
        """
        user = await self.users.find_by_email(email)
        if user is None or not await run_in_threadpool(
            self.hasher.verify, password, user.password_hash
        ):
            logger.info("Rejected login attempt")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        return LoginUser(id=user.id, email=user.email, name=user.name)

    def issue_token(self, user: LoginUser) -> LoginResponse:
        access_token = self.codec.encode(user.id, user.email)
        return LoginResponse(
            access_token=access_token,
            user=LoginUser(id=user.id, email=user.email, name=user.name),
        )

    async def login(self, email: str, password: str) -> LoginResponse:
        user = await self.validate_credentials(email, password)
        return self.issue_token(user)

    async def resolve_token(self, payload: TokenPayload) -> AuthUser:
        """
        Turn verified claims into an identity.

        Raises UnauthorizedError if the subject no longer exists.
        """
        user = await self.users.find_by_id(payload.sub)
        if user is None:
            logger.debug(f"Token subject {payload.sub} no longer exists")
            raise UnauthorizedError()

        return AuthUser(user_id=user.id, email=user.email)

    async def authenticate(self, token: str) -> AuthUser:
        """Verify a raw bearer token and resolve it."""
        try:
            payload = self.codec.decode(token)
        except TokenError as e:
            logger.debug(f"Token rejected: {e}")
            raise UnauthorizedError() from e

        return await self.resolve_token(payload)
