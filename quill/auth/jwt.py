# =============================================================================
# JWT Authentication Primitives
# =============================================================================
#
# This module provides:
#   - Password hashing (salted PBKDF2-SHA256)
#   - Token signing with expiry
#   - Token validation
#
# Neither primitive touches storage; the Authenticator composes them.
#
# =============================================================================

from __future__ import annotations

from datetime import datetime, timedelta, timezone
import hashlib
import logging
import secrets

from pydantic import BaseModel
import jwt

from quill.config import Settings
from quill.core.utils import generate_id, utc_now

logger = logging.getLogger(__name__)

DEFAULT_ITERATIONS = 100_000


# =============================================================================
# Password Hashing
# =============================================================================

def hash_password(password: str, iterations: int = DEFAULT_ITERATIONS) -> str:
    """
    Hash a password using PBKDF2-SHA256.

    Returns: iterations:salt:hash format string
    """
    salt = secrets.token_hex(16)
    hash_bytes = hashlib.pbkdf2_hmac(
        'sha256',
        password.encode('utf-8'),
        salt.encode('utf-8'),
        iterations=iterations,
    )
    return f"{iterations}:{salt}:{hash_bytes.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash."""
    try:
        iterations, salt, stored_hash = password_hash.split(':')
        hash_bytes = hashlib.pbkdf2_hmac(
            'sha256',
            password.encode('utf-8'),
            salt.encode('utf-8'),
            iterations=int(iterations),
        )
        return secrets.compare_digest(hash_bytes.hex(), stored_hash)
    except (ValueError, AttributeError):
        return False


class PasswordHasher:
    """One-way salted hash + verify, with a configured work factor."""

    def __init__(self, iterations: int = DEFAULT_ITERATIONS):
        self.iterations = iterations

    def hash(self, password: str) -> str:
        return hash_password(password, self.iterations)

    def verify(self, password: str, password_hash: str) -> bool:
        return verify_password(password, password_hash)


# =============================================================================
# Tokens
# =============================================================================

class TokenPayload(BaseModel):
    """Verified JWT claims."""
    sub: str  # user_id
    email: str
    exp: datetime
    iat: datetime
    jti: str  # unique token ID


class TokenError(Exception):
    """Base exception for token errors."""
    pass


class TokenExpiredError(TokenError):
    """Token has expired."""
    pass


class TokenInvalidError(TokenError):
    """Token is invalid or malformed."""
    pass


class TokenCodec:
    """Signs claims into bearer tokens and verifies them back."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expires_in: int = 86400):
        if not secret_key:
            raise ValueError("JWT secret key is not set")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expires_in = expires_in

    @classmethod
    def from_settings(cls, settings: Settings) -> TokenCodec:
        return cls(
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            expires_in=settings.jwt_expiration_seconds,
        )

    def encode(self, user_id: str, email: str) -> str:
        """Create a signed access token for a user."""
        now = utc_now()
        payload = {
            "sub": user_id,
            "email": email,
            "iat": now,
            "exp": now + timedelta(seconds=self.expires_in),
            "jti": generate_id("tok"),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> TokenPayload:
        """
        Decode and validate a JWT token.

        Raises:
            TokenExpiredError: Token has expired
            TokenInvalidError: Bad signature, malformed, or missing claims
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise TokenInvalidError(f"Invalid token: {e}")

        email = payload.get("email")
        if not isinstance(email, str):
            raise TokenInvalidError("Invalid token: missing email claim")

        return TokenPayload(
            sub=payload["sub"],
            email=email,
            exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            jti=payload.get("jti", ""),
        )
