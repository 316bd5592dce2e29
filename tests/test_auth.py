"""
Tests for the authentication flow.

Credentials → signed token → token back to a live identity.
"""

from datetime import timedelta

import jwt
import pytest

from quill.auth import (
    Authenticator,
    AuthUser,
    TokenCodec,
    TokenExpiredError,
    TokenInvalidError,
    hash_password,
    verify_password,
)
from quill.core.errors import UnauthorizedError
from quill.core.models import LoginUser
from quill.core.utils import utc_now
from quill.services import UserDirectory

from conftest import TEST_SECRET


# =============================================================================
# Password Hashing
# =============================================================================


class TestPasswordHashing:
    def test_verify_matches(self):
        hashed = hash_password("secret1", iterations=1_000)
        assert verify_password("secret1", hashed)
        assert not verify_password("secret2", hashed)

    def test_salted(self):
        assert hash_password("secret1", 1_000) != hash_password("secret1", 1_000)

    def test_never_stores_plaintext(self):
        assert "secret1" not in hash_password("secret1", 1_000)

    def test_malformed_hash_does_not_verify(self):
        assert not verify_password("secret1", "not-a-hash")
        assert not verify_password("secret1", "abc:def:ghi")


# =============================================================================
# Token Codec
# =============================================================================


class TestTokenCodec:
    def test_round_trip_claims(self, codec):
        token = codec.encode("user_1", "a@x.com")
        payload = codec.decode(token)

        assert payload.sub == "user_1"
        assert payload.email == "a@x.com"
        assert payload.exp > payload.iat

    def test_default_expiry_is_one_day(self, codec):
        payload = codec.decode(codec.encode("user_1", "a@x.com"))
        assert payload.exp - payload.iat == timedelta(days=1)

    def test_rejects_wrong_secret(self, codec):
        other = TokenCodec("another-secret")
        with pytest.raises(TokenInvalidError):
            codec.decode(other.encode("user_1", "a@x.com"))

    def test_rejects_garbage(self, codec):
        with pytest.raises(TokenInvalidError):
            codec.decode("invalid_token_here")
        with pytest.raises(TokenInvalidError):
            codec.decode("eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9.invalid")

    def test_rejects_expired(self, codec):
        past = utc_now() - timedelta(hours=2)
        token = jwt.encode(
            {"sub": "user_1", "email": "a@x.com", "iat": past, "exp": past + timedelta(hours=1)},
            TEST_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(TokenExpiredError):
            codec.decode(token)

    def test_rejects_missing_email(self, codec):
        now = utc_now()
        token = jwt.encode(
            {"sub": "user_1", "iat": now, "exp": now + timedelta(hours=1)},
            TEST_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(TokenInvalidError):
            codec.decode(token)

    def test_requires_secret(self):
        with pytest.raises(ValueError):
            TokenCodec("")


# =============================================================================
# Authenticator
# =============================================================================


class TestAuthenticator:
    @pytest.mark.asyncio
    async def test_valid_credentials(self, users, authenticator):
        user = await users.create("a@x.com", "Alice", "secret1")

        result = await authenticator.validate_credentials("a@x.com", "secret1")

        assert result == LoginUser(id=user.id, email="a@x.com", name="Alice")

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_email_look_the_same(self, users, authenticator):
        await users.create("a@x.com", "Alice", "secret1")

        with pytest.raises(UnauthorizedError) as wrong_password:
            await authenticator.validate_credentials("a@x.com", "nope")
        with pytest.raises(UnauthorizedError) as unknown_email:
            await authenticator.validate_credentials("b@x.com", "secret1")

        assert wrong_password.value.detail == "Invalid credentials"
        assert unknown_email.value.detail == wrong_password.value.detail

    @pytest.mark.asyncio
    async def test_issue_token_echoes_profile(self, codec, authenticator):
        profile = LoginUser(id="user_1", email="a@x.com", name="Alice")

        response = authenticator.issue_token(profile)

        assert response.user == profile
        assert codec.decode(response.access_token).sub == "user_1"

    @pytest.mark.asyncio
    async def test_issued_token_resolves_to_identity(self, users, authenticator):
        user = await users.create("a@x.com", "Alice", "secret1")
        response = await authenticator.login("a@x.com", "secret1")

        identity = await authenticator.authenticate(response.access_token)

        assert identity == AuthUser(user_id=user.id, email="a@x.com")

    @pytest.mark.asyncio
    async def test_deleting_user_revokes_tokens(self, users, authenticator):
        user = await users.create("a@x.com", "Alice", "secret1")
        response = await authenticator.login("a@x.com", "secret1")

        await users.remove(user.id)

        with pytest.raises(UnauthorizedError):
            await authenticator.authenticate(response.access_token)

    @pytest.mark.asyncio
    async def test_bad_token_is_unauthorized(self, authenticator):
        with pytest.raises(UnauthorizedError):
            await authenticator.authenticate("not.a.token")

    @pytest.mark.asyncio
    async def test_login_verifies_off_the_event_loop(self, storage, codec, slow_hasher, loop_stall):
        users = UserDirectory(storage, slow_hasher)
        authenticator = Authenticator(users, slow_hasher, codec)
        await users.create("a@x.com", "Alice", "secret1")

        response, stall = await loop_stall(authenticator.login("a@x.com", "secret1"))

        assert response.user.email == "a@x.com"
        assert stall < 0.1
