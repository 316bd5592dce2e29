"""
Core data models for the quill backend.

Users own posts. Stored records keep snake_case field names; the outward
views serialize in camelCase and never carry the password hash.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic.networks import validate_email


def _check_email(value: str) -> str:
    """Validate an address but hand it back exactly as written."""
    _, normalized = validate_email(value)
    # Rejects the "Name <addr>" form, which validate_email accepts
    if normalized.lower() != value.lower():
        raise ValueError("value is not a valid email address")
    return value


# Unlike EmailStr, the domain is not lowercased: emails compare as stored
EmailAddress = Annotated[str, AfterValidator(_check_email)]


class CamelModel(BaseModel):
    """Base for models that go over the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Users
# =============================================================================


class UserResponse(CamelModel):
    """User data returned to clients (no sensitive fields)."""

    id: str
    email: str
    name: str
    created_at: datetime
    updated_at: datetime


class UserInDB(BaseModel):
    """User as stored."""

    id: str
    email: str
    name: str
    password_hash: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> UserInDB:
        return cls.model_validate(record)

    def public(self) -> UserResponse:
        return UserResponse(
            id=self.id,
            email=self.email,
            name=self.name,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class LoginUser(BaseModel):
    """Minimal profile echoed back on login."""

    id: str
    email: str
    name: str


class LoginResponse(BaseModel):
    access_token: str
    user: LoginUser


# =============================================================================
# Posts
# =============================================================================


class Post(CamelModel):
    """
    A post, optionally joined with its owner's public profile.

    `user_id` is fixed at creation and never merged by updates.
    """

    id: str
    title: str
    content: str
    published: bool = False
    user_id: str
    created_at: datetime
    updated_at: datetime
    user: UserResponse | None = None

    @classmethod
    def from_record(
        cls,
        record: dict[str, Any],
        owner: UserResponse | None = None,
    ) -> Post:
        return cls.model_validate({**record, "user": owner})
