"""
User directory - owns the user lifecycle.

Create (email uniqueness checked, password hashed), read, rename, delete.
Deleting a user removes their posts through the storage cascade.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi.concurrency import run_in_threadpool

from quill.auth.jwt import PasswordHasher
from quill.core.errors import ConflictError, NotFoundError
from quill.core.models import UserInDB
from quill.core.utils import generate_id
from quill.storage.base import Collections, MetadataStorage

logger = logging.getLogger(__name__)


class UserDirectory:
    """Sole mutator of user records."""

    UPDATABLE_FIELDS = ("name",)

    def __init__(self, storage: MetadataStorage, hasher: PasswordHasher):
        self.storage = storage
        self.hasher = hasher

    async def create(self, email: str, name: str, password: str) -> UserInDB:
        """
        Register a new user.

        Raises:
            ConflictError: a user with this email already exists
        """
        if await self.find_by_email(email):
            raise ConflictError("Email already exists")

        # PBKDF2 is CPU-bound; keep it off the event loop
        password_hash = await run_in_threadpool(self.hasher.hash, password)

        user_id = generate_id("user")
        record = await self.storage.save(Collections.USERS, user_id, {
            "email": email,
            "name": name,
            "password_hash": password_hash,
        })

        logger.info(f"Created user {user_id}")
        return UserInDB.from_record(record)

    async def find_all(self) -> list[UserInDB]:
        records = await self.storage.query(Collections.USERS)
        return [UserInDB.from_record(r) for r in records]

    async def find_one(self, user_id: str) -> UserInDB:
        """Raises NotFoundError if there is no such user."""
        user = await self.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def find_by_email(self, email: str) -> UserInDB | None:
        record = await self.storage.find_one(Collections.USERS, {"email": email})
        return UserInDB.from_record(record) if record else None

    async def find_by_id(self, user_id: str) -> UserInDB | None:
        record = await self.storage.get(Collections.USERS, user_id)
        return UserInDB.from_record(record) if record else None

    async def update(self, user_id: str, changes: dict[str, Any]) -> UserInDB:
        """Merge the provided profile fields (name only) into a user."""
        await self.find_one(user_id)

        updates = {k: v for k, v in changes.items() if k in self.UPDATABLE_FIELDS}
        record = await self.storage.update(Collections.USERS, user_id, updates)
        if record is None:
            raise NotFoundError("User not found")
        return UserInDB.from_record(record)

    async def remove(self, user_id: str) -> None:
        """Delete a user and, by cascade, all of their posts."""
        await self.find_one(user_id)
        await self.storage.delete(Collections.USERS, user_id)
        logger.info(f"Removed user {user_id}")
