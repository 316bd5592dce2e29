"""
Post registry - owns the post lifecycle.

Anyone may read posts. Only the owner (the user whose id is the post's
`user_id`) may update or delete one: load, compare, then act.
"""

from __future__ import annotations

import logging
from typing import Any

from quill.core.errors import ForbiddenError, NotFoundError
from quill.core.models import Post, UserInDB, UserResponse
from quill.core.utils import generate_id
from quill.storage.base import Collections, MetadataStorage

logger = logging.getLogger(__name__)


class PostRegistry:
    """Sole mutator of post records."""

    MUTABLE_FIELDS = ("title", "content", "published")

    def __init__(self, storage: MetadataStorage):
        self.storage = storage

    # =========================================================================
    # Reads
    # =========================================================================

    async def find_all(self) -> list[Post]:
        """All posts, newest first, each with its owner's public profile."""
        records = await self.storage.query(Collections.POSTS, order_by="-created_at")
        return await self._with_owners(records)

    async def find_one(self, post_id: str) -> Post:
        """Raises NotFoundError if there is no such post."""
        record = await self.storage.get(Collections.POSTS, post_id)
        if record is None:
            raise NotFoundError("Post not found")
        posts = await self._with_owners([record])
        return posts[0]

    async def find_by_owner(self, owner_id: str) -> list[Post]:
        records = await self.storage.query(
            Collections.POSTS,
            {"user_id": owner_id},
            order_by="-created_at",
        )
        return await self._with_owners(records)

    async def _with_owners(self, records: list[dict[str, Any]]) -> list[Post]:
        """Join each record with its owner's public profile."""
        owners: dict[str, UserResponse | None] = {}
        for owner_id in {r["user_id"] for r in records}:
            owner = await self.storage.get(Collections.USERS, owner_id)
            owners[owner_id] = UserInDB.from_record(owner).public() if owner else None
        return [Post.from_record(r, owners[r["user_id"]]) for r in records]

    # =========================================================================
    # Writes
    # =========================================================================

    async def create(
        self,
        owner_id: str,
        title: str,
        content: str,
        published: bool = False,
    ) -> Post:
        """Create a post owned by `owner_id`."""
        post_id = generate_id("post")
        await self.storage.save(Collections.POSTS, post_id, {
            "title": title,
            "content": content,
            "published": published,
            "user_id": owner_id,
        })
        return await self.find_one(post_id)

    async def update(self, post_id: str, caller_id: str, changes: dict[str, Any]) -> Post:
        """
        Merge the provided fields into a post owned by the caller.

        Raises:
            NotFoundError: no such post
            ForbiddenError: caller is not the owner
        """
        post = await self.find_one(post_id)
        if post.user_id != caller_id:
            logger.warning(f"User {caller_id} tried to update post {post_id}")
            raise ForbiddenError("You can only update your own posts")

        updates = {k: v for k, v in changes.items() if k in self.MUTABLE_FIELDS}
        if await self.storage.update(Collections.POSTS, post_id, updates) is None:
            raise NotFoundError("Post not found")
        return await self.find_one(post_id)

    async def remove(self, post_id: str, caller_id: str) -> None:
        """
        Delete a post owned by the caller.

        Raises:
            NotFoundError: no such post
            ForbiddenError: caller is not the owner
        """
        post = await self.find_one(post_id)
        if post.user_id != caller_id:
            logger.warning(f"User {caller_id} tried to delete post {post_id}")
            raise ForbiddenError("You can only delete your own posts")

        await self.storage.delete(Collections.POSTS, post_id)
