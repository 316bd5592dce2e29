"""
Storage abstraction layer.

All persistence goes through this interface. This allows swapping
implementations (in-memory for development and tests, SQL via
SQLAlchemy for deployments) without changing the services.

Records are plain dicts keyed by column name. Backends own the
`created_at` / `updated_at` timestamps and cascade user deletion to
the user's posts.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


# =============================================================================
# Collection Names
# =============================================================================


class Collections:
    """Standard collection/table names."""

    USERS = "users"
    POSTS = "posts"

    # parent collection -> [(child collection, foreign key field)]
    CASCADES: dict[str, list[tuple[str, str]]] = {
        USERS: [(POSTS, "user_id")],
    }


# =============================================================================
# Storage Interface
# =============================================================================


class MetadataStorage(ABC):
    """
    Storage for structured records (users, posts).

    SQL Implementation: PostgreSQL / SQLite through SQLAlchemy
    Local Implementation: in-memory dicts
    """

    async def initialize(self) -> None:
        """Prepare the backend (create tables, open pools)."""

    async def close(self) -> None:
        """Release backend resources."""

    @abstractmethod
    async def save(self, collection: str, id: str, data: dict[str, Any]) -> dict[str, Any]:
        """Insert or replace a record, return it as stored."""
        pass

    @abstractmethod
    async def get(self, collection: str, id: str) -> dict[str, Any] | None:
        """Get a record by ID."""
        pass

    @abstractmethod
    async def find_one(
        self,
        collection: str,
        filters: dict[str, Any],
    ) -> dict[str, Any] | None:
        """Get the first record matching all filters."""
        pass

    @abstractmethod
    async def query(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[dict[str, Any]]:
        """
        Query records with optional equality filters.

        `order_by` names one field; a leading "-" sorts descending.
        """
        pass

    @abstractmethod
    async def update(
        self,
        collection: str,
        id: str,
        updates: dict[str, Any],
    ) -> dict[str, Any] | None:
        """Partial update of a record. Returns None if it does not exist."""
        pass

    @abstractmethod
    async def delete(self, collection: str, id: str) -> bool:
        """Delete a record (and its cascaded children)."""
        pass
