"""
In-memory storage for development and tests.

Works without any external services. Data lives as long as the process.
"""

from __future__ import annotations

from typing import Any

from quill.core.utils import utc_now
from quill.storage.base import Collections, MetadataStorage


class InMemoryMetadataStorage(MetadataStorage):
    """In-memory record storage with cascade delete."""

    def __init__(self):
        self._data: dict[str, dict[str, dict[str, Any]]] = {}

    async def save(self, collection: str, id: str, data: dict[str, Any]) -> dict[str, Any]:
        records = self._data.setdefault(collection, {})
        now = utc_now()
        existing = records.get(id)
        record = {
            **data,
            "id": id,
            "created_at": existing["created_at"] if existing else data.get("created_at", now),
            "updated_at": now,
        }
        records[id] = record
        return dict(record)

    async def get(self, collection: str, id: str) -> dict[str, Any] | None:
        record = self._data.get(collection, {}).get(id)
        return dict(record) if record else None

    async def find_one(
        self,
        collection: str,
        filters: dict[str, Any],
    ) -> dict[str, Any] | None:
        matches = await self.query(collection, filters, limit=1)
        return matches[0] if matches else None

    async def query(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[dict[str, Any]]:
        results = list(self._data.get(collection, {}).values())

        # Apply filters
        if filters:
            results = [
                doc for doc in results
                if all(doc.get(key) == value for key, value in filters.items())
            ]

        # Newer inserts win ties when sorting descending
        if order_by:
            descending = order_by.startswith("-")
            field = order_by.lstrip("-")
            if descending:
                results.reverse()
            results.sort(key=lambda doc: doc.get(field), reverse=descending)

        # Apply pagination
        end = None if limit is None else offset + limit
        return [dict(doc) for doc in results[offset:end]]

    async def update(
        self,
        collection: str,
        id: str,
        updates: dict[str, Any],
    ) -> dict[str, Any] | None:
        record = self._data.get(collection, {}).get(id)
        if record is None:
            return None
        record.update({k: v for k, v in updates.items() if k not in ("id", "created_at")})
        record["updated_at"] = utc_now()
        return dict(record)

    async def delete(self, collection: str, id: str) -> bool:
        records = self._data.get(collection, {})
        if id not in records:
            return False
        del records[id]

        for child, foreign_key in Collections.CASCADES.get(collection, []):
            orphans = [
                child_id
                for child_id, doc in self._data.get(child, {}).items()
                if doc.get(foreign_key) == id
            ]
            for child_id in orphans:
                await self.delete(child, child_id)
        return True


def create_local_storage() -> InMemoryMetadataStorage:
    """Create the in-memory storage backend."""
    return InMemoryMetadataStorage()
