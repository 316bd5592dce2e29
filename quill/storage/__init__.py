"""
Storage abstractions.

Backends:
- InMemoryMetadataStorage → development and tests
- SqlMetadataStorage → PostgreSQL (asyncpg) or SQLite (aiosqlite) via SQLAlchemy
"""

from __future__ import annotations

import logging

from quill.config import Settings
from quill.storage.base import Collections, MetadataStorage
from quill.storage.local import InMemoryMetadataStorage, create_local_storage
from quill.storage.sql import SqlMetadataStorage, create_sql_storage

logger = logging.getLogger(__name__)


def create_storage(settings: Settings) -> MetadataStorage:
    """Pick the storage backend from configuration."""
    if settings.database_url:
        logger.info("Using SQL storage")
        return create_sql_storage(settings.database_url, echo=settings.database_echo)
    logger.info("DATABASE_URL not set - using in-memory storage")
    return create_local_storage()


__all__ = [
    "Collections",
    "MetadataStorage",
    "InMemoryMetadataStorage",
    "SqlMetadataStorage",
    "create_local_storage",
    "create_sql_storage",
    "create_storage",
]
