"""Shared fixtures: test settings and services over a fresh in-memory store."""

import asyncio
import time

import pytest

from quill.auth import Authenticator, PasswordHasher, TokenCodec
from quill.config import Settings
from quill.services import PostRegistry, UserDirectory
from quill.storage import InMemoryMetadataStorage

TEST_SECRET = "test-secret-key"


@pytest.fixture
def settings():
    """Settings that ignore the environment's .env file."""
    return Settings(
        _env_file=None,
        jwt_secret_key=TEST_SECRET,
        database_url="",
        seed_database=False,
        sentry_dsn="",
        password_hash_iterations=1_000,
    )


@pytest.fixture
def storage():
    return InMemoryMetadataStorage()


@pytest.fixture
def hasher(settings):
    return PasswordHasher(settings.password_hash_iterations)


@pytest.fixture
def codec(settings):
    return TokenCodec.from_settings(settings)


@pytest.fixture
def users(storage, hasher):
    return UserDirectory(storage, hasher)


@pytest.fixture
def posts(storage):
    return PostRegistry(storage)


@pytest.fixture
def authenticator(users, hasher, codec):
    return Authenticator(users, hasher, codec)


@pytest.fixture
def slow_hasher():
    """A hasher with enough rounds to stall the loop if run on it."""
    return PasswordHasher(300_000)


@pytest.fixture
def loop_stall():
    """
    Await a coroutine while a ticker runs every 5 ms.

    Returns (result, longest gap between ticks in seconds).
    """
    async def _measure(coro):
        gaps = []
        done = asyncio.Event()

        async def ticker():
            last = time.perf_counter()
            while not done.is_set():
                await asyncio.sleep(0.005)
                now = time.perf_counter()
                gaps.append(now - last)
                last = now

        task = asyncio.create_task(ticker())
        await asyncio.sleep(0)
        try:
            result = await coro
        finally:
            done.set()
            await task
        return result, max(gaps, default=0.0)

    return _measure
