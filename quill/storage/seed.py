"""
Demo data seeding.

Creates a seed user and a handful of posts for it. Idempotent: the user
is only created when its email is unknown, and a post only when the seed
user has no post with the same title.
"""

from __future__ import annotations

import logging

from quill.services.posts import PostRegistry
from quill.services.users import UserDirectory

logger = logging.getLogger(__name__)

SEED_EMAIL = "seed.user@example.com"
SEED_NAME = "Seed User"
SEED_PASSWORD = "Password123!"

SEED_POSTS = [
    {
        "title": "Welcome to the API",
        "content": "This is a seeded post created during startup.",
        "published": True,
    },
    {
        "title": "Second Seeded Post",
        "content": "Use this post to test list and detail endpoints.",
        "published": False,
    },
    {
        "title": "Munich Security Conference 2026 Dates and Venue Confirmed",
        "content": "The conference returns to the Hotel Bayerischer Hof in February.",
        "published": True,
    },
    {
        "title": "BRIT Awards 2026 Move to Manchester",
        "content": "The ceremony leaves London for the first time in its history.",
        "published": True,
    },
]


async def seed_database(users: UserDirectory, posts: PostRegistry) -> dict[str, int]:
    """
    Seed the demo user and posts.

    Returns counts of what was created, e.g. {"users": 1, "posts": 4}.
    """
    created = {"users": 0, "posts": 0}

    owner = await users.find_by_email(SEED_EMAIL)
    if owner is None:
        owner = await users.create(SEED_EMAIL, SEED_NAME, SEED_PASSWORD)
        created["users"] += 1

    existing_titles = {p.title for p in await posts.find_by_owner(owner.id)}
    for post in SEED_POSTS:
        if post["title"] in existing_titles:
            continue
        await posts.create(owner.id, post["title"], post["content"], post["published"])
        created["posts"] += 1

    logger.info(f"Seeded {created['users']} users and {created['posts']} posts")
    return created
