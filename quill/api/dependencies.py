"""
Dependencies - services wired at startup, looked up per request.

Everything lives on `app.state`; see `quill.api.app.create_app`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request

if TYPE_CHECKING:
    from quill.auth.service import Authenticator
    from quill.services.posts import PostRegistry
    from quill.services.users import UserDirectory


def get_users(request: Request) -> UserDirectory:
    return request.app.state.users


def get_posts(request: Request) -> PostRegistry:
    return request.app.state.posts


def get_authenticator(request: Request) -> Authenticator:
    return request.app.state.authenticator
