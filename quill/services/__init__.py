"""Services - the business rules over users and posts."""

from quill.services.users import UserDirectory
from quill.services.posts import PostRegistry

__all__ = [
    "UserDirectory",
    "PostRegistry",
]
