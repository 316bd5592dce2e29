# =============================================================================
# Post API Routes
# =============================================================================
#
# Endpoints:
#   POST   /posts                - Create a post owned by the caller
#   GET    /posts                - List all posts, newest first (public)
#   GET    /posts/{id}           - Get one post (public)
#   GET    /posts/user/{user_id} - List one user's posts
#   PATCH  /posts/{id}           - Update (owner only)
#   DELETE /posts/{id}           - Delete (owner only)
#
# =============================================================================

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, ConfigDict, Field

from quill.api.dependencies import get_posts
from quill.auth import AuthUser, require_auth
from quill.core.models import Post
from quill.services.posts import PostRegistry

router = APIRouter(prefix="/posts", tags=["posts"])


# =============================================================================
# Request Models
# =============================================================================

class PostCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    published: bool = False


class PostUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1)
    content: str | None = Field(default=None, min_length=1)
    published: bool | None = None


# =============================================================================
# Public Endpoints
# =============================================================================

@router.get("", response_model=list[Post])
async def list_posts(posts: PostRegistry = Depends(get_posts)):
    return await posts.find_all()


@router.get("/user/{user_id}", response_model=list[Post])
async def list_user_posts(
    user_id: str,
    _: AuthUser = Depends(require_auth()),
    posts: PostRegistry = Depends(get_posts),
):
    return await posts.find_by_owner(user_id)


@router.get("/{post_id}", response_model=Post)
async def get_post(post_id: str, posts: PostRegistry = Depends(get_posts)):
    return await posts.find_one(post_id)


# =============================================================================
# Protected Endpoints
# =============================================================================

@router.post("", response_model=Post, status_code=status.HTTP_201_CREATED)
async def create_post(
    data: PostCreate,
    user: AuthUser = Depends(require_auth()),
    posts: PostRegistry = Depends(get_posts),
):
    """Create a post owned by the authenticated caller."""
    return await posts.create(user.user_id, data.title, data.content, data.published)


@router.patch("/{post_id}", response_model=Post)
async def update_post(
    post_id: str,
    data: PostUpdate,
    user: AuthUser = Depends(require_auth()),
    posts: PostRegistry = Depends(get_posts),
):
    """Update a post. Only the owner may, and only sent fields change."""
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    return await posts.update(post_id, user.user_id, changes)


@router.delete("/{post_id}", status_code=status.HTTP_200_OK)
async def delete_post(
    post_id: str,
    user: AuthUser = Depends(require_auth()),
    posts: PostRegistry = Depends(get_posts),
):
    await posts.remove(post_id, user.user_id)
    return Response(status_code=status.HTTP_200_OK)
