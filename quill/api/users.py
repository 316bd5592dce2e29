# =============================================================================
# User API Routes
# =============================================================================
#
# Endpoints:
#   POST   /users       - Register (public)
#   GET    /users       - List users
#   GET    /users/{id}  - Get a user
#   PATCH  /users/{id}  - Rename a user
#   DELETE /users/{id}  - Delete a user and their posts
#
# =============================================================================

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, ConfigDict, Field

from quill.api.dependencies import get_users
from quill.auth import AuthUser, require_auth
from quill.core.models import EmailAddress, UserResponse
from quill.services.users import UserDirectory

router = APIRouter(prefix="/users", tags=["users"])


# =============================================================================
# Request Models
# =============================================================================

class UserCreate(BaseModel):
    """User registration data."""
    model_config = ConfigDict(extra="forbid")

    email: EmailAddress
    name: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=6)


class UserUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=100)


# =============================================================================
# Public Endpoints
# =============================================================================

@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    users: UserDirectory = Depends(get_users),
):
    """Create a new account."""
    user = await users.create(data.email, data.name, data.password)
    return user.public()


# =============================================================================
# Protected Endpoints
# =============================================================================

@router.get("", response_model=list[UserResponse])
async def list_users(
    _: AuthUser = Depends(require_auth()),
    users: UserDirectory = Depends(get_users),
):
    return [u.public() for u in await users.find_all()]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    _: AuthUser = Depends(require_auth()),
    users: UserDirectory = Depends(get_users),
):
    user = await users.find_one(user_id)
    return user.public()


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    data: UserUpdate,
    _: AuthUser = Depends(require_auth()),
    users: UserDirectory = Depends(get_users),
):
    """Update a user's profile. Only fields present in the body change."""
    user = await users.update(user_id, data.model_dump(exclude_unset=True, exclude_none=True))
    return user.public()


@router.delete("/{user_id}", status_code=status.HTTP_200_OK)
async def delete_user(
    user_id: str,
    _: AuthUser = Depends(require_auth()),
    users: UserDirectory = Depends(get_users),
):
    """Delete a user. Their posts go with them."""
    await users.remove(user_id)
    return Response(status_code=status.HTTP_200_OK)
