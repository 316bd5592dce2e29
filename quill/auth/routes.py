# =============================================================================
# Auth API Routes
# =============================================================================
#
# Endpoints:
#   POST /auth/login - Exchange email + password for a bearer token
#
# Registration lives at POST /users.
#
# =============================================================================

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict

from quill.api.dependencies import get_authenticator
from quill.auth.service import Authenticator
from quill.core.models import EmailAddress, LoginResponse

router = APIRouter(prefix="/auth", tags=["auth"])


# =============================================================================
# Request/Response Models
# =============================================================================

class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailAddress
    password: str


# =============================================================================
# Public Endpoints
# =============================================================================

@router.post("/login", response_model=LoginResponse, status_code=status.HTTP_200_OK)
async def login(
    data: LoginRequest,
    authenticator: Authenticator = Depends(get_authenticator),
):
    """
    Authenticate and get an access token.
    """
    return await authenticator.login(data.email, data.password)
