"""
FastAPI application for the quill backend.

Build one with `create_app()`; uvicorn runs it as a factory
(`uvicorn quill.api.app:create_app --factory`).
"""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from quill import __version__
from quill.api import posts as posts_api
from quill.api import users as users_api
from quill.auth import Authenticator, PasswordHasher, TokenCodec, auth_router
from quill.config import Settings, get_settings
from quill.core.errors import QuillError, UnauthorizedError
from quill.integrations.sentry import capture_exception, init_sentry
from quill.services.posts import PostRegistry
from quill.services.users import UserDirectory
from quill.storage import MetadataStorage, create_storage
from quill.storage.seed import seed_database

logger = logging.getLogger(__name__)


# =============================================================================
# Error Mapping
# =============================================================================


def _error_body(status_code: int, message: str | list[str], error: str) -> dict:
    return {"statusCode": status_code, "message": message, "error": error}


async def quill_error_handler(request: Request, exc: QuillError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.status_code, exc.detail, exc.error),
        headers=headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return JSONResponse(
        status_code=400,
        content=_error_body(400, messages, "Bad Request"),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    capture_exception(exc, path=request.url.path)
    return JSONResponse(
        status_code=500,
        content=_error_body(500, "Internal server error", "Internal Server Error"),
    )


# =============================================================================
# App Factory
# =============================================================================


def create_app(
    settings: Settings | None = None,
    storage: MetadataStorage | None = None,
) -> FastAPI:
    """
    Wire storage, services and routes into a FastAPI app.

    Args:
        settings: defaults to the environment (a missing JWT secret fails here)
        storage: defaults to the backend chosen by `settings.database_url`
    """
    settings = settings or get_settings()
    if storage is None:
        storage = create_storage(settings)

    hasher = PasswordHasher(settings.password_hash_iterations)
    codec = TokenCodec.from_settings(settings)
    users = UserDirectory(storage, hasher)
    posts = PostRegistry(storage)
    authenticator = Authenticator(users, hasher, codec)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize and cleanup app resources."""
        init_sentry(settings)

        await storage.initialize()
        if settings.seed_database:
            await seed_database(users, posts)

        logger.info(f"Quill API starting in {settings.environment} mode")

        yield

        await storage.close()
        logger.info("Quill API shutting down")

    prefix = settings.route_prefix
    docs = settings.swagger_enabled

    app = FastAPI(
        title="Quill API",
        description="Users, authentication and posts",
        version=__version__,
        lifespan=lifespan,
        docs_url=f"{prefix}/docs" if docs else None,
        openapi_url=f"{prefix}/docs/openapi.json" if docs else None,
        redoc_url=None,
    )

    app.state.settings = settings
    app.state.storage = storage
    app.state.users = users
    app.state.posts = posts
    app.state.authenticator = authenticator

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials="*" not in settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(QuillError, quill_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Routers
    app.include_router(auth_router, prefix=prefix)
    app.include_router(users_api.router, prefix=prefix)
    app.include_router(posts_api.router, prefix=prefix)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "quill-api"}

    return app
