"""
Application configuration.

Loads settings from environment variables (and an optional .env file).
The JWT secret has no default: a process without one fails at startup.
"""

from __future__ import annotations

import re
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_duration(value: str | int) -> int:
    """
    Parse a duration like "1d", "12h", "30m", "45s" or "3600" into seconds.

    Raises:
        ValueError: if the value is not a positive duration
    """
    if isinstance(value, int):
        seconds = value
    else:
        match = _DURATION_RE.match(value)
        if not match:
            raise ValueError(f"Invalid duration: {value!r}")
        amount, unit = match.groups()
        seconds = int(amount) * _DURATION_UNITS[unit]
    if seconds <= 0:
        raise ValueError(f"Duration must be positive: {value!r}")
    return seconds


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================

    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # ==========================================================================
    # API Server
    # ==========================================================================

    api_host: str = "0.0.0.0"
    api_port: int = 3000
    api_prefix: str = "api"
    cors_origins: str = "*"
    # Interactive docs at /{prefix}/docs
    swagger_enabled: bool = False

    # ==========================================================================
    # Database
    # ==========================================================================

    # Empty means the in-memory store
    database_url: str = ""
    database_echo: bool = False
    seed_database: bool = False

    # ==========================================================================
    # Authentication
    # ==========================================================================

    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_expiration: str = "1d"
    password_hash_iterations: int = 100_000

    # ==========================================================================
    # Optional Services
    # ==========================================================================

    sentry_dsn: str = ""

    @field_validator("jwt_secret_key")
    @classmethod
    def _secret_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("JWT_SECRET_KEY is not set")
        return value

    @field_validator("jwt_expiration")
    @classmethod
    def _expiration_parses(cls, value: str) -> str:
        parse_duration(value)
        return value

    @field_validator("api_prefix")
    @classmethod
    def _strip_prefix(cls, value: str) -> str:
        return value.strip("/")

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @property
    def jwt_expiration_seconds(self) -> int:
        return parse_duration(self.jwt_expiration)

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def route_prefix(self) -> str:
        """Global prefix for API routes, e.g. "/api" (empty for none)."""
        return f"/{self.api_prefix}" if self.api_prefix else ""


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
