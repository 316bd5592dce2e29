"""
Quill - main entry point.

Runs the HTTP API with uvicorn using settings from the environment:

    JWT_SECRET_KEY=... quill
"""

from __future__ import annotations

import logging

import uvicorn

from quill.config import get_settings


def main():
    """Main entry point."""
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    uvicorn.run(
        "quill.api.app:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
