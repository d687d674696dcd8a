"""FastAPI application factory.

The pooled ``httpx.AsyncClient`` lives on ``app.state`` for the lifetime of
the process; every request builds its own adapter and use case around it.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from repo_insights.infrastructure.config import get_settings
from repo_insights.interface.dependencies import build_http_client
from repo_insights.interface.error_handlers import register_error_handlers
from repo_insights.interface.routes import router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _github_client(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    app.state.http_client = build_http_client(settings)
    if settings.github_token is None:
        logger.warning("GITHUB_TOKEN is not set; every lookup will be rejected")
    try:
        yield
    finally:
        await app.state.http_client.aclose()
        app.state.http_client = None


def create_app() -> FastAPI:
    """Build and wire the FastAPI application."""
    app = FastAPI(
        title="GitHub Repository Insights",
        version="1.0.0",
        description=(
            "Repository metadata, top contributors and recent commits for a "
            "GitHub repository, with commit counts per day."
        ),
        lifespan=_github_client,
    )
    register_error_handlers(app)
    app.include_router(router)
    return app
