"""Global exception handlers — translate domain errors to HTTP responses.

Each domain exception maps to a specific HTTP status code and an
``{"error": "...", "details": "..."}`` envelope (``details`` only where the
upstream supplied something worth showing).
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from repo_insights.domain.exceptions import (
    ConfigurationError,
    GitHubRateLimitError,
    InvalidRepositoryUrlError,
    RepoInsightsError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

MISSING_TOKEN_MESSAGE = "GITHUB_TOKEN env var not set."
INVALID_URL_MESSAGE = "Invalid GitHub repository URL"
RATE_LIMIT_MESSAGE = (
    "GitHub API rate limit exceeded. Please try again later or set GITHUB_TOKEN."
)
FETCH_FAILED_MESSAGE = "Failed to fetch repository data"
UNEXPECTED_DETAILS = "An unexpected error occurred. Please try again later."


def describe_error(exc: Exception) -> tuple[int, dict[str, Any]]:
    """Return ``(status_code, body)`` for any exception raised while fetching."""
    if isinstance(exc, ConfigurationError):
        return 500, {"error": MISSING_TOKEN_MESSAGE}
    if isinstance(exc, InvalidRepositoryUrlError):
        return 400, {"error": INVALID_URL_MESSAGE}
    if isinstance(exc, GitHubRateLimitError):
        return 429, {"error": RATE_LIMIT_MESSAGE}
    if isinstance(exc, UpstreamError):
        return exc.status_code or 500, {
            "error": FETCH_FAILED_MESSAGE,
            "details": str(exc),
        }
    if isinstance(exc, RepoInsightsError):
        return 500, {"error": FETCH_FAILED_MESSAGE, "details": str(exc)}
    return 500, {"error": FETCH_FAILED_MESSAGE, "details": UNEXPECTED_DETAILS}


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── Domain exceptions ───────────────────────────────────────────────

    @app.exception_handler(RepoInsightsError)
    async def domain_handler(request: Request, exc: RepoInsightsError) -> JSONResponse:
        status_code, body = describe_error(exc)
        logger.warning("%s: %s", type(exc).__name__, exc)
        return JSONResponse(status_code=status_code, content=body)

    # ── Malformed request body ──────────────────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning("Rejected request body: %s", exc.errors())
        return JSONResponse(status_code=400, content={"error": INVALID_URL_MESSAGE})

    # ── Catch-all for unexpected errors ─────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        status_code, body = describe_error(exc)
        return JSONResponse(status_code=status_code, content=body)
