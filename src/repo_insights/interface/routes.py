"""API routes — thin controllers that delegate to the use case."""

from __future__ import annotations

import logging

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from pydantic import ValidationError

from repo_insights.domain.exceptions import InvalidRepositoryUrlError
from repo_insights.infrastructure.config import Settings, get_settings
from repo_insights.interface.dependencies import (
    build_use_case,
    get_http_client,
    get_use_case,
)
from repo_insights.interface.error_handlers import describe_error
from repo_insights.interface.presentation import (
    DEFAULT_REPO_URL,
    build_view,
    render_page,
)
from repo_insights.interface.schemas import (
    ErrorResponse,
    InsightsRequest,
    InsightsResponse,
)
from repo_insights.services.fetch_insights import FetchRepoInsightsUseCase

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/api/github",
    response_model=InsightsResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid GitHub repository URL"},
        429: {"model": ErrorResponse, "description": "GitHub API rate limit exceeded"},
        500: {"model": ErrorResponse, "description": "Missing token or upstream failure"},
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {
                    "schema": InsightsRequest.model_json_schema(by_alias=True)
                }
            },
        }
    },
)
async def repo_insights(
    request: Request,
    use_case: FetchRepoInsightsUseCase = Depends(get_use_case),
) -> InsightsResponse:
    """Fetch metadata, top contributors and recent commits for a repository.

    The body is read only after ``get_use_case`` has resolved, so a missing
    GitHub token is reported even when the body itself is unreadable.
    """
    try:
        body = InsightsRequest.model_validate_json(await request.body())
    except ValidationError as exc:
        raise InvalidRepositoryUrlError(
            "Request body must be a JSON object with a repoUrl string."
        ) from exc
    insights = await use_case.execute(body.repo_url)
    return InsightsResponse.from_insights(insights)


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def insights_page(
    repo_url: str | None = None,
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> HTMLResponse:
    """Render the lookup form and, when a URL was submitted, its insights."""
    if not repo_url:
        return HTMLResponse(render_page(DEFAULT_REPO_URL))

    try:
        insights = await build_use_case(settings, client).execute(repo_url)
    except Exception as exc:  # noqa: BLE001
        status_code, body = describe_error(exc)
        logger.warning("Lookup of %r failed: %s", repo_url, exc)
        message = body["error"]
        if body.get("details"):
            message = f"{message}: {body['details']}"
        return HTMLResponse(render_page(repo_url, error=message), status_code=status_code)

    return HTMLResponse(render_page(repo_url, view=build_view(insights)))


@router.get("/health", include_in_schema=False)
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}
