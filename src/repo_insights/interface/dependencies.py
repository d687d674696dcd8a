"""FastAPI dependency injection wiring."""

from __future__ import annotations

import httpx
from fastapi import Depends, Request

from repo_insights.infrastructure.config import Settings, get_settings
from repo_insights.infrastructure.github_rest_adapter import GitHubRestAdapter
from repo_insights.services.fetch_insights import FetchRepoInsightsUseCase


def build_http_client(
    settings: Settings, transport: httpx.AsyncBaseTransport | None = None
) -> httpx.AsyncClient:
    """Create the pooled client shared by every request.

    Redirects are followed: GitHub answers a renamed or transferred
    repository with a 301 pointing at its new location.
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout_seconds),
        follow_redirects=True,
        transport=transport,
    )


def get_http_client(request: Request) -> httpx.AsyncClient:
    client: httpx.AsyncClient | None = getattr(request.app.state, "http_client", None)
    assert client is not None, "application lifespan did not run"
    return client


def build_use_case(settings: Settings, client: httpx.AsyncClient) -> FetchRepoInsightsUseCase:
    """Wire the GitHub adapter into the use case.

    Raises :class:`ConfigurationError` (via the adapter) when no GitHub token
    is configured, before any request leaves the process.
    """
    token = settings.github_token.get_secret_value() if settings.github_token else None
    github_adapter = GitHubRestAdapter(
        client=client,
        token=token,
        base_url=settings.github_api_url,
        contributors_per_page=settings.contributors_per_page,
        commits_per_page=settings.commits_per_page,
    )
    return FetchRepoInsightsUseCase(repo_fetcher=github_adapter)


def get_use_case(
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> FetchRepoInsightsUseCase:
    """Build the use case for one request."""
    return build_use_case(settings, client)
