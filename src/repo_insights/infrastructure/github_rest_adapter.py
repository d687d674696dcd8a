"""GitHub REST API adapter — implements the RepoFetcher port."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from repo_insights.domain.exceptions import (
    ConfigurationError,
    GitHubRateLimitError,
    UpstreamError,
)
from repo_insights.domain.value_objects import GitHubUrl

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"


class GitHubRestAdapter:
    """Concrete RepoFetcher backed by the GitHub v3 REST API.

    The token is mandatory: constructing the adapter without one raises
    :class:`ConfigurationError`, so no request is ever sent unauthenticated.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str | None,
        *,
        base_url: str = _GITHUB_API,
        contributors_per_page: int = 10,
        commits_per_page: int = 100,
    ) -> None:
        if not token or not token.strip():
            raise ConfigurationError("GITHUB_TOKEN env var not set.")
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._contributors_per_page = contributors_per_page
        self._commits_per_page = commits_per_page
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "repo-insights/1.0",
            "X-GitHub-Api-Version": "2022-11-28",
            "Authorization": f"Bearer {token.strip()}",
        }

    async def fetch_repository(self, url: GitHubUrl) -> dict[str, Any]:
        """GET /repos/{owner}/{repo}."""
        resp = await self._api_get(f"/repos/{url.owner}/{url.repo}")
        data: dict[str, Any] = resp.json()
        return data

    async def fetch_contributors(self, url: GitHubUrl) -> list[dict[str, Any]]:
        """GET /repos/{owner}/{repo}/contributors?per_page=N."""
        resp = await self._api_get(
            f"/repos/{url.owner}/{url.repo}/contributors",
            params={"per_page": str(self._contributors_per_page)},
        )
        # An empty repository answers 204 with no body.
        if resp.status_code == 204 or not resp.content:
            return []
        data: list[dict[str, Any]] = resp.json()
        return data

    async def fetch_commits(self, url: GitHubUrl) -> list[dict[str, Any]]:
        """GET /repos/{owner}/{repo}/commits?per_page=N (default branch)."""
        resp = await self._api_get(
            f"/repos/{url.owner}/{url.repo}/commits",
            params={"per_page": str(self._commits_per_page)},
        )
        data: list[dict[str, Any]] = resp.json()
        return data

    async def _api_get(
        self,
        endpoint: str,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Perform a GitHub API GET request with error translation."""
        url = f"{self._base_url}{endpoint}"
        logger.debug("GET %s params=%s", url, params)
        try:
            resp = await self._client.get(
                url, headers=self._api_headers, params=params
            )
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Network error fetching {url}: {exc}") from exc

        if resp.is_success:
            return resp

        message = _upstream_message(resp)

        if _is_rate_limited(resp, message):
            logger.warning(
                "GitHub API rate limit hit on %s (resets at %s)",
                endpoint,
                _reset_time(resp),
            )
            raise GitHubRateLimitError(message)

        raise UpstreamError(message, status_code=resp.status_code)


def _upstream_message(resp: httpx.Response) -> str:
    """Pull GitHub's ``message`` field out of an error body, if there is one."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"GitHub API returned HTTP {resp.status_code}"


def _is_rate_limited(resp: httpx.Response, message: str) -> bool:
    if resp.status_code == 429:
        return True
    if resp.status_code != 403:
        return False
    return (
        "rate limit" in message.lower()
        or resp.headers.get("x-ratelimit-remaining", "") == "0"
    )


def _reset_time(resp: httpx.Response) -> str:
    reset_raw = resp.headers.get("x-ratelimit-reset", "")
    try:
        return datetime.fromtimestamp(int(reset_raw), tz=timezone.utc).strftime(
            "%Y-%m-%d %H:%M:%S UTC"
        )
    except (ValueError, OSError):
        return reset_raw or "unknown"
