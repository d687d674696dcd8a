"""Port: repository fetcher — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Any, Protocol

from repo_insights.domain.value_objects import GitHubUrl


class RepoFetcher(Protocol):
    """Abstract contract for fetching raw GitHub repository data."""

    async def fetch_repository(self, url: GitHubUrl) -> dict[str, Any]:
        """Return the raw repository object."""
        ...

    async def fetch_contributors(self, url: GitHubUrl) -> list[dict[str, Any]]:
        """Return the top contributors, ranked by contribution count."""
        ...

    async def fetch_commits(self, url: GitHubUrl) -> list[dict[str, Any]]:
        """Return the most recent commits on the default branch."""
        ...
