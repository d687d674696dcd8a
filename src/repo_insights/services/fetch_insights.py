"""Fetch-insights use case — resolve the URL, fetch, aggregate.

Depends only on the :class:`RepoFetcher` port and the pure aggregator.  The
interface layer injects the concrete GitHub adapter at runtime.
"""

from __future__ import annotations

import asyncio
import logging

from repo_insights.domain.entities import RawRepoData, RepoInsights
from repo_insights.domain.ports.repo_fetcher import RepoFetcher
from repo_insights.domain.value_objects import GitHubUrl
from repo_insights.services.aggregator import aggregate

logger = logging.getLogger(__name__)


class FetchRepoInsightsUseCase:
    """Orchestrates the repo URL → insights pipeline.

    Parameters
    ----------
    repo_fetcher:
        Adapter that can fetch repository, contributor and commit data.
    """

    def __init__(self, repo_fetcher: RepoFetcher) -> None:
        self._fetcher = repo_fetcher

    async def execute(self, repo_url: str) -> RepoInsights:
        """Run the full pipeline for one repository URL."""
        url = GitHubUrl.from_string(repo_url)
        logger.info("Fetching insights for %s", url.full_name)

        raw = await self.fetch_raw(url)
        insights = aggregate(raw)

        logger.info(
            "Aggregated %s: %d contributors, %d commits over %d days",
            url.full_name,
            len(insights.contributors),
            len(insights.commits),
            len(insights.commit_frequency),
        )
        return insights

    async def fetch_raw(self, url: GitHubUrl) -> RawRepoData:
        """Issue the three independent GitHub calls concurrently.

        The first failure propagates; nothing partial is returned.
        """
        repository, contributors, commits = await asyncio.gather(
            self._fetcher.fetch_repository(url),
            self._fetcher.fetch_contributors(url),
            self._fetcher.fetch_commits(url),
        )
        return RawRepoData(
            repository=repository,
            contributors=contributors,
            commits=commits,
        )
