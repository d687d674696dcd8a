"""Aggregation of raw GitHub payloads into UI-ready insights.

Everything in this module is pure and synchronous: no I/O, no module-level
state.  The same raw input always produces the same :class:`RepoInsights`.

Commits whose authored timestamp is missing or unparseable stay in the commit
list (with ``day=None``) but are left out of the per-day histogram.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Sequence

from repo_insights.domain.entities import (
    AccountRef,
    CommitEntry,
    ContributorEntry,
    DailyFrequencyEntry,
    RawRepoData,
    RepoInsights,
    RepositorySummary,
)
from repo_insights.domain.exceptions import MalformedCommitError

logger = logging.getLogger(__name__)


def aggregate(raw: RawRepoData) -> RepoInsights:
    """Normalise the three raw payloads and derive the daily histogram."""
    commits = normalize_commits(raw.commits)
    frequency = _tally(c.day for c in commits if c.day is not None)
    return RepoInsights(
        repository=summarize_repository(raw.repository),
        contributors=normalize_contributors(raw.contributors),
        commits=commits,
        commit_frequency=[
            DailyFrequencyEntry(day=day, count=count) for day, count in frequency.items()
        ],
    )


# ── Projections ─────────────────────────────────────────────────────────────


def summarize_repository(raw: Mapping[str, Any]) -> RepositorySummary:
    owner = raw.get("owner") or {}
    return RepositorySummary(
        name=raw["name"],
        full_name=raw["full_name"],
        description=raw.get("description"),
        stargazers_count=raw.get("stargazers_count", 0),
        forks_count=raw.get("forks_count", 0),
        open_issues_count=raw.get("open_issues_count", 0),
        owner=AccountRef(
            login=owner.get("login", ""),
            avatar_url=owner.get("avatar_url", ""),
        ),
    )


def normalize_contributors(raw: Sequence[Mapping[str, Any]]) -> list[ContributorEntry]:
    """Project contributors in source order.

    GitHub already ranks them by contributions, so element 0 is the maximum
    and acts as the 100% reference for relative bars.
    """
    return [
        ContributorEntry(
            login=item.get("login", ""),
            avatar_url=item.get("avatar_url", ""),
            contributions=item.get("contributions", 0),
        )
        for item in raw
    ]


def normalize_commits(raw: Sequence[Mapping[str, Any]]) -> list[CommitEntry]:
    return [_normalize_commit(item) for item in raw]


def _normalize_commit(item: Mapping[str, Any]) -> CommitEntry:
    meta = item.get("commit") or {}
    recorded = meta.get("author") or {}
    account = item.get("author")
    authored_at = recorded.get("date")

    try:
        day: str | None = day_key(authored_at)
    except MalformedCommitError as exc:
        logger.warning("Commit %s left out of histogram: %s", item.get("sha"), exc)
        day = None

    return CommitEntry(
        sha=item["sha"],
        author_name=recorded.get("name", ""),
        authored_at=authored_at,
        message=meta.get("message", ""),
        author=(
            AccountRef(
                login=account.get("login", ""),
                avatar_url=account.get("avatar_url", ""),
            )
            if account
            else None
        ),
        day=day,
    )


# ── Histogram ───────────────────────────────────────────────────────────────


def day_key(timestamp: str | None) -> str:
    """Truncate an ISO-8601 timestamp to its UTC calendar day (``YYYY-MM-DD``).

    Naive timestamps are taken to be UTC already.
    """
    if not timestamp:
        raise MalformedCommitError("missing authored timestamp")
    # datetime.fromisoformat only learned the "Z" suffix in 3.11.
    text = timestamp.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        moment = datetime.fromisoformat(text)
    except ValueError as exc:
        raise MalformedCommitError(f"unparseable timestamp {timestamp!r}") from exc
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).date().isoformat()


def commit_frequency(timestamps: Iterable[str | None]) -> dict[str, int]:
    """Count timestamps per UTC day, in first-seen order.

    Raises :class:`MalformedCommitError` on the first unusable timestamp;
    callers that want to skip those should filter first.
    """
    return _tally(day_key(timestamp) for timestamp in timestamps)


def _tally(days: Iterable[str]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for day in days:
        counts[day] = counts.get(day, 0) + 1
    return counts
