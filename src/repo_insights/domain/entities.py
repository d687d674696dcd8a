"""Domain entities — pure data structures with no external dependencies.

Everything here is request-scoped: built fresh for each lookup and thrown
away once the response has been rendered.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class AccountRef:
    """A GitHub account as shown next to a repo, contributor or commit."""

    login: str
    avatar_url: str


@dataclass(frozen=True, slots=True)
class RepositorySummary:
    """High-level metadata about a GitHub repository."""

    name: str
    full_name: str
    description: str | None
    stargazers_count: int
    forks_count: int
    open_issues_count: int
    owner: AccountRef


@dataclass(frozen=True, slots=True)
class ContributorEntry:
    """One of the top contributors, in the order GitHub ranked them."""

    login: str
    avatar_url: str
    contributions: int


@dataclass(frozen=True, slots=True)
class CommitEntry:
    """A commit from the recent-history window.

    ``author_name`` always comes from the commit's own metadata.  ``author`` is
    the matched GitHub account and is ``None`` when GitHub could not resolve one.
    """

    sha: str
    author_name: str
    authored_at: str | None
    message: str
    author: AccountRef | None = None
    day: str | None = None  # UTC "YYYY-MM-DD"; None when authored_at is unusable

    @property
    def summary(self) -> str:
        return self.message.splitlines()[0] if self.message else ""


@dataclass(frozen=True, slots=True)
class DailyFrequencyEntry:
    """Number of commits authored on one calendar day."""

    day: str
    count: int


@dataclass(frozen=True, slots=True)
class RawRepoData:
    """Untouched JSON payloads from the three GitHub calls."""

    repository: dict[str, Any]
    contributors: list[dict[str, Any]]
    commits: list[dict[str, Any]]


@dataclass(frozen=True, slots=True)
class RepoInsights:
    """The aggregated, UI-ready result for a single repository."""

    repository: RepositorySummary
    contributors: list[ContributorEntry] = field(default_factory=list)
    commits: list[CommitEntry] = field(default_factory=list)
    commit_frequency: list[DailyFrequencyEntry] = field(default_factory=list)
