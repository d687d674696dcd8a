"""Pydantic request / response DTOs for the API boundary.

The JSON shapes mirror the field names GitHub itself uses, so a client that
already understands the GitHub REST payloads can read them unchanged.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from repo_insights.domain.entities import (
    AccountRef,
    CommitEntry,
    ContributorEntry,
    RepoInsights,
    RepositorySummary,
)


class InsightsRequest(BaseModel):
    """Request body for ``POST /api/github``."""

    model_config = ConfigDict(populate_by_name=True)

    repo_url: str = Field(alias="repoUrl")


class AccountOut(BaseModel):
    login: str
    avatar_url: str

    @classmethod
    def from_entity(cls, account: AccountRef) -> AccountOut:
        return cls(login=account.login, avatar_url=account.avatar_url)


class RepoDataOut(BaseModel):
    name: str
    full_name: str
    description: str | None
    stargazers_count: int
    forks_count: int
    open_issues_count: int
    owner: AccountOut

    @classmethod
    def from_entity(cls, repo: RepositorySummary) -> RepoDataOut:
        return cls(
            name=repo.name,
            full_name=repo.full_name,
            description=repo.description,
            stargazers_count=repo.stargazers_count,
            forks_count=repo.forks_count,
            open_issues_count=repo.open_issues_count,
            owner=AccountOut.from_entity(repo.owner),
        )


class ContributorOut(BaseModel):
    login: str
    contributions: int
    avatar_url: str

    @classmethod
    def from_entity(cls, contributor: ContributorEntry) -> ContributorOut:
        return cls(
            login=contributor.login,
            contributions=contributor.contributions,
            avatar_url=contributor.avatar_url,
        )


class CommitAuthorOut(BaseModel):
    date: str | None
    name: str


class CommitDetailOut(BaseModel):
    author: CommitAuthorOut
    message: str


class CommitOut(BaseModel):
    sha: str
    commit: CommitDetailOut
    author: AccountOut | None

    @classmethod
    def from_entity(cls, commit: CommitEntry) -> CommitOut:
        return cls(
            sha=commit.sha,
            commit=CommitDetailOut(
                author=CommitAuthorOut(date=commit.authored_at, name=commit.author_name),
                message=commit.message,
            ),
            author=AccountOut.from_entity(commit.author) if commit.author else None,
        )


class InsightsResponse(BaseModel):
    """Successful response from ``POST /api/github``."""

    model_config = ConfigDict(populate_by_name=True)

    repo_data: RepoDataOut = Field(alias="repoData")
    contributors: list[ContributorOut]
    commits: list[CommitOut]

    @classmethod
    def from_insights(cls, insights: RepoInsights) -> InsightsResponse:
        return cls(
            repo_data=RepoDataOut.from_entity(insights.repository),
            contributors=[ContributorOut.from_entity(c) for c in insights.contributors],
            commits=[CommitOut.from_entity(c) for c in insights.commits],
        )


class ErrorResponse(BaseModel):
    """Error envelope returned on all failure paths."""

    error: str
    details: str | None = None
