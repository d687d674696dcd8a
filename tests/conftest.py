"""Shared fixtures: canned GitHub payloads and a stubbed GitHub API."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest
import pytest_asyncio
from pydantic import SecretStr

from repo_insights.infrastructure.config import Settings, get_settings
from repo_insights.interface.app import create_app
from repo_insights.interface.dependencies import build_http_client, get_http_client


@pytest.fixture
def raw_repository() -> dict[str, Any]:
    return {
        "id": 1,
        "name": "widgets",
        "full_name": "acme/widgets",
        "description": "Widgets for everyone",
        "stargazers_count": 42,
        "forks_count": 7,
        "open_issues_count": 3,
        "default_branch": "main",
        "owner": {
            "login": "acme",
            "id": 9,
            "avatar_url": "https://avatars.example/acme.png",
            "type": "Organization",
        },
    }


@pytest.fixture
def raw_contributors() -> list[dict[str, Any]]:
    return [
        {"login": "alice", "avatar_url": "https://avatars.example/alice.png", "contributions": 120},
        {"login": "bob", "avatar_url": "https://avatars.example/bob.png", "contributions": 60},
        {"login": "carol", "avatar_url": "https://avatars.example/carol.png", "contributions": 15},
    ]


def make_commit(
    sha: str,
    date: str | None,
    *,
    name: str = "Alice Example",
    message: str = "Fix the thing\n\nLonger body.",
    login: str | None = "alice",
) -> dict[str, Any]:
    author: dict[str, Any] = {"name": name, "email": f"{sha}@example.com"}
    if date is not None:
        author["date"] = date
    return {
        "sha": sha,
        "commit": {"author": author, "committer": dict(author), "message": message},
        "author": (
            {"login": login, "avatar_url": f"https://avatars.example/{login}.png"}
            if login
            else None
        ),
    }


@pytest.fixture
def raw_commits() -> list[dict[str, Any]]:
    return [
        make_commit("c3", "2024-01-06T08:00:00Z"),
        make_commit("c2", "2024-01-05T23:00:00Z", name="Bob", login=None),
        make_commit("c1", "2024-01-05T10:00:00Z"),
    ]


class GitHubStub:
    """``httpx.MockTransport`` handler that answers the three repo endpoints."""

    def __init__(
        self,
        repository: dict[str, Any],
        contributors: list[dict[str, Any]],
        commits: list[dict[str, Any]],
    ) -> None:
        self.routes: dict[str, tuple[int, Any, dict[str, str]]] = {
            "/repos/acme/widgets": (200, repository, {}),
            "/repos/acme/widgets/contributors": (200, contributors, {}),
            "/repos/acme/widgets/commits": (200, commits, {}),
        }
        self.requests: list[httpx.Request] = []

    def fail(
        self,
        path: str,
        status_code: int,
        message: str,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.routes[path] = (status_code, {"message": message}, headers or {})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status_code, body, headers = self.routes.get(
            request.url.path, (404, {"message": "Not Found"}, {})
        )
        return httpx.Response(status_code, json=body, headers=headers)


@pytest.fixture
def github(raw_repository, raw_contributors, raw_commits) -> GitHubStub:
    return GitHubStub(raw_repository, raw_contributors, raw_commits)


@pytest.fixture
def settings() -> Settings:
    return Settings(github_token=SecretStr("test-token"), _env_file=None)


@pytest_asyncio.fixture
async def http_client(github: GitHubStub, settings: Settings):
    async with build_http_client(settings, transport=httpx.MockTransport(github)) as client:
        yield client


@pytest.fixture
def app_factory(http_client) -> Callable[[Settings], Any]:
    def _build(settings: Settings):
        app = create_app()
        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_http_client] = lambda: http_client
        return app

    return _build


@pytest_asyncio.fixture
async def client(app_factory, settings):
    """ASGI client for the app, talking to the stubbed GitHub API."""
    transport = httpx.ASGITransport(app=app_factory(settings), raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
