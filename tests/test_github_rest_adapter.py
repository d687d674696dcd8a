"""Tests for the GitHub REST adapter against a stubbed transport."""

from __future__ import annotations

import httpx
import pytest

from repo_insights.domain.exceptions import (
    ConfigurationError,
    GitHubRateLimitError,
    UpstreamError,
)
from repo_insights.domain.value_objects import GitHubUrl
from repo_insights.infrastructure.github_rest_adapter import GitHubRestAdapter

URL = GitHubUrl.from_string("https://github.com/acme/widgets")


@pytest.fixture
def adapter(http_client) -> GitHubRestAdapter:
    return GitHubRestAdapter(client=http_client, token="secret")


@pytest.mark.parametrize("token", [None, "", "   "])
def test_missing_token_is_a_configuration_error(github, token):
    client = httpx.AsyncClient(transport=httpx.MockTransport(github))
    with pytest.raises(ConfigurationError):
        GitHubRestAdapter(client=client, token=token)
    assert github.requests == []


@pytest.mark.asyncio
async def test_fetch_repository_sends_bearer_token(adapter, github, raw_repository):
    data = await adapter.fetch_repository(URL)
    assert data == raw_repository
    [request] = github.requests
    assert request.headers["Authorization"] == "Bearer secret"
    assert str(request.url) == "https://api.github.com/repos/acme/widgets"


@pytest.mark.asyncio
async def test_page_sizes_are_fixed(adapter, github):
    await adapter.fetch_contributors(URL)
    await adapter.fetch_commits(URL)
    contributors_req, commits_req = github.requests
    assert contributors_req.url.params["per_page"] == "10"
    assert commits_req.url.params["per_page"] == "100"


@pytest.mark.asyncio
async def test_page_sizes_come_from_constructor(http_client, github):
    adapter = GitHubRestAdapter(
        client=http_client, token="secret", contributors_per_page=5, commits_per_page=20
    )
    await adapter.fetch_contributors(URL)
    await adapter.fetch_commits(URL)
    assert [r.url.params["per_page"] for r in github.requests] == ["5", "20"]


@pytest.mark.asyncio
async def test_empty_repository_contributors(adapter, github):
    github.routes["/repos/acme/widgets/contributors"] = (204, None, {})
    assert await adapter.fetch_contributors(URL) == []


@pytest.mark.asyncio
async def test_forbidden_with_rate_limit_message_is_rate_limited(adapter, github):
    github.fail(
        "/repos/acme/widgets",
        403,
        "API rate limit exceeded for 1.2.3.4. (But here's the good news: ...)",
        headers={"x-ratelimit-reset": "1700000000"},
    )
    with pytest.raises(GitHubRateLimitError):
        await adapter.fetch_repository(URL)


@pytest.mark.asyncio
async def test_forbidden_with_exhausted_quota_header_is_rate_limited(adapter, github):
    github.fail("/repos/acme/widgets", 403, "Forbidden", headers={"x-ratelimit-remaining": "0"})
    with pytest.raises(GitHubRateLimitError):
        await adapter.fetch_repository(URL)


@pytest.mark.asyncio
async def test_too_many_requests_is_rate_limited(adapter, github):
    github.fail("/repos/acme/widgets/commits", 429, "You have exceeded a secondary rate limit")
    with pytest.raises(GitHubRateLimitError):
        await adapter.fetch_commits(URL)


@pytest.mark.asyncio
async def test_plain_forbidden_is_upstream_error(adapter, github):
    github.fail("/repos/acme/widgets", 403, "Resource not accessible by integration")
    with pytest.raises(UpstreamError) as excinfo:
        await adapter.fetch_repository(URL)
    assert excinfo.value.status_code == 403
    assert str(excinfo.value) == "Resource not accessible by integration"


@pytest.mark.asyncio
async def test_not_found_carries_upstream_message(adapter, github):
    github.fail("/repos/acme/widgets", 404, "Not Found")
    with pytest.raises(UpstreamError) as excinfo:
        await adapter.fetch_repository(URL)
    assert excinfo.value.status_code == 404
    assert str(excinfo.value) == "Not Found"


@pytest.mark.asyncio
async def test_non_json_error_body_gets_generic_message(adapter, github):
    github.routes["/repos/acme/widgets"] = (502, None, {})
    with pytest.raises(UpstreamError) as excinfo:
        await adapter.fetch_repository(URL)
    assert excinfo.value.status_code == 502
    assert "HTTP 502" in str(excinfo.value)


@pytest.mark.asyncio
async def test_network_failure_is_upstream_error_without_status():
    def boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(boom)) as client:
        adapter = GitHubRestAdapter(client=client, token="secret")
        with pytest.raises(UpstreamError) as excinfo:
            await adapter.fetch_repository(URL)
    assert excinfo.value.status_code is None


@pytest.mark.asyncio
async def test_renamed_repository_redirect_is_followed(adapter, github, raw_repository):
    github.routes["/repos/old-owner/widgets"] = (
        301,
        {"message": "Moved Permanently", "url": "https://api.github.com/repositories/1"},
        {"location": "https://api.github.com/repositories/1"},
    )
    github.routes["/repositories/1"] = (200, raw_repository, {})

    data = await adapter.fetch_repository(GitHubUrl.from_string("https://github.com/old-owner/widgets"))

    assert data["full_name"] == "acme/widgets"
    assert [r.url.path for r in github.requests] == ["/repos/old-owner/widgets", "/repositories/1"]
    assert github.requests[1].headers["Authorization"] == "Bearer secret"
