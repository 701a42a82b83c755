"""Unit tests for the GitHub repository lookup."""

import httpx
import pytest

from core.exceptions import (
    ErrorCode,
    GitHubProfileNotFoundError,
    GitHubUnavailableError,
)
from infrastructure.github.client import GitHubClient

REPOS = [{"id": 1, "name": "first"}, {"id": 2, "name": "second"}]


def _client(handler, **kwargs) -> GitHubClient:
    return GitHubClient(
        base_url="https://api.github.test",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


class TestListRepos:
    @pytest.mark.asyncio
    async def test_returns_upstream_body_unmodified(self):
        client = _client(lambda request: httpx.Response(200, json=REPOS))

        result = await client.list_repos("octocat")

        assert result == REPOS

    @pytest.mark.asyncio
    async def test_sends_single_request_with_paging_and_sort(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        await _client(handler, user_agent="devfolio-test").list_repos("octocat")

        assert len(seen) == 1
        request = seen[0]
        assert request.method == "GET"
        assert request.url.path == "/users/octocat/repos"
        assert request.url.params["per_page"] == "5"
        assert request.url.params["sort"] == "created:asc"
        assert request.headers["user-agent"] == "devfolio-test"

    @pytest.mark.asyncio
    async def test_sends_app_credentials_when_configured(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        await _client(handler, client_id="id", client_secret="secret").list_repos("octocat")

        assert seen[0].headers["authorization"].startswith("Basic ")

    @pytest.mark.asyncio
    async def test_no_credentials_by_default(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        await _client(handler, client_id="", client_secret="").list_repos("octocat")

        assert "authorization" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_username_is_escaped_into_the_path(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        await _client(handler).list_repos("a/b")

        assert seen[0].url.raw_path.startswith(b"/users/a%2Fb/repos")

    @pytest.mark.asyncio
    async def test_non_success_status_is_not_found(self):
        client = _client(lambda request: httpx.Response(404, json={"message": "Not Found"}))

        with pytest.raises(GitHubProfileNotFoundError) as exc_info:
            await client.list_repos("nonexistent-user-xyz")

        assert exc_info.value.status_code == 404
        assert exc_info.value.error_code == ErrorCode.GITHUB_PROFILE_NOT_FOUND
        assert exc_info.value.details["upstream_status"] == 404

    @pytest.mark.asyncio
    async def test_rate_limited_upstream_is_not_found(self):
        client = _client(lambda request: httpx.Response(403, json={"message": "rate limit"}))

        with pytest.raises(GitHubProfileNotFoundError):
            await client.list_repos("octocat")

    @pytest.mark.asyncio
    async def test_transport_failure_is_upstream_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(GitHubUnavailableError) as exc_info:
            await _client(handler).list_repos("octocat")

        assert exc_info.value.error_code == ErrorCode.UPSTREAM_ERROR

    @pytest.mark.asyncio
    async def test_unreadable_body_is_upstream_error(self):
        client = _client(lambda request: httpx.Response(200, content=b"<html>oops</html>"))

        with pytest.raises(GitHubUnavailableError):
            await client.list_repos("octocat")
