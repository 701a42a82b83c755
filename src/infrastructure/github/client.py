"""GitHub repository lookup.

Forwards a single read to ``GET /users/{username}/repos`` and hands the JSON
body back untouched. Nothing is cached and failed calls are not retried.
"""

from typing import Any, Optional
from urllib.parse import quote

import httpx
import structlog

from core.config import settings
from core.exceptions import GitHubProfileNotFoundError, GitHubUnavailableError

logger = structlog.get_logger()

REPOS_PER_PAGE = 5
REPOS_SORT = "created:asc"


class GitHubClient:
    """Thin async client for a user's public repositories."""

    def __init__(
        self,
        base_url: str = settings.github_api_url,
        client_id: str = settings.github_client_id,
        client_secret: str = settings.github_client_secret,
        user_agent: str = settings.github_user_agent,
        timeout: Optional[float] = settings.github_timeout,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._auth = (client_id, client_secret) if client_id and client_secret else None
        self._user_agent = user_agent
        self._timeout = timeout
        self._transport = transport

    async def list_repos(self, username: str) -> Any:
        """
        Fetch the five oldest-created repositories of a GitHub user.

        Args:
            username: GitHub login, passed through as typed

        Returns:
            The decoded response body, unmodified

        Raises:
            GitHubProfileNotFoundError: GitHub answered with a non-200 status
            GitHubUnavailableError: GitHub was unreachable or sent unreadable JSON
        """
        url = f"{self._base_url}/users/{quote(username, safe='')}/repos"
        params: dict[str, str | int] = {"per_page": REPOS_PER_PAGE, "sort": REPOS_SORT}

        try:
            async with httpx.AsyncClient(
                auth=self._auth,
                headers={"User-Agent": self._user_agent},
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error("github_request_failed", username=username, error=str(e))
            raise GitHubUnavailableError() from e

        if response.status_code != 200:
            logger.info(
                "github_profile_not_found",
                username=username,
                upstream_status=response.status_code,
            )
            raise GitHubProfileNotFoundError(username, response.status_code)

        try:
            return response.json()
        except ValueError:
            logger.error("github_response_unreadable", username=username)
            raise GitHubUnavailableError()
