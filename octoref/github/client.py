"""
Authenticated GitHub REST transport.

Every request goes through the shared pooled client and is classified by
``handle_error_response``: callers either get a successful response or a
``GitHubAPIError`` (``GitHubNotFoundError`` for 404).
"""

import logging
from typing import Any

import httpx

from octoref.config import settings
from octoref.github.exceptions import GitHubAPIError
from octoref.github.helpers import handle_error_response
from octoref.github.http_client import get_http_client

logger = logging.getLogger(__name__)


class GitHubClient:
    """Issues GET/POST/PATCH/DELETE requests against the GitHub API base URL."""

    def __init__(
        self,
        token: str | None = None,
        base_url: str | None = None,
        api_version: str | None = None,
    ):
        self.token = settings.github_token if token is None else token
        self.base_url = (base_url or settings.github_api_url).rstrip("/")
        self._headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": api_version or settings.github_api_version,
        }
        if self.token:
            self._headers["Authorization"] = f"Bearer {self.token}"

    def url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    async def _send(
        self,
        method: str,
        endpoint: str,
        params: dict[str, str | int] | None = None,
        payload: Any = None,
    ) -> httpx.Response:
        client = get_http_client()
        logger.debug(f"{method} {endpoint} params={params}")

        try:
            response = await client.request(
                method,
                self.url(endpoint),
                headers=self._headers,
                params=params,
                json=payload,
            )
        except httpx.TimeoutException as e:
            raise GitHubAPIError(f"GitHub API request timed out: {method} {endpoint}") from e
        except httpx.RequestError as e:
            raise GitHubAPIError(f"GitHub API request failed: {method} {endpoint}: {e}") from e

        handle_error_response(response, endpoint)
        return response

    async def get(
        self, endpoint: str, params: dict[str, str | int] | None = None
    ) -> httpx.Response:
        return await self._send("GET", endpoint, params=params)

    async def post(self, endpoint: str, payload: Any) -> httpx.Response:
        return await self._send("POST", endpoint, payload=payload)

    async def patch(self, endpoint: str, payload: Any) -> httpx.Response:
        return await self._send("PATCH", endpoint, payload=payload)

    async def delete(self, endpoint: str) -> httpx.Response:
        return await self._send("DELETE", endpoint)

    async def get_json(
        self, endpoint: str, params: dict[str, str | int] | None = None
    ) -> Any:
        """GET an endpoint and decode its JSON body."""
        response = await self.get(endpoint, params=params)
        return response.json()

    async def post_json(self, endpoint: str, payload: Any) -> Any:
        """POST a JSON payload and decode the JSON body of the response."""
        response = await self.post(endpoint, payload)
        return response.json()
