"""
GitHub API helper utilities.

Provides rate limit handling and error response processing for GitHub API calls.
"""

import logging

import httpx

from octoref.github.exceptions import GitHubAPIError, GitHubNotFoundError

logger = logging.getLogger(__name__)


class RateLimitInfo:
    """Rate limit information from GitHub API response."""

    def __init__(self, response: httpx.Response) -> None:
        self.remaining = response.headers.get("X-RateLimit-Remaining")
        self.reset = response.headers.get("X-RateLimit-Reset")

    @property
    def reset_timestamp(self) -> int | None:
        """Get reset timestamp as integer, or None if not available."""
        return int(self.reset) if self.reset else None

    @property
    def is_exhausted(self) -> bool:
        """Check if rate limit is exhausted."""
        return self.remaining is not None and int(self.remaining) == 0


def response_message(response: httpx.Response) -> str | None:
    """Extract the ``message`` field GitHub puts in error bodies, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        return str(message) if message else None
    return None


def handle_error_response(response: httpx.Response, endpoint: str) -> None:
    """
    Raise for any non-success response from GitHub API.

    Args:
        response: The HTTP response from GitHub API
        endpoint: Endpoint path for error context (e.g. "repos/owner/repo/git/ref/heads/main")

    Raises:
        GitHubNotFoundError: If the resource does not exist (404)
        GitHubAPIError: For authentication, authorization, or other API errors
    """
    if response.is_success:
        return

    rate_info = RateLimitInfo(response)

    if response.status_code == 401:
        raise GitHubAPIError("Invalid or expired GitHub token", 401)
    elif response.status_code == 404:
        raise GitHubNotFoundError(endpoint)
    elif response.status_code == 403:
        if rate_info.is_exhausted:
            raise GitHubAPIError(
                "GitHub API rate limit exceeded",
                403,
                rate_limit_reset=rate_info.reset_timestamp,
            )
        raise GitHubAPIError("GitHub API forbidden", 403)

    detail = response_message(response)
    logger.debug(f"GitHub API error {response.status_code} for {endpoint}: {detail!r}")
    if detail:
        raise GitHubAPIError(
            f"GitHub API error: {response.status_code} ({detail})", response.status_code
        )
    raise GitHubAPIError(f"GitHub API error: {response.status_code}", response.status_code)
