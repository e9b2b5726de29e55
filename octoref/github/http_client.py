"""
Shared HTTP client for GitHub API operations.

Provides a singleton AsyncClient with connection pooling for all GitHub API calls.
Repeated calls against the same repository reuse one TLS connection.
"""

import logging

import httpx

from octoref.config import settings

logger = logging.getLogger(__name__)

# Module-level singleton client
_client: httpx.AsyncClient | None = None


def get_http_client() -> httpx.AsyncClient:
    """
    Get or create the shared HTTP client for GitHub API calls.

    The client is shared across all GitHubClient instances to maximize
    connection reuse. Auth headers are passed per-request, not stored on the client.

    Returns:
        Shared httpx.AsyncClient configured for GitHub API
    """
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.request_timeout, connect=settings.connect_timeout),
            limits=httpx.Limits(
                max_connections=settings.max_connections,
                max_keepalive_connections=settings.max_keepalive_connections,
            ),
            http2=settings.http2,
            # Renamed and transferred repositories answer with 301/307
            follow_redirects=True,
        )
        logger.debug("Created new GitHub HTTP client with connection pooling")
    return _client


async def close_http_client() -> None:
    """
    Close the shared HTTP client.

    Call on shutdown for graceful termination.
    """
    global _client
    if _client is not None and not _client.is_closed:
        await _client.aclose()
        _client = None
        logger.debug("Closed GitHub HTTP client")
