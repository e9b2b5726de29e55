"""Root conftest: test infrastructure for the GitHub client tests.

Provides:
- `http`: the shared httpx client replaced by an AsyncMock
- `account` / `repository`: handles bound to a test client
"""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from octoref.github.account import Account
from octoref.github.client import GitHubClient
from octoref.github.repository import Repository

TOKEN = "ghp_test_token_12345"
BASE_URL = "https://api.github.test"


@pytest.fixture
def http():
    """AsyncMock standing in for the pooled httpx.AsyncClient.

    Tests queue responses on `http.request` (return_value or side_effect)
    and inspect `http.request.call_args_list` for the requests made.
    """
    with patch("octoref.github.client.get_http_client") as mock_get_client:
        client = AsyncMock()
        mock_get_client.return_value = client
        yield client


@pytest.fixture
def github_client() -> GitHubClient:
    return GitHubClient(token=TOKEN, base_url=BASE_URL)


@pytest.fixture
def account(github_client: GitHubClient) -> Account:
    return Account("octocat", github_client)


@pytest.fixture
def repository(account: Account) -> Repository:
    return Repository(owner=account, name="Hello-World")
