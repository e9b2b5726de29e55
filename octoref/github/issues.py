"""Issue lookups for a repository."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from octoref.github.constants import PAGE_SIZE
from octoref.github.exceptions import GitHubNotFoundError, IssueNotFound
from octoref.github.pagination import collect_pages
from octoref.github.types import Issue

if TYPE_CHECKING:
    from octoref.github.repository import Repository


def normalize_issue(data: dict[str, Any]) -> Issue:
    """Convert a GitHub issue API payload to an Issue."""
    user = data.get("user") or {}
    return Issue(
        number=data["number"],
        title=data.get("title", ""),
        state=data.get("state", "open"),
        body=data.get("body"),
        author=user.get("login"),
        labels=tuple(label["name"] for label in data.get("labels", []) if "name" in label),
        is_pull_request="pull_request" in data,
    )


async def get_issue(repository: Repository, number: int) -> Issue:
    try:
        data = await repository.client.get_json(f"{repository.endpoint}/issues/{number}")
    except GitHubNotFoundError as e:
        raise IssueNotFound(number) from e
    return normalize_issue(data)


async def get_all_issues(repository: Repository, state: str = "all") -> list[Issue]:
    """
    List issues and pull requests of a repository.

    Args:
        repository: Repository to list
        state: "open", "closed" or "all"

    Returns:
        Issues in GitHub's default order (newest first)
    """

    async def fetch_page(page: int) -> list[Issue]:
        data = await repository.client.get_json(
            f"{repository.endpoint}/issues",
            params={"state": state, "per_page": PAGE_SIZE, "page": page},
        )
        return [normalize_issue(item) for item in data]

    return await collect_pages(fetch_page)
