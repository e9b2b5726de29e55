"""GitHub account identity: the owner of repositories plus the transport to reach them."""

from __future__ import annotations

from dataclasses import dataclass, field

from octoref.github.client import GitHubClient
from octoref.github.repository import Repository


@dataclass(frozen=True)
class Account:
    """A user or organization login bound to a GitHub client."""

    login: str
    client: GitHubClient = field(default_factory=GitHubClient, compare=False, repr=False)

    def __str__(self) -> str:
        return self.login

    async def get_repository(self, name: str) -> Repository:
        """Probe and return one of this account's repositories."""
        return await Repository.fetch(self, name)

    async def get_repositories(self) -> list[Repository]:
        """List every repository owned by this account."""
        return await Repository.fetch_all(self)
