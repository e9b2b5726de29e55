"""
Repository handle.

Entry point for everything that lives inside one GitHub repository:
- Existence probe and account-wide listing
- Repository metadata and dependency snapshots
- Workflow run queries
- Branch, tag and reference lookup, creation and deletion
- Blob, tree and commit operations
- Issues
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from octoref.github import issues, objects
from octoref.github.client import GitHubClient
from octoref.github.constants import ACTIVE_WORKFLOW_STATUSES, PAGE_SIZE
from octoref.github.exceptions import (
    DefaultBranchError,
    GitHubAPIError,
    GitReferenceError,
    InvalidBranch,
    InvalidReference,
    InvalidTag,
    OctorefError,
    ReferenceNotFound,
    RepositoryNotFound,
)
from octoref.github.pagination import collect_pages
from octoref.github.reference import (
    Reference,
    create_reference,
    delete_reference,
    fetch_reference,
    parse_reference,
)
from octoref.github.sha import HasSha, Sha
from octoref.github.types import (
    Blob,
    Commit,
    Issue,
    RepositoryDetails,
    Tree,
    TreeEntry,
    WorkflowStatus,
)

if TYPE_CHECKING:
    from octoref.github.account import Account

logger = logging.getLogger(__name__)


def _normalize_details(data: dict[str, Any]) -> RepositoryDetails:
    """Convert GitHub API response to RepositoryDetails dataclass."""
    return RepositoryDetails(
        github_id=data["id"],
        name=data["name"],
        full_name=data["full_name"],
        description=data.get("description"),
        url=data.get("html_url", ""),
        default_branch=data.get("default_branch", "main"),
        is_private=data.get("private", False),
        is_archived=data.get("archived", False),
        is_fork=data.get("fork", False),
    )


@dataclass(frozen=True)
class Repository:
    """
    A repository known to exist on GitHub.

    GitHub matches repository names case-insensitively, so ``name`` is stored
    lowercased: handles for ``Owner/MyRepo`` and ``owner/myrepo`` compare equal.
    """

    owner: Account
    name: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", self.name.lower())

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def client(self) -> GitHubClient:
        return self.owner.client

    @property
    def endpoint(self) -> str:
        return f"repos/{self}"

    # ─────────────────────────────────────────────────────────────────────
    # Discovery
    # ─────────────────────────────────────────────────────────────────────

    @classmethod
    async def fetch(cls, owner: Account, name: str) -> Repository:
        """
        Probe a repository and return a handle to it.

        ``name`` may be a longer slug such as ``owner/name/tree/main``; the
        second path component is used when there is one, else the first.

        Raises:
            RepositoryNotFound: If GitHub answers the probe with any error status
            GitHubAPIError: If the request could not be made at all
        """
        components = name.split("/")
        candidate = components[1] if len(components) >= 2 else components[0]
        if not candidate:
            raise RepositoryNotFound(candidate)

        try:
            await owner.client.get(f"repos/{owner}/{candidate}")
        except GitHubAPIError as e:
            if e.status_code is None:
                raise
            raise RepositoryNotFound(candidate) from e

        return cls(owner=owner, name=candidate)

    @classmethod
    async def fetch_all(cls, owner: Account) -> list[Repository]:
        """List every repository of an account, 100 per page."""

        async def fetch_page(page: int) -> list[Repository]:
            data = await owner.client.get_json(
                f"users/{owner}/repos",
                params={"per_page": PAGE_SIZE, "page": page},
            )
            return [cls(owner=owner, name=item["name"]) for item in data]

        return await collect_pages(fetch_page)

    async def get_details(self) -> RepositoryDetails:
        data = await self.client.get_json(self.endpoint)
        return _normalize_details(data)

    async def submit_dependency_snapshot(self, payload: dict[str, Any]) -> None:
        """Submit a dependency graph snapshot (payload is passed through as-is)."""
        await self.client.post(f"{self.endpoint}/dependency-graph/snapshots", payload)
        logger.info(f"Submitted dependency snapshot for {self}")

    # ─────────────────────────────────────────────────────────────────────
    # Workflow runs
    # ─────────────────────────────────────────────────────────────────────

    async def get_workflow_runs(self, status: WorkflowStatus | str) -> list[int]:
        """
        Run numbers of the workflow runs in a given state, ascending.

        UNKNOWN has no query value and yields an empty list without a request.
        """
        if not isinstance(status, WorkflowStatus):
            status = WorkflowStatus.from_wire(status)

        wire_status = status.wire_value
        if wire_status is None:
            return []

        async def fetch_page(page: int) -> list[int]:
            data = await self.client.get_json(
                f"{self.endpoint}/actions/runs",
                params={"status": wire_status, "per_page": PAGE_SIZE, "page": page},
            )
            logger.debug(
                f"{self}: {wire_status} runs page {page}, total_count={data.get('total_count')}"
            )
            return [run["run_number"] for run in data.get("workflow_runs", [])]

        runs = await collect_pages(fetch_page)
        return sorted(runs)

    async def get_active_workflow_runs(self) -> list[int]:
        """Run numbers of in-progress, requested, waiting and queued runs, ascending, unique."""
        runs: set[int] = set()
        for status in ACTIVE_WORKFLOW_STATUSES:
            runs.update(await self.get_workflow_runs(status))
        return sorted(runs)

    # ─────────────────────────────────────────────────────────────────────
    # Issues
    # ─────────────────────────────────────────────────────────────────────

    async def get_issue(self, number: int) -> Issue:
        return await issues.get_issue(self, number)

    async def get_all_issues(self, state: str = "all") -> list[Issue]:
        return await issues.get_all_issues(self, state)

    # ─────────────────────────────────────────────────────────────────────
    # References
    # ─────────────────────────────────────────────────────────────────────

    async def get_reference(self, reference: str) -> Reference:
        return await fetch_reference(self, reference)

    async def get_some_reference(self, reference: str) -> Reference | None:
        try:
            return await fetch_reference(self, reference)
        except ReferenceNotFound:
            return None

    async def has_reference(self, reference: str) -> bool:
        return await self.get_some_reference(reference) is not None

    async def create_reference(
        self, reference: str, commit: Commit | Sha | str | HasSha
    ) -> Reference:
        return await create_reference(self, commit, reference)

    async def delete_reference(self, reference: Reference) -> None:
        await delete_reference(reference)

    def _candidate(self, name: str, prefix: str) -> Reference:
        """Parse ``name`` as a reference, falling back to ``<prefix>/<name>``."""
        try:
            return parse_reference(self, name)
        except InvalidReference:
            return parse_reference(self, f"{prefix}/{name}")

    # Branches

    async def get_branch(self, branch: str) -> Reference:
        """
        Resolve a branch by bare name (``main``) or reference (``heads/main``).

        Raises:
            InvalidBranch: If the name does not resolve, or resolves to something else
        """
        try:
            candidate = self._candidate(branch, "heads")
            reference = await fetch_reference(self, str(candidate))
        except GitReferenceError as e:
            raise InvalidBranch(branch) from e

        if not reference.is_branch:
            raise InvalidBranch(branch)
        return reference

    async def get_some_branch(self, branch: str) -> Reference | None:
        candidate = self._candidate(branch, "heads")
        reference = await self.get_some_reference(str(candidate))
        if reference is None:
            return None
        if not reference.is_branch:
            raise InvalidBranch(branch)
        return reference

    async def has_branch(self, branch: str) -> bool:
        return await self.get_some_branch(branch) is not None

    async def get_default_branch(self) -> Reference:
        details = await self.get_details()
        try:
            return await self.get_branch(details.default_branch)
        except OctorefError as e:
            raise DefaultBranchError(details.default_branch) from e

    async def create_branch(self, branch: str, commit: Commit | Sha | str | HasSha) -> Reference:
        reference = await create_reference(self, commit, f"heads/{branch}")
        if not reference.is_branch:
            raise InvalidBranch(branch)
        return reference

    async def delete_branch(self, branch: Reference) -> None:
        if not branch.is_branch:
            raise InvalidBranch(str(branch))
        await delete_reference(branch)

    # Tags

    async def get_tag(self, tag: str) -> Reference:
        """
        Resolve a tag by bare name (``v1.0``) or reference (``tags/v1.0``).

        Raises:
            InvalidTag: If the name does not resolve, or resolves to something else
        """
        try:
            candidate = self._candidate(tag, "tags")
            reference = await fetch_reference(self, str(candidate))
        except GitReferenceError as e:
            raise InvalidTag(tag) from e

        if not reference.is_tag:
            raise InvalidTag(tag)
        return reference

    async def get_some_tag(self, tag: str) -> Reference | None:
        candidate = self._candidate(tag, "tags")
        reference = await self.get_some_reference(str(candidate))
        if reference is None:
            return None
        if not reference.is_tag:
            raise InvalidTag(tag)
        return reference

    async def has_tag(self, tag: str) -> bool:
        return await self.get_some_tag(tag) is not None

    async def create_tag(self, tag: str, commit: Commit | Sha | str | HasSha) -> Reference:
        reference = await create_reference(self, commit, f"tags/{tag}")
        if not reference.is_tag:
            raise InvalidTag(tag)
        return reference

    async def delete_tag(self, tag: Reference) -> None:
        if not tag.is_tag:
            raise InvalidTag(str(tag))
        await delete_reference(tag)

    # ─────────────────────────────────────────────────────────────────────
    # Objects
    # ─────────────────────────────────────────────────────────────────────

    async def get_blob(self, sha: Sha | str | HasSha) -> Blob:
        return await objects.get_blob(self, sha)

    async def create_binary_blob(self, content: bytes) -> Blob:
        return await objects.create_binary_blob(self, content)

    async def create_text_blob(self, content: str) -> Blob:
        return await objects.create_text_blob(self, content)

    async def get_tree(self, sha: Sha | str | HasSha, recursive: bool = False) -> Tree:
        return await objects.get_tree(self, sha, recursive=recursive)

    async def create_tree(self, entries: Iterable[TreeEntry]) -> Tree:
        return await objects.create_tree(self, entries)

    async def create_tree_with_base(self, base: Commit, entries: Iterable[TreeEntry]) -> Tree:
        return await objects.create_tree(self, entries, base=base)

    async def get_commit(self, sha: Sha | str | HasSha) -> Commit:
        return await objects.get_commit(self, sha)

    async def has_commit(self, sha: Sha | str | HasSha) -> bool:
        return await objects.has_commit(self, sha)

    async def create_commit(
        self, parents: Iterable[Commit], tree: Tree, message: str
    ) -> Commit:
        return await objects.create_commit(self, parents, tree, message)
