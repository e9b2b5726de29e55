"""
Git references: branches, tags and pull request heads.

A reference string is parsed into a ``Reference`` whose kind is fixed at parse
time. Accepted forms (the ``refs/`` prefix is optional):

    heads/<branch>          refs/heads/feature/x   -> BRANCH "feature/x"
    tags/<tag>              refs/tags/v1.0         -> TAG "v1.0"
    pull/<number>/<branch>  pull/42/head           -> PULL_REQUEST #42 "head"

Bare names such as ``main`` are not references; the repository's
branch/tag helpers add the ``heads/`` or ``tags/`` prefix themselves.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from octoref.github import objects
from octoref.github.exceptions import (
    CircularReference,
    GitHubNotFoundError,
    InvalidReference,
    ReferenceNotFound,
    UnexpectedObjectType,
)
from octoref.github.sha import HasSha, Sha
from octoref.github.types import Commit

if TYPE_CHECKING:
    from octoref.github.repository import Repository

logger = logging.getLogger(__name__)


class ReferenceKind(str, Enum):
    """Reference namespaces under ``refs/``."""

    BRANCH = "heads"
    TAG = "tags"
    PULL_REQUEST = "pull"


@dataclass(frozen=True)
class Reference:
    """A named pointer into a repository's object graph."""

    repository: Repository
    kind: ReferenceKind
    name: str
    issue: int | None = None  # Pull request number, PULL_REQUEST only

    def __str__(self) -> str:
        if self.kind is ReferenceKind.PULL_REQUEST:
            return f"pull/{self.issue}/{self.name}"
        return f"{self.kind.value}/{self.name}"

    @property
    def full_name(self) -> str:
        """Fully qualified name, e.g. ``refs/heads/main``."""
        return f"refs/{self}"

    @property
    def path(self) -> str:
        """Wire form escaped for an endpoint path (``#`` and ``?`` are legal in ref names)."""
        return quote(str(self), safe="/")

    @property
    def is_branch(self) -> bool:
        return self.kind is ReferenceKind.BRANCH

    @property
    def is_tag(self) -> bool:
        return self.kind is ReferenceKind.TAG

    @property
    def is_pull_request(self) -> bool:
        return self.kind is ReferenceKind.PULL_REQUEST

    async def get_commit(self) -> Commit:
        """Commit this reference points to, following annotated tags."""
        return await resolve_commit(self)

    async def set_commit(self, commit: Commit | Sha | str, force: bool = False) -> None:
        """Move this reference to another commit."""
        await update_reference(self, commit, force=force)

    async def delete(self) -> None:
        await delete_reference(self)


# ─────────────────────────────────────────────────────────────────────────────
# Parsing
# ─────────────────────────────────────────────────────────────────────────────


def _parse_issue_number(token: str, reference: str) -> int:
    if not (token.isascii() and token.isdigit()):
        raise InvalidReference(reference)
    return int(token)


def parse_reference(repository: Repository, reference: str) -> Reference:
    """
    Parse a reference string without touching the network.

    Args:
        repository: Repository the reference belongs to
        reference: e.g. "heads/main", "refs/tags/v1", "pull/42/merge"

    Returns:
        The parsed Reference

    Raises:
        InvalidReference: If the string matches no reference form, the pull
            request number is not a non-negative integer, or the name is empty
    """
    tokens = reference.split("/")
    if tokens[0] == "refs":
        tokens = tokens[1:]

    if not tokens:
        raise InvalidReference(reference)

    namespace = tokens[0]
    issue: int | None = None

    if namespace == ReferenceKind.PULL_REQUEST.value and len(tokens) >= 2:
        kind = ReferenceKind.PULL_REQUEST
        issue = _parse_issue_number(tokens[1], reference)
        name_tokens = tokens[2:]
    elif namespace == ReferenceKind.BRANCH.value:
        kind = ReferenceKind.BRANCH
        name_tokens = tokens[1:]
    elif namespace == ReferenceKind.TAG.value:
        kind = ReferenceKind.TAG
        name_tokens = tokens[1:]
    else:
        raise InvalidReference(reference)

    name = "/".join(name_tokens)
    if not name:
        raise InvalidReference(reference)

    return Reference(repository=repository, kind=kind, name=name, issue=issue)


# ─────────────────────────────────────────────────────────────────────────────
# Remote operations
# ─────────────────────────────────────────────────────────────────────────────


def _ensure_exact_match(data: Any, reference: str) -> None:
    """
    Reject a response for a different ref than the one requested.

    GitHub may answer with a ref that merely starts like the requested one
    (``refs/heads/mainline`` for ``heads/main``), or with a list of such refs.
    The returned name must end with the caller's original string.
    """
    name = data.get("ref", "") if isinstance(data, dict) else ""
    if not name.endswith(reference):
        logger.warning(f"GitHub returned ref {name!r} for {reference!r}, treating as not found")
        raise ReferenceNotFound(reference)


async def fetch_reference(repository: Repository, reference: str) -> Reference:
    """
    Look up a reference on GitHub.

    Raises:
        InvalidReference: If the string is not a reference
        ReferenceNotFound: If GitHub has no ref with exactly this name
        GitHubAPIError: For any other API failure
    """
    parsed = parse_reference(repository, reference)

    try:
        data = await repository.client.get_json(f"{repository.endpoint}/git/ref/{parsed.path}")
    except GitHubNotFoundError as e:
        raise ReferenceNotFound(reference) from e

    _ensure_exact_match(data, reference)
    return parsed


async def create_reference(
    repository: Repository,
    commit: Commit | Sha | str | HasSha,
    reference: str,
) -> Reference:
    """
    Create a reference pointing at a commit.

    Raises:
        InvalidReference: If the string is not a reference
        ReferenceNotFound: If GitHub does not confirm the ref that was requested
        GitHubAPIError: For any other API failure (422 if the ref already exists)
    """
    parsed = parse_reference(repository, reference)
    sha = Sha.of(commit)

    payload = {"ref": parsed.full_name, "sha": str(sha)}
    try:
        data = await repository.client.post_json(f"{repository.endpoint}/git/refs", payload)
    except GitHubNotFoundError as e:
        raise ReferenceNotFound(reference) from e

    _ensure_exact_match(data, reference)
    logger.info(f"Created {parsed.full_name} at {sha.short} in {repository}")
    return parsed


async def update_reference(
    reference: Reference,
    commit: Commit | Sha | str | HasSha,
    force: bool = False,
) -> None:
    """Point an existing reference at another commit (``force`` allows non fast-forward)."""
    repository = reference.repository
    sha = Sha.of(commit)

    await repository.client.patch(
        f"{repository.endpoint}/git/refs/{reference.path}",
        {"sha": str(sha), "force": force},
    )
    logger.info(f"Moved {reference.full_name} to {sha.short} in {repository} (force={force})")


async def delete_reference(reference: Reference) -> None:
    repository = reference.repository
    await repository.client.delete(f"{repository.endpoint}/git/refs/{reference.path}")
    logger.info(f"Deleted {reference.full_name} in {repository}")


# ─────────────────────────────────────────────────────────────────────────────
# Dereferencing
# ─────────────────────────────────────────────────────────────────────────────


async def resolve_commit_sha(reference: Reference) -> Sha:
    """
    Follow a reference to the sha of the commit it ultimately points to.

    Lightweight refs point straight at a commit. Annotated tags point at a
    tag object, which can point at another tag, and so on. Every tag sha is
    recorded; seeing one twice means the chain loops.

    Raises:
        ReferenceNotFound: If GitHub answers for a different ref than this one
        CircularReference: If the tag chain revisits a tag
        UnexpectedObjectType: If the chain ends at a tree or blob
        GitHubAPIError: For API failures, including a dangling target (404)
    """
    repository = reference.repository
    data = await repository.client.get_json(f"{repository.endpoint}/git/ref/{reference.path}")
    _ensure_exact_match(data, str(reference))

    visited: set[Sha] = set()
    while True:
        target = data["object"]
        object_type = target["type"]
        sha = Sha(target["sha"])

        if object_type == "commit":
            return sha
        if object_type != "tag":
            raise UnexpectedObjectType(str(reference), object_type)

        if sha in visited:
            logger.warning(f"Tag cycle detected at {sha.short} while resolving {reference}")
            raise CircularReference(str(reference))
        visited.add(sha)

        logger.debug(f"{reference}: following annotated tag {sha.short}")
        data = await repository.client.get_json(f"{repository.endpoint}/git/tags/{sha.path}")


async def resolve_commit(reference: Reference) -> Commit:
    sha = await resolve_commit_sha(reference)
    return await objects.get_commit(reference.repository, sha)
