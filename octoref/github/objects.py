"""
Git Data API object operations.

Blobs, trees and commits of a repository, addressed by sha:
- Fetching objects and normalizing them into value types
- Creating blobs from bytes or text
- Creating trees, optionally on top of a commit's tree
- Creating commits from a tree, parents and a message
"""

from __future__ import annotations

import base64
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from octoref.github.exceptions import GitHubNotFoundError
from octoref.github.sha import HasSha, Sha
from octoref.github.types import Blob, Commit, Signature, Tree, TreeEntry

if TYPE_CHECKING:
    from octoref.github.repository import Repository

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Normalization
# ─────────────────────────────────────────────────────────────────────────────


def _normalize_signature(data: dict[str, Any] | None) -> Signature | None:
    if not data:
        return None
    return Signature(
        name=data.get("name", ""),
        email=data.get("email", ""),
        date=data.get("date"),
    )


def normalize_commit(data: dict[str, Any]) -> Commit:
    """Convert a Git commit API payload to a Commit."""
    return Commit(
        sha=Sha(data["sha"]),
        tree_sha=Sha(data["tree"]["sha"]),
        parent_shas=tuple(Sha(parent["sha"]) for parent in data.get("parents", [])),
        message=data.get("message", ""),
        author=_normalize_signature(data.get("author")),
        committer=_normalize_signature(data.get("committer")),
    )


def normalize_tree(data: dict[str, Any]) -> Tree:
    """Convert a Git tree API payload to a Tree."""
    entries = tuple(
        TreeEntry(
            path=item["path"],
            mode=item["mode"],
            type=item["type"],
            sha=Sha(item["sha"]) if item.get("sha") else None,
            size=item.get("size"),
        )
        for item in data.get("tree", [])
    )
    return Tree(
        sha=Sha(data["sha"]),
        entries=entries,
        truncated=data.get("truncated", False),
    )


def normalize_blob(data: dict[str, Any]) -> Blob:
    """Convert a Git blob API payload to a Blob, decoding its content."""
    raw = data.get("content") or ""
    if data.get("encoding", "base64") == "base64":
        content = base64.b64decode(raw)
    else:
        content = raw.encode("utf-8")

    return Blob(
        sha=Sha(data["sha"]),
        size=data.get("size", len(content)),
        content=content,
    )


def _serialize_entry(entry: TreeEntry) -> dict[str, Any]:
    return {
        "path": entry.path,
        "mode": entry.mode,
        "type": entry.type,
        "sha": str(entry.sha) if entry.sha is not None else None,
    }


# ─────────────────────────────────────────────────────────────────────────────
# Blobs
# ─────────────────────────────────────────────────────────────────────────────


async def get_blob(repository: Repository, sha: Sha | str | HasSha) -> Blob:
    data = await repository.client.get_json(
        f"{repository.endpoint}/git/blobs/{Sha.of(sha).path}"
    )
    return normalize_blob(data)


async def _create_blob(repository: Repository, content: bytes, payload: dict[str, str]) -> Blob:
    data = await repository.client.post_json(f"{repository.endpoint}/git/blobs", payload)
    blob = Blob(sha=Sha(data["sha"]), size=len(content), content=content)
    logger.info(f"Created blob {blob.sha.short} ({blob.size} bytes) in {repository}")
    return blob


async def create_binary_blob(repository: Repository, content: bytes) -> Blob:
    """Upload raw bytes as a blob (sent base64 encoded)."""
    return await _create_blob(
        repository,
        bytes(content),
        {"content": base64.b64encode(content).decode("ascii"), "encoding": "base64"},
    )


async def create_text_blob(repository: Repository, content: str) -> Blob:
    """Upload text as a blob (sent as UTF-8)."""
    return await _create_blob(
        repository,
        content.encode("utf-8"),
        {"content": content, "encoding": "utf-8"},
    )


# ─────────────────────────────────────────────────────────────────────────────
# Trees
# ─────────────────────────────────────────────────────────────────────────────


async def get_tree(
    repository: Repository,
    sha: Sha | str | HasSha,
    recursive: bool = False,
) -> Tree:
    """
    Fetch a tree.

    Args:
        repository: Repository holding the tree
        sha: Tree sha
        recursive: Let GitHub expand nested trees into a flat entry list

    Returns:
        Tree with its entries in GitHub's order
    """
    params: dict[str, str | int] | None = {"recursive": "1"} if recursive else None
    data = await repository.client.get_json(
        f"{repository.endpoint}/git/trees/{Sha.of(sha).path}", params=params
    )

    tree = normalize_tree(data)
    if tree.truncated:
        logger.warning(f"Tree {tree.sha.short} in {repository} was truncated by GitHub")
    return tree


async def create_tree(
    repository: Repository,
    entries: Iterable[TreeEntry],
    base: Commit | None = None,
) -> Tree:
    """
    Create a tree from an ordered list of entries.

    Args:
        repository: Repository to create the tree in
        entries: Entries of the new tree
        base: Commit whose tree the entries are applied on top of; without it
            the new tree holds exactly ``entries``

    Returns:
        The tree GitHub created
    """
    payload: dict[str, Any] = {"tree": [_serialize_entry(entry) for entry in entries]}
    if base is not None:
        payload["base_tree"] = str(base.tree_sha)

    data = await repository.client.post_json(f"{repository.endpoint}/git/trees", payload)

    tree = normalize_tree(data)
    logger.info(f"Created tree {tree.sha.short} with {len(payload['tree'])} entries in {repository}")
    return tree


# ─────────────────────────────────────────────────────────────────────────────
# Commits
# ─────────────────────────────────────────────────────────────────────────────


async def get_commit(repository: Repository, sha: Sha | str | HasSha) -> Commit:
    data = await repository.client.get_json(
        f"{repository.endpoint}/git/commits/{Sha.of(sha).path}"
    )
    return normalize_commit(data)


async def has_commit(repository: Repository, sha: Sha | str | HasSha) -> bool:
    """Check whether a commit exists; other API errors still propagate."""
    try:
        await get_commit(repository, sha)
    except GitHubNotFoundError:
        return False
    return True


async def create_commit(
    repository: Repository,
    parents: Iterable[Commit],
    tree: Tree,
    message: str,
) -> Commit:
    """
    Create a commit object.

    Args:
        repository: Repository to create the commit in
        parents: Parent commits (empty for a root commit, several for a merge)
        tree: Tree the commit snapshots
        message: Commit message

    Returns:
        The commit GitHub created
    """
    payload = {
        "message": message,
        "tree": str(tree.sha),
        "parents": [str(parent.sha) for parent in parents],
    }
    data = await repository.client.post_json(f"{repository.endpoint}/git/commits", payload)

    commit = normalize_commit(data)
    logger.info(f"Created commit {commit.sha.short} in {repository}")
    return commit
