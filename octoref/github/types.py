"""Data types for GitHub API responses."""

from dataclasses import dataclass, field
from enum import Enum

from octoref.github.sha import Sha


class WorkflowStatus(str, Enum):
    """Run states reported by GitHub Actions."""

    ACTION_REQUIRED = "action_required"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    FAILURE = "failure"
    IN_PROGRESS = "in_progress"
    NEUTRAL = "neutral"
    QUEUED = "queued"
    REQUESTED = "requested"
    SKIPPED = "skipped"
    STALE = "stale"
    SUCCESS = "success"
    TIMED_OUT = "timed_out"
    WAITING = "waiting"
    UNKNOWN = "unknown"  # Anything GitHub reports that we don't recognise

    @property
    def wire_value(self) -> str | None:
        """Value for the ``status`` query parameter, None for UNKNOWN."""
        if self is WorkflowStatus.UNKNOWN:
            return None
        return self.value

    @classmethod
    def from_wire(cls, status: str) -> "WorkflowStatus":
        try:
            status_value = cls(status)
        except ValueError:
            return cls.UNKNOWN
        return status_value


@dataclass(frozen=True)
class RepositoryDetails:
    """Normalized GitHub repository metadata."""

    github_id: int
    name: str
    full_name: str
    description: str | None
    url: str
    default_branch: str
    is_private: bool
    is_archived: bool = False
    is_fork: bool = False


@dataclass(frozen=True)
class Signature:
    """Author or committer of a commit."""

    name: str
    email: str
    date: str | None  # ISO 8601 timestamp


@dataclass(frozen=True)
class Blob:
    """File contents stored in the object database."""

    sha: Sha
    size: int
    content: bytes

    @property
    def text(self) -> str:
        """Content decoded as UTF-8."""
        return self.content.decode("utf-8")


@dataclass(frozen=True)
class TreeEntry:
    """Single entry of a tree.

    When creating a tree, ``sha=None`` removes ``path`` from the base tree.
    """

    path: str
    mode: str  # e.g. "100644" (file), "040000" (subdirectory)
    type: str  # "blob", "tree" or "commit" (submodule)
    sha: Sha | None
    size: int | None = None  # Only reported for blobs

    @property
    def is_tree(self) -> bool:
        return self.type == "tree"

    @property
    def is_blob(self) -> bool:
        return self.type == "blob"


@dataclass(frozen=True)
class Tree:
    """Directory listing of a commit."""

    sha: Sha
    entries: tuple[TreeEntry, ...] = ()
    truncated: bool = False  # True if GitHub cut a recursive listing short

    @property
    def blobs(self) -> list[TreeEntry]:
        return [entry for entry in self.entries if entry.is_blob]

    @property
    def trees(self) -> list[TreeEntry]:
        return [entry for entry in self.entries if entry.is_tree]


@dataclass(frozen=True)
class Commit:
    """A commit object from the Git Data API."""

    sha: Sha
    tree_sha: Sha
    parent_shas: tuple[Sha, ...]
    message: str
    author: Signature | None = None
    committer: Signature | None = None


@dataclass(frozen=True)
class Issue:
    """An issue (or pull request, which GitHub lists as an issue)."""

    number: int
    title: str
    state: str  # "open" or "closed"
    body: str | None
    author: str | None
    labels: tuple[str, ...] = field(default_factory=tuple)
    is_pull_request: bool = False
