"""
GitHub data API package.

Re-exports all public types and classes.
Usage: `from octoref.github import Account, Repository, Reference`

Module structure:
- account.py: Account identity (owner login + client)
- repository.py: Repository handle, entry point for all operations
- reference.py: Reference parsing, lookup, creation and commit resolution
- objects.py: Blob, tree and commit operations
- issues.py: Issue lookups
- pagination.py: Page accumulation for list endpoints
- client.py: Authenticated REST transport
- http_client.py: Shared pooled HTTP client
- helpers.py: Rate limit handling and error classification
- sha.py: Git object ids
- types.py: Data types and response models
- exceptions.py: Custom exceptions
- constants.py: API constants
"""

from octoref.github.account import Account
from octoref.github.client import GitHubClient
from octoref.github.constants import (
    MODE_EXECUTABLE,
    MODE_FILE,
    MODE_SUBDIRECTORY,
    MODE_SUBMODULE,
    MODE_SYMLINK,
)
from octoref.github.exceptions import (
    CircularReference,
    DefaultBranchError,
    GitHubAPIError,
    GitHubNotFoundError,
    GitReferenceError,
    InvalidBranch,
    InvalidReference,
    InvalidTag,
    IssueNotFound,
    OctorefError,
    ReferenceNotFound,
    RepositoryError,
    RepositoryNotFound,
    UnexpectedObjectType,
)
from octoref.github.http_client import close_http_client
from octoref.github.reference import Reference, ReferenceKind, parse_reference
from octoref.github.repository import Repository
from octoref.github.sha import Sha
from octoref.github.types import (
    Blob,
    Commit,
    Issue,
    RepositoryDetails,
    Signature,
    Tree,
    TreeEntry,
    WorkflowStatus,
)

__all__ = [
    # Entry points
    "Account",
    "Repository",
    "Reference",
    "ReferenceKind",
    "parse_reference",
    # Transport
    "GitHubClient",
    "close_http_client",
    # Exceptions
    "OctorefError",
    "GitHubAPIError",
    "GitHubNotFoundError",
    "GitReferenceError",
    "InvalidReference",
    "ReferenceNotFound",
    "CircularReference",
    "UnexpectedObjectType",
    "RepositoryError",
    "RepositoryNotFound",
    "InvalidBranch",
    "InvalidTag",
    "DefaultBranchError",
    "IssueNotFound",
    # Types
    "Sha",
    "Blob",
    "Commit",
    "Issue",
    "RepositoryDetails",
    "Signature",
    "Tree",
    "TreeEntry",
    "WorkflowStatus",
    # Constants
    "MODE_FILE",
    "MODE_EXECUTABLE",
    "MODE_SUBDIRECTORY",
    "MODE_SUBMODULE",
    "MODE_SYMLINK",
]
