"""Exceptions for the GitHub client."""


class OctorefError(Exception):
    """Base class for every error raised by octoref."""


class GitHubAPIError(OctorefError):
    """Error from GitHub API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        rate_limit_reset: int | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.rate_limit_reset = rate_limit_reset  # Unix timestamp when rate limit resets
        super().__init__(message)


class GitHubNotFoundError(GitHubAPIError):
    """GitHub answered 404 for the requested resource."""

    def __init__(self, endpoint: str):
        self.endpoint = endpoint
        super().__init__(f"Resource not found: {endpoint}", 404)


# ─────────────────────────────────────────────────────────────────────────────
# References
# ─────────────────────────────────────────────────────────────────────────────


class GitReferenceError(OctorefError):
    """Base class for reference resolution errors."""

    def __init__(self, message: str, reference: str):
        self.reference = reference
        super().__init__(message)


class InvalidReference(GitReferenceError):
    """The reference string does not match any known reference form."""

    def __init__(self, reference: str):
        super().__init__(f"Invalid reference: '{reference}'", reference)


class ReferenceNotFound(GitReferenceError):
    """No reference on GitHub matches the requested name exactly."""

    def __init__(self, reference: str):
        super().__init__(f"Reference not found: '{reference}'", reference)


class CircularReference(GitReferenceError):
    """Annotated tags point at each other and never reach a commit."""

    def __init__(self, reference: str):
        super().__init__(f"Circular reference: '{reference}'", reference)


class UnexpectedObjectType(GitReferenceError):
    """A reference (or a tag it points to) targets a tree or blob."""

    def __init__(self, reference: str, object_type: str):
        self.object_type = object_type
        super().__init__(
            f"Reference '{reference}' points to a {object_type}, not a commit", reference
        )


# ─────────────────────────────────────────────────────────────────────────────
# Repositories
# ─────────────────────────────────────────────────────────────────────────────


class RepositoryError(OctorefError):
    """Base class for repository handle errors."""


class RepositoryNotFound(RepositoryError):
    """The repository probe did not succeed."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Repository not found: '{name}'")


class InvalidBranch(RepositoryError):
    """The name did not resolve to a branch."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid branch: '{name}'")


class InvalidTag(RepositoryError):
    """The name did not resolve to a tag."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid tag: '{name}'")


class DefaultBranchError(RepositoryError):
    """The repository's declared default branch could not be resolved."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Failed to get default branch: '{name}'")


class IssueNotFound(RepositoryError):
    """No issue with the given number exists."""

    def __init__(self, number: int):
        self.number = number
        super().__init__(f"Issue not found: #{number}")
