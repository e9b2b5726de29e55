"""Git object identifiers."""

import re
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote

_CANONICAL_SHA = re.compile(r"[0-9a-f]{40}")


class HasSha(Protocol):
    """Anything that carries the sha of a Git object (commits, trees, blobs)."""

    @property
    def sha(self) -> "Sha": ...


@dataclass(frozen=True)
class Sha:
    """
    A Git object id.

    Thin, immutable wrapper around the hex string GitHub returns. Equality and
    hashing are by exact string value, so a Sha works as a set or dict key.
    Construction never fails; use ``is_valid`` to check for the canonical form.
    """

    value: str

    def __str__(self) -> str:
        return self.value

    @property
    def is_valid(self) -> bool:
        """True for the canonical 40 character lowercase hex form."""
        return _CANONICAL_SHA.fullmatch(self.value) is not None

    @property
    def short(self) -> str:
        return self.value[:7]

    @property
    def path(self) -> str:
        """Value escaped as a single URL path segment."""
        return quote(self.value, safe="")

    @classmethod
    def of(cls, value: "Sha | str | HasSha") -> "Sha":
        """Coerce a string, a Sha, or any object with a ``sha`` into a Sha."""
        if isinstance(value, Sha):
            return value
        if isinstance(value, str):
            return cls(value)
        return cls.of(value.sha)
