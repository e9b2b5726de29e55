"""Typed async client for the GitHub Git data API."""

from octoref.github import Account, Reference, Repository, Sha

__version__ = "0.1.0"

__all__ = ["Account", "Reference", "Repository", "Sha", "__version__"]
