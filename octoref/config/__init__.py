"""Configuration package."""

from octoref.config.settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
]
