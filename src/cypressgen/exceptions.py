"""
Exception types raised by cypressgen.

The extraction and synthesis engine is total: given a parsed document it
always produces output. Only URL validation and the collaborators around the
engine (renderer, workspace, configuration) raise.
"""

from __future__ import annotations


class CypressGenError(Exception):
    """Base exception for all cypressgen errors."""


class MalformedUrlError(CypressGenError):
    """Raised when a URL cannot be parsed or lacks a scheme or host."""

    def __init__(self, url: str, reason: str = "URL must be absolute") -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Malformed URL {url!r}: {reason}")


class NavigationError(CypressGenError):
    """Raised when a page cannot be rendered."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to render {url}: {reason}")


class WorkspaceNotFoundError(CypressGenError):
    """Raised when no Cypress project is found above the start path."""


class ConfigError(CypressGenError):
    """Raised when configuration values or files are invalid."""
