# File: policy_scout/errors.py
"""policy_scout.errors: exception hierarchy.

None of these is fatal to the process. Each one is caught at a fixed layer:

* :class:`ParseError` – inside the relevance check and cache-key derivation;
* :class:`RenderError` – per page inside the crawler (page contributes ``""``);
* :class:`LocateFailure` – inside the locator (collapsed to ``None``);
* :class:`FallbackAPIError` – inside the search client (collapsed to ``None``).
"""
from __future__ import annotations

__all__ = (
    "PolicyScoutError",
    "ParseError",
    "RenderError",
    "LocateFailure",
    "FallbackAPIError",
)


class PolicyScoutError(Exception):
    """Base class for all project errors."""


class ParseError(PolicyScoutError, ValueError):
    """A URL could not be parsed."""

    def __init__(self, url: str, reason: str = "") -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Cannot parse URL {url!r}" + (f": {reason}" if reason else ""))


class RenderError(PolicyScoutError):
    """Navigation timeout or network failure while rendering a page."""

    def __init__(self, url: str, reason: str = "") -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to render {url}" + (f": {reason}" if reason else ""))


class LocateFailure(PolicyScoutError):
    """The root page of a site could not be rendered."""

    def __init__(self, url: str, cause: Exception | None = None) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Root page unreachable: {url}")


class FallbackAPIError(PolicyScoutError):
    """Search API unavailable, key missing or non-200 response."""

    def __init__(self, message: str, status: int | None = None) -> None:
        self.status = status
        super().__init__(message)
