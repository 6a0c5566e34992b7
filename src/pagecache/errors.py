"""Error taxonomy for the page cache.

Failures raised by the browsing context itself (navigation timeouts, network
errors, script errors) are never wrapped: they reach the caller exactly as the
collaborator raised them. ``PageCacheError`` covers the failures the cache has
to detect on its own: a non-success HTTP status, which the browser reports as
an ordinary response, and filesystem errors on the cache directory.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    PAGE_NOT_FOUND = "PAGE_NOT_FOUND"
    PAGE_FETCH_FAILED = "PAGE_FETCH_FAILED"
    STORAGE_FAILED = "STORAGE_FAILED"


class PageCacheError(Exception):
    """Domain error carrying a machine-readable code.

    ``recoverable`` tells the caller whether retrying the same request can
    reasonably succeed (a 5xx may, a 404 or a read-only cache dir will not).
    """

    def __init__(self, code: ErrorCode, message: str, *, recoverable: bool = False) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recoverable = recoverable

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": {
                "code": str(self.code),
                "message": self.message,
                "recoverable": self.recoverable,
            }
        }


def status_error(url: str, status: int) -> PageCacheError:
    """Map a non-success HTTP status to a ``PageCacheError``."""
    if status == 404:
        return PageCacheError(ErrorCode.PAGE_NOT_FOUND, f"Page not found: {url}")
    return PageCacheError(
        ErrorCode.PAGE_FETCH_FAILED,
        f"HTTP {status} for {url}",
        recoverable=True,
    )
