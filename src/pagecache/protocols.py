"""Structural types for the browsing context the cache drives.

A playwright ``Page`` (async API) satisfies ``BrowsingContext`` as-is; tests
substitute a small in-memory fake.
"""

from __future__ import annotations

from typing import Any, Literal, Protocol, TypedDict


class GotoOptions(TypedDict, total=False):
    """Keyword arguments passed through unchanged to ``page.goto()``."""

    timeout: float
    wait_until: Literal["commit", "domcontentloaded", "load", "networkidle"]
    referer: str


class BrowsingContext(Protocol):
    @property
    def url(self) -> str: ...

    async def goto(self, url: str, **kwargs: Any) -> Any: ...

    async def evaluate(self, expression: str, arg: Any = None) -> Any: ...
