"""Shared fixtures: an in-memory browsing context and a controllable clock.

``FakePage`` mimics the slice of playwright's async ``Page`` the cache uses:
``url``, ``goto()`` (returning a response with ``status``/``ok``) and
``evaluate()`` for the two scripts the strategies run.
"""

from __future__ import annotations

import time
from typing import Any

import pytest


class FakeResponse:
    def __init__(self, status: int = 200) -> None:
        self.status = status

    @property
    def ok(self) -> bool:
        return 200 <= self.status <= 299


class FakePage:
    def __init__(self, url: str = "about:blank") -> None:
        self.url = url
        self.calls: list[tuple[str, str, Any]] = []
        # url -> document markup served after goto(url)
        self.documents: dict[str, str] = {}
        # url -> HTTP status for goto() and in-page fetch()
        self.statuses: dict[str, int] = {}
        # url -> body returned by in-page fetch()
        self.bodies: dict[str, str] = {}
        self.goto_error: Exception | None = None
        self.evaluate_error: Exception | None = None

    @property
    def gotos(self) -> list[str]:
        return [target for name, target, _ in self.calls if name == "goto"]

    @property
    def fetches(self) -> list[str]:
        return [arg for name, expr, arg in self.calls if name == "evaluate" and "fetch(" in expr]

    async def goto(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append(("goto", url, kwargs))
        if self.goto_error is not None:
            raise self.goto_error
        self.url = url
        return FakeResponse(self.statuses.get(url, 200))

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        self.calls.append(("evaluate", expression, arg))
        if self.evaluate_error is not None:
            raise self.evaluate_error
        if "outerHTML" in expression:
            return self.documents.get(self.url, f"<html><body>{self.url}</body></html>")
        if "fetch(" in expression:
            status = self.statuses.get(arg, 200)
            return {
                "status": status,
                "ok": 200 <= status <= 299,
                "body": self.bodies.get(arg, f"raw body of {arg}"),
            }
        if "DOMParser" in expression:
            return [f"{self.url}/linked"]
        raise AssertionError(f"unexpected expression: {expression!r}")


class FakeClock:
    """Epoch-millisecond clock that only moves when told to."""

    def __init__(self, now: int | None = None) -> None:
        self.now = now if now is not None else time.time_ns() // 1_000_000

    def __call__(self) -> int:
        return self.now


@pytest.fixture()
def page() -> FakePage:
    return FakePage()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()
