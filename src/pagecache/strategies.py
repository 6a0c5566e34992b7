"""How content is obtained on a cache miss.

``NavigateStrategy`` loads the URL as a new document and serialises its root
element; afterwards the page is *on* the URL. ``FetchStrategy`` keeps the
current document (moving only to the URL's origin when needed) and issues a
same-origin ``fetch()`` from inside it, returning the raw response body.

The strategy is chosen once, when the cache is built, from ``GetMode``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import structlog

from pagecache.config import GetMode
from pagecache.errors import status_error
from pagecache.origin import ensure_origin

if TYPE_CHECKING:
    from pagecache.protocols import BrowsingContext, GotoOptions

log = structlog.get_logger()

_OUTER_HTML_JS = "() => document.documentElement.outerHTML"

# Resolves to {status, ok, body}; the status check happens on the Python side.
_FETCH_JS = """
async (url) => {
  const res = await fetch(url)
  return { status: res.status, ok: res.ok, body: await res.text() }
}
"""


class RetrievalStrategy(ABC):
    mode: GetMode

    @abstractmethod
    async def fetch(
        self,
        page: BrowsingContext,
        url: str,
        options: GotoOptions | None = None,
    ) -> str:
        """Return fresh content for ``url``. Failures propagate to the caller."""


class NavigateStrategy(RetrievalStrategy):
    mode = GetMode.NAVIGATE

    async def fetch(
        self,
        page: BrowsingContext,
        url: str,
        options: GotoOptions | None = None,
    ) -> str:
        log.debug("page_navigate", url=url)
        response = await page.goto(url, **(options or {}))
        # goto() returns None for same-document navigations (e.g. hash changes)
        if response is not None and not response.ok:
            raise status_error(url, response.status)
        return await page.evaluate(_OUTER_HTML_JS)


class FetchStrategy(RetrievalStrategy):
    mode = GetMode.FETCH

    async def fetch(
        self,
        page: BrowsingContext,
        url: str,
        options: GotoOptions | None = None,
    ) -> str:
        await ensure_origin(page, url, options)
        log.debug("page_fetch", url=url)
        result = await page.evaluate(_FETCH_JS, url)
        if not result["ok"]:
            raise status_error(url, result["status"])
        return result["body"]


_STRATEGIES: dict[GetMode, type[RetrievalStrategy]] = {
    GetMode.NAVIGATE: NavigateStrategy,
    GetMode.FETCH: FetchStrategy,
}


def build_strategy(mode: GetMode) -> RetrievalStrategy:
    return _STRATEGIES[GetMode(mode)]()
