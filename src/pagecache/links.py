"""Same-origin link extraction from cached markup."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pagecache.origin import ensure_origin

if TYPE_CHECKING:
    from pagecache.protocols import BrowsingContext, GotoOptions

# Parsed with DOMParser inside the page so that relative hrefs resolve
# against the page's own location.
_LINKS_JS = """
(html) => {
  const doc = new DOMParser().parseFromString(html, 'text/html')
  return Array.from(doc.querySelectorAll('a'), a => a.href).filter(link => {
    try {
      return new URL(link).origin == location.origin
    } catch (error) {
      return false
    }
  })
}
"""


async def extract_same_origin_links(
    page: BrowsingContext,
    url: str,
    html: str,
    options: GotoOptions | None = None,
) -> list[str]:
    """Return the hrefs in ``html`` that point to the origin of ``url``."""
    await ensure_origin(page, url, options)
    return await page.evaluate(_LINKS_JS, html)
