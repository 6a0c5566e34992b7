"""Keep a browsing context on the same origin as a target URL."""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import urlsplit

import structlog

if TYPE_CHECKING:
    from pagecache.protocols import BrowsingContext, GotoOptions

log = structlog.get_logger()

_DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443}


def url_origin(url: str) -> str:
    """Return the serialised origin (``scheme://host[:port]``) of ``url``.

    Default ports are omitted, scheme/host are lower-cased and non-ASCII hosts
    are converted to punycode, so ``HTTPS://Example.com:443/a`` and
    ``https://example.com/b`` share an origin, as do ``https://bücher.de/`` and
    ``https://xn--bcher-kva.de/``.
    URLs without a network location (``about:blank``, ``data:``) have the
    opaque origin ``"null"``, which never matches anything.
    """
    parts = urlsplit(url)
    host = parts.hostname
    if not parts.scheme or not host:
        return "null"
    scheme = parts.scheme.lower()
    if ":" in host:
        host = f"[{host}]"
    elif not host.isascii():
        # Browsers report hosts in punycode; compare in that form.
        host = host.encode("idna").decode("ascii")
    port = parts.port
    if port is None or port == _DEFAULT_PORTS.get(scheme):
        return f"{scheme}://{host}"
    return f"{scheme}://{host}:{port}"


async def ensure_origin(
    page: BrowsingContext,
    url: str,
    options: GotoOptions | None = None,
) -> None:
    """Navigate ``page`` to the bare origin of ``url`` unless it is already there.

    Same-origin ``fetch()`` and DOM work on relative links both need the
    document to live on the target's origin. Loading only the origin root is
    enough for that and avoids rendering the target page itself.
    """
    origin = url_origin(url)
    if url_origin(page.url) == origin:
        return
    log.debug("origin_navigate", current=page.url, origin=origin)
    await page.goto(origin, **(options or {}))
