"""Demo consumer: cache a page, then list its same-origin links.

    python -m pagecache https://en.wikipedia.org/wiki/Factorial --mode navigate

Configuration is validated before any browser is launched; an invalid value
(e.g. ``PAGECACHE__CACHE__TTL_MS=-1``) exits with status 2.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import TYPE_CHECKING, Any

import structlog
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright
from pydantic import ValidationError

from pagecache.cache import PageContentCache
from pagecache.config import GetMode, Settings
from pagecache.errors import PageCacheError
from pagecache.links import extract_same_origin_links
from pagecache.logging_config import setup_logging

if TYPE_CHECKING:
    from pagecache.config import CacheSettings
    from pagecache.protocols import GotoOptions

log = structlog.get_logger()


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="pagecache",
        description="Fetch a page through the disk cache and list its same-origin links.",
    )
    p.add_argument("url")
    p.add_argument("--mode", choices=[m.value for m in GetMode], default=None)
    p.add_argument("--dir", dest="directory", default=None, help="cache directory")
    p.add_argument("--ttl-ms", type=int, default=None, help="freshness window in milliseconds")
    p.add_argument(
        "--wait-until",
        choices=["commit", "domcontentloaded", "load", "networkidle"],
        default="domcontentloaded",
    )
    p.add_argument("--timeout-ms", type=float, default=None)
    p.add_argument("--headed", action="store_true", help="show the browser window")
    return p.parse_args(argv)


def _cache_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if args.directory is not None:
        overrides["directory"] = args.directory
    if args.ttl_ms is not None:
        overrides["ttl_ms"] = args.ttl_ms
    if args.mode is not None:
        overrides["mode"] = args.mode
    return overrides


async def _run(
    cache_settings: CacheSettings, url: str, options: GotoOptions, headed: bool
) -> list[str]:
    cache = PageContentCache(cache_settings)
    async with async_playwright() as pw:
        browser = await pw.chromium.launch(headless=not headed)
        try:
            page = await browser.new_page()
            html = await cache.get(page, url, options)
            return await extract_same_origin_links(page, url, html, options)
        finally:
            await browser.close()


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    overrides = _cache_overrides(args)
    try:
        settings = Settings(cache=overrides) if overrides else Settings()
    except ValidationError as exc:
        sys.stderr.write(f"Invalid configuration:\n{exc}\n")
        return 2

    setup_logging(settings.logging)

    options: GotoOptions = {"wait_until": args.wait_until}
    if args.timeout_ms is not None:
        options["timeout"] = args.timeout_ms

    try:
        links = asyncio.run(_run(settings.cache, args.url, options, args.headed))
    except PageCacheError as exc:
        sys.stderr.write(json.dumps(exc.to_dict()) + "\n")
        return 1
    except PlaywrightError as exc:
        log.error("browser_error", url=args.url, error=exc.message)
        return 1

    print(len(links), "links")
    for link in links:
        print(link)
    return 0


if __name__ == "__main__":
    sys.exit(main())
