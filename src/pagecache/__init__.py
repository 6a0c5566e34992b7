"""Disk-backed cache for page content retrieved through a browsing context."""

from __future__ import annotations

from pagecache.cache import PageContentCache
from pagecache.config import CacheSettings, GetMode, Settings
from pagecache.errors import ErrorCode, PageCacheError
from pagecache.keys import derive_key
from pagecache.origin import ensure_origin, url_origin

__version__ = "0.1.0"

__all__ = [
    "PageContentCache",
    "CacheSettings",
    "GetMode",
    "Settings",
    "ErrorCode",
    "PageCacheError",
    "derive_key",
    "ensure_origin",
    "url_origin",
]
