from __future__ import annotations

from pagecache.models.cache import CacheEntry, LogRecord

__all__ = [
    "CacheEntry",
    "LogRecord",
]
