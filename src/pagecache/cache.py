"""File-per-URL page content cache with a time-to-live.

Layout of the cache directory::

    <directory>/<key>   raw content of one URL, key = derive_key(url)
    <directory>/log     append-only access log, one line per population

There is no metadata file: the entry's mtime is the time it was populated.
An entry younger than ``ttl_ms`` is served from disk; anything else (absent
or stale) is retrieved through the configured strategy, written over the old
entry, and recorded in the access log. Retrieval failures are not cached.

Concurrency: nothing here is locked. Two ``get()`` calls for the same URL that
both see a miss will both retrieve and both write; the last ``os.replace``
wins and each adds a log line. Entries are replaced whole, never torn.

Entries get the usual umask-derived permissions (like the log), not the
owner-only mode of the temporary file they are written through.
"""

from __future__ import annotations

import os
import tempfile
import time
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from pagecache.access_log import AccessLog
from pagecache.config import CacheSettings
from pagecache.errors import ErrorCode, PageCacheError
from pagecache.keys import derive_key
from pagecache.models.cache import CacheEntry
from pagecache.strategies import RetrievalStrategy, build_strategy

if TYPE_CHECKING:
    from pagecache.protocols import BrowsingContext, GotoOptions

log = structlog.get_logger()


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def _file_mode() -> int:
    """Mode a plain open() would create a file with under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


class PageContentCache:
    """Disk cache in front of a browsing context.

    Args:
        settings: Directory, TTL and retrieval mode. Defaults to
            ``CacheSettings()`` (``.cache``, 15 minutes, navigate).
        clock: Returns the current time in epoch milliseconds.
    """

    def __init__(
        self,
        settings: CacheSettings | None = None,
        *,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self.settings = settings or CacheSettings()
        self.directory = Path(self.settings.directory)
        self._strategy: RetrievalStrategy = build_strategy(self.settings.mode)
        self._access_log = AccessLog(self.directory)
        self._clock = clock
        self._ensure_directory()

    @property
    def access_log(self) -> AccessLog:
        return self._access_log

    def path_for(self, url: str) -> Path:
        return self.directory / derive_key(url)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def get(
        self,
        page: BrowsingContext,
        url: str,
        options: GotoOptions | None = None,
    ) -> str:
        """Return the content of ``url``, from disk when fresh, else retrieved.

        ``options`` are handed to ``page.goto()`` unchanged by whichever
        strategy navigates. Exceptions from the browsing context propagate
        as-is and leave the cache directory untouched.
        """
        key = derive_key(url)
        path = self.directory / key
        now = self._clock()

        age = self._age_ms(path, now)
        if age is not None and age < self.settings.ttl_ms:
            log.debug("cache_hit", key=key, url=url, age_ms=age)
            return self._read(path)

        log.info("cache_miss", key=key, url=url, reason="absent" if age is None else "stale")
        try:
            content = await self._strategy.fetch(page, url, options)
        except Exception:
            log.warning("retrieval_failed", url=url, mode=str(self._strategy.mode), exc_info=True)
            raise

        self._write(path, content)
        self._access_log.append(now, key, url)
        log.info("cache_store", key=key, url=url, size=len(content))
        return content

    def lookup(self, url: str) -> CacheEntry | None:
        """Return what is stored for ``url`` without retrieving or writing.

        ``None`` when nothing is stored. A stale entry is still returned, with
        ``stale=True``.
        """
        key = derive_key(url)
        path = self.directory / key
        mtime_ns = self._mtime_ns(path)
        if mtime_ns is None:
            return None
        age = self._clock() - mtime_ns // 1_000_000
        return CacheEntry(
            key=key,
            path=path,
            content=self._read(path),
            populated_at=datetime.fromtimestamp(mtime_ns / 1e9),
            stale=age >= self.settings.ttl_ms,
        )

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    def _ensure_directory(self) -> None:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise PageCacheError(
                ErrorCode.STORAGE_FAILED,
                f"Cannot create cache directory {self.directory}: {exc}",
            ) from exc

    def _mtime_ns(self, path: Path) -> int | None:
        """Last write time of ``path`` in epoch nanoseconds, or None if absent."""
        try:
            return path.stat().st_mtime_ns
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise PageCacheError(
                ErrorCode.STORAGE_FAILED, f"Cannot stat cache entry {path}: {exc}"
            ) from exc

    def _age_ms(self, path: Path, now: int) -> int | None:
        """Milliseconds since ``path`` was last written, or None if absent."""
        mtime_ns = self._mtime_ns(path)
        if mtime_ns is None:
            return None
        return now - mtime_ns // 1_000_000

    def _read(self, path: Path) -> str:
        # Bytes, not read_text(): newline translation would alter the content.
        try:
            return path.read_bytes().decode("utf-8")
        except OSError as exc:
            raise PageCacheError(
                ErrorCode.STORAGE_FAILED, f"Cannot read cache entry {path}: {exc}"
            ) from exc

    def _write(self, path: Path, content: str) -> None:
        """Replace the entry at ``path`` with ``content`` in one rename."""
        self._ensure_directory()
        try:
            fd, tmp = tempfile.mkstemp(dir=self.directory, prefix=f".{path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(content.encode("utf-8"))
                os.chmod(tmp, _file_mode())
                os.replace(tmp, path)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise PageCacheError(
                ErrorCode.STORAGE_FAILED, f"Cannot write cache entry {path}: {exc}"
            ) from exc
