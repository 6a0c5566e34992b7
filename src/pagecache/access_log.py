"""Append-only access log kept inside the cache directory.

One line per cache population event::

    2026-10-17 09:04:05.123 <key> <url>

The file is never rewritten or compacted. Each line goes out in a single
``write()`` on a file opened in append mode, so concurrent writers interleave
whole lines rather than fragments.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from pagecache.errors import ErrorCode, PageCacheError
from pagecache.models.cache import LogRecord

LOG_FILENAME = "log"


def format_timestamp(epoch_ms: int) -> str:
    """Render epoch milliseconds as ``YYYY-MM-DD HH:MM:SS.mmm`` in local time."""
    dt = datetime.fromtimestamp(epoch_ms / 1000)
    return f"{dt:%Y-%m-%d %H:%M:%S}.{epoch_ms % 1000:03d}"


class AccessLog:
    """Access log owned by a single cache instance."""

    def __init__(self, directory: str | Path) -> None:
        self.path = Path(directory) / LOG_FILENAME

    def append(self, epoch_ms: int, key: str, url: str) -> None:
        line = f"{format_timestamp(epoch_ms)} {key} {url}\n"
        try:
            with self.path.open("a", encoding="utf-8", newline="") as f:
                f.write(line)
        except OSError as exc:
            raise PageCacheError(
                ErrorCode.STORAGE_FAILED,
                f"Cannot append to access log {self.path}: {exc}",
            ) from exc

    def records(self) -> list[LogRecord]:
        """Parse the log back into records. Missing file means no records."""
        if not self.path.exists():
            return []
        records = []
        for line in self.path.read_text(encoding="utf-8").splitlines():
            if not line:
                continue
            date, time_, key, url = line.split(" ", 3)
            records.append(LogRecord(timestamp=f"{date} {time_}", key=key, url=url))
        return records
