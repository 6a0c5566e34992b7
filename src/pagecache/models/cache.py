from __future__ import annotations

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel


class CacheEntry(BaseModel):
    """Stored content for a single URL, as found on disk."""

    key: str  # derive_key(url), also the file name
    path: Path
    content: str  # Raw retrieved text (markup or response body)
    populated_at: datetime  # File mtime, local time
    stale: bool = False


class LogRecord(BaseModel):
    """One line of the access log: a single cache population event."""

    timestamp: str  # "YYYY-MM-DD HH:MM:SS.mmm", local time
    key: str
    url: str
