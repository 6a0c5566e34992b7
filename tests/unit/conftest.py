"""Unit-specific fixtures (filesystem I/O confined to tmp_path)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from pagecache.cache import PageContentCache
from pagecache.config import CacheSettings, GetMode

if TYPE_CHECKING:
    from pathlib import Path

    from tests.conftest import FakeClock


@pytest.fixture()
def cache_dir(tmp_path: Path) -> Path:
    return tmp_path / "cache"


@pytest.fixture()
def cache(cache_dir: Path, clock: FakeClock) -> PageContentCache:
    """Navigate-mode cache with a 1 second TTL and a frozen clock."""
    settings = CacheSettings(directory=str(cache_dir), ttl_ms=1000, mode=GetMode.NAVIGATE)
    return PageContentCache(settings, clock=clock)


@pytest.fixture()
def fetch_cache(cache_dir: Path, clock: FakeClock) -> PageContentCache:
    settings = CacheSettings(directory=str(cache_dir), ttl_ms=1000, mode=GetMode.FETCH)
    return PageContentCache(settings, clock=clock)
