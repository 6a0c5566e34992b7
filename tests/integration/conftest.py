"""Integration test fixtures.

Subprocess tests run ``python -m pagecache`` with a scrubbed environment so
that a developer's own PAGECACHE__* variables cannot leak in.
"""

from __future__ import annotations

import os

import pytest


@pytest.fixture()
def subprocess_env() -> dict[str, str]:
    return {k: v for k, v in os.environ.items() if not k.startswith("PAGECACHE__")}
