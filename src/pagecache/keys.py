"""Cache key derivation."""

from __future__ import annotations

import base64
import hashlib


def derive_key(url: str) -> str:
    """Return the cache key for ``url``.

    SHA-256 of the UTF-8 bytes, encoded as unpadded URL-safe base64: always
    43 characters from ``[A-Za-z0-9_-]``, so it is usable as a file name as-is.
    """
    digest = hashlib.sha256(url.encode("utf-8")).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")
