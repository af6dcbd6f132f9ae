# postmirror/core/fetch/cache.py
"""
Deterministic cache keys for fetched resources.
"""

from __future__ import annotations

from hashlib import sha256 as _sha256lib


def _sha256(data: bytes | str) -> str:
    if isinstance(data, str):
        data = data.encode("utf-8")
    return _sha256lib(data).hexdigest()


def imported_dirname(url: str, contextual_name: str) -> str:
    """
    Directory name for an imported URL: `imported-{contextual_name}-{sha256(url)}`.

    The digest is the full 64-char lowercase hex of the URL's UTF-8 bytes, so the
    same (post, url) pair lands in the same directory across runs.
    """
    return f"imported-{contextual_name}-{_sha256(url)}"
