# postmirror/core/attachments/transforms.py
"""
Redirect-target transforms.

The asset host drops query parameters across the attachment redirect, so any
parameter we want (e.g. a thumbnail width) has to be added to the resolved
target, not to the redirect endpoint URL.

Known limitation: if the asset host answers the transformed URL with another
redirect, requests follows it and the added parameter is lost without notice.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable
from urllib.parse import urlsplit


@runtime_checkable
class RedirectTransform(Protocol):
    """Rewrites a resolved redirect target into the URL actually downloaded."""

    def apply(self, url: str) -> str: ...


class IdentityTransform:
    """Download the redirect target as-is (full-size attachments)."""

    def apply(self, url: str) -> str:
        return url

    def __repr__(self) -> str:
        return "IdentityTransform()"


class WidthTransform:
    """Ask the asset host for a resized variant via a `width` query parameter."""

    def __init__(self, width: int) -> None:
        if width <= 0:
            raise ValueError(f"width must be positive, got {width}")
        self.width = width

    def apply(self, url: str) -> str:
        sep = "&" if urlsplit(url).query else "?"
        return f"{url}{sep}width={self.width}"

    def __repr__(self) -> str:
        return f"WidthTransform(width={self.width})"


__all__ = ["RedirectTransform", "IdentityTransform", "WidthTransform"]
