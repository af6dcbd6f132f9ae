# postmirror/core/attachments/paths.py
"""
Path namespace for the attachment cache.

Every on-disk location the cache touches is a `CachePath`: a storage root plus a
tuple of validated name segments. Segments are checked one at a time as they are
joined, so a `CachePath` can never point outside its namespace root.

Layout under the storage root:
  {uuid}/                          locally stored uploads
  imported-{post}-{sha256(url)}/   imported external URLs
  {attachment-id}/                 platform attachments
  thumbs/{attachment-id}/          attachment thumbnails
  static/{filename}                platform static assets
  avatar/{filename}                project avatars
  header/{filename}                project headers
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from postmirror.core.fetch.errors import InvalidNameError, MissingNameError


def _check_segment(segment: str | None) -> str:
    if segment is None or segment == "":
        raise MissingNameError("missing path segment")
    if not isinstance(segment, str):
        raise InvalidNameError(f"path segment must be str, got {type(segment).__name__}")
    if segment in (".", ".."):
        raise InvalidNameError(f"path segment escapes its directory: {segment!r}")
    if "/" in segment or os.sep in segment or (os.altsep and os.altsep in segment) or "\x00" in segment:
        raise InvalidNameError(f"path segment contains a separator: {segment!r}")
    try:
        segment.encode("utf-8")
        os.fsencode(segment)
    except UnicodeEncodeError as e:
        raise InvalidNameError(f"path segment is not a representable filename: {segment!r}") from e
    return segment


@dataclass(frozen=True)
class CachePath:
    """Opaque, namespace-rooted path handle. Build via `AttachmentNamespace`."""

    root: Path
    parts: tuple[str, ...] = ()

    @property
    def path(self) -> Path:
        return self.root.joinpath(*self.parts)

    @property
    def name(self) -> str:
        return self.parts[-1] if self.parts else self.root.name

    def join(self, segment: str) -> CachePath:
        return CachePath(self.root, (*self.parts, _check_segment(segment)))

    def join_entry(self, entry: os.DirEntry[str]) -> CachePath:
        """Join a directory entry found under this path (names from disk get the same checks)."""
        return self.join(entry.name)

    def __fspath__(self) -> str:
        return os.fspath(self.path)

    def __str__(self) -> str:
        return str(self.path)


class AttachmentNamespace(str, Enum):
    root = ""
    thumbs = "thumbs"
    static = "static"
    avatar = "avatar"
    header = "header"

    def directory(self, storage_root: Path | str) -> CachePath:
        base = CachePath(Path(storage_root))
        return base.join(self.value) if self.value else base

    def path(self, storage_root: Path | str, *segments: str) -> CachePath:
        """Namespace directory joined with `segments`. Pure: creates nothing on disk."""
        p = self.directory(storage_root)
        for segment in segments:
            p = p.join(segment)
        return p


__all__ = ["CachePath", "AttachmentNamespace"]
