# postmirror/core/attachments/entry.py
"""
Cache cells and the store.

A `CacheEntry` is a directory that holds at most one file. The file's name is
not known in advance (it comes from the origin at fetch time), but once written
it never changes and the entry is never updated or deleted here.

First-entry policy: only regular files count as entries (a stray subdirectory
is ignored). If a directory ever holds more than one file, the one with the
lexicographically smallest name wins. Directories only reach that state
through outside interference; the policy just makes the outcome stable.

Partial writes are not detected: a file truncated by an interrupted run is
reported as a hit on the next run.
"""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path

from postmirror.core.fetch.errors import EmptyCacheDirectoryError

from .paths import CachePath

logger = logging.getLogger(__name__)


def _readable(path: CachePath) -> bool:
    try:
        with open(path, "rb"):
            return True
    except OSError:
        return False


def probe_file(path: CachePath) -> CachePath | None:
    """Flat-file cache probe: hit when `path` opens for reading."""
    if _readable(path):
        logger.debug("cache hit: %s", path)
        return path
    return None


@dataclass(frozen=True)
class CacheEntry:
    directory: CachePath

    def _first(self) -> CachePath | None:
        try:
            with os.scandir(self.directory) as it:
                files = sorted((e for e in it if e.is_file()), key=lambda e: e.name)
        except OSError:
            return None
        return self.directory.join_entry(files[0]) if files else None

    def probe(self) -> CachePath | None:
        """
        Return the cached file, or None on a miss.

        Miss when the directory cannot be listed, is empty, or its first entry
        cannot be opened for reading.
        """
        first = self._first()
        if first is None or not _readable(first):
            logger.debug("cache miss: %s", self.directory)
            return None
        logger.debug("cache hit: %s", first)
        return first

    def resolve(self) -> CachePath:
        """Return the cached file; an empty directory here means an earlier run failed part way."""
        first = self._first()
        if first is None:
            raise EmptyCacheDirectoryError(f"directory is empty: {self.directory}")
        return first

    def create(self) -> None:
        Path(self.directory).mkdir(parents=True, exist_ok=True)

    def populate(self, filename: str, data: bytes) -> CachePath:
        return store_bytes(self.directory.join(filename), data)


def store_bytes(path: CachePath, data: bytes) -> CachePath:
    """Write `data` to `path` in full, creating parent directories. No atomic rename."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(data)
    logger.debug("stored %d bytes: %s", len(data), path)
    return path


def store_copy(source: Path, path: CachePath) -> CachePath:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, target)
    logger.debug("copied %s -> %s", source, path)
    return path


__all__ = ["CacheEntry", "probe_file", "store_bytes", "store_copy"]
