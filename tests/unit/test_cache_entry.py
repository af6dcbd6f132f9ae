# tests/unit/test_cache_entry.py
from __future__ import annotations

from pathlib import Path

import pytest

from postmirror.core.attachments.entry import CacheEntry, probe_file, store_bytes
from postmirror.core.attachments.paths import AttachmentNamespace
from postmirror.core.fetch.errors import EmptyCacheDirectoryError


def _entry(root: Path, key: str = "abc") -> CacheEntry:
    return CacheEntry(AttachmentNamespace.root.path(root, key))


def test_probe_missing_directory_is_miss(tmp_path: Path) -> None:
    assert _entry(tmp_path).probe() is None


def test_probe_empty_directory_is_miss(tmp_path: Path) -> None:
    entry = _entry(tmp_path)
    entry.create()
    assert Path(entry.directory).is_dir()
    assert entry.probe() is None


def test_probe_single_file_is_hit(tmp_path: Path) -> None:
    entry = _entry(tmp_path)
    stored = entry.populate("pic.png", b"data")

    hit = entry.probe()
    assert hit == stored
    assert Path(hit).read_bytes() == b"data"


def test_probe_unreadable_first_entry_is_miss(tmp_path: Path) -> None:
    entry = _entry(tmp_path)
    (Path(entry.directory) / "subdir").mkdir(parents=True)
    assert entry.probe() is None


def test_first_entry_is_smallest_name(tmp_path: Path) -> None:
    entry = _entry(tmp_path)
    entry.populate("b.png", b"b")
    entry.populate("a.png", b"a")

    assert entry.probe().name == "a.png"
    assert entry.resolve().name == "a.png"


def test_subdirectory_is_not_an_entry(tmp_path: Path) -> None:
    entry = _entry(tmp_path)
    (Path(entry.directory) / "0-stale").mkdir(parents=True)
    stored = entry.populate("b.png", b"b")

    assert entry.probe() == stored
    assert entry.resolve() == stored


def test_resolve_empty_directory_raises(tmp_path: Path) -> None:
    entry = _entry(tmp_path)
    entry.create()
    with pytest.raises(EmptyCacheDirectoryError, match="directory is empty"):
        entry.resolve()


def test_store_bytes_creates_parents(tmp_path: Path) -> None:
    path = AttachmentNamespace.avatar.path(tmp_path, "me.png")
    assert not (tmp_path / "avatar").exists()

    out = store_bytes(path, b"\x00\x01")
    assert out == path
    assert (tmp_path / "avatar" / "me.png").read_bytes() == b"\x00\x01"


def test_probe_file(tmp_path: Path) -> None:
    path = AttachmentNamespace.static.path(tmp_path, "emoji.png")
    assert probe_file(path) is None
    store_bytes(path, b"")
    # any readable file counts, even an empty one
    assert probe_file(path) == path
