# tests/conftest.py
from __future__ import annotations

from pathlib import Path

import pytest

from postmirror.core.attachments import RealAttachmentsContext
from postmirror.schemas.models import CachePolicy
from tests.utils import FakeHttp


@pytest.fixture
def storage_root(tmp_path: Path) -> Path:
    return tmp_path / "attachments"


@pytest.fixture
def policy(storage_root: Path) -> CachePolicy:
    return CachePolicy(storage_root=storage_root)


@pytest.fixture
def ctx(policy: CachePolicy) -> RealAttachmentsContext:
    return RealAttachmentsContext(policy)


@pytest.fixture
def fake_http(monkeypatch) -> FakeHttp:
    """Route all cache HTTP traffic through a scripted fake (no network in tests)."""
    http = FakeHttp()
    monkeypatch.setattr("postmirror.core.fetch.http.requests.get", http.get)
    monkeypatch.setattr("postmirror.core.fetch.http.requests.head", http.head)
    return http

