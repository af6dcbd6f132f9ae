# tests/unit/test_platform_urls.py
from __future__ import annotations

from postmirror.core.attachments.urls import (
    attachment_id_to_url,
    attachment_url_to_id,
    cacheable_for_url,
    custom_emoji_url_to_id,
)
from postmirror.schemas.models import AttachmentResource, StaticResource

ID = "44444444-4444-4444-4444-444444444444"


def test_attachment_id_to_url() -> None:
    assert attachment_id_to_url(ID) == f"https://cohost.org/rc/attachment-redirect/{ID}"
    assert attachment_id_to_url(ID, base="https://m.example/r/") == f"https://m.example/r/{ID}"


def test_attachment_url_to_id_known_forms() -> None:
    assert attachment_url_to_id(f"https://cohost.org/rc/attachment-redirect/{ID}?query") == ID
    assert attachment_url_to_id(f"https://cohost.org/api/v1/attachments/{ID}?query") == ID
    assert attachment_url_to_id(f"https://staging.cohostcdn.org/attachment/{ID}/file.jpg?query") == ID


def test_attachment_url_to_id_rejects_short_and_foreign() -> None:
    assert attachment_url_to_id("https://cohost.org/rc/attachment-redirect/short") is None
    assert attachment_url_to_id(f"https://example.com/attachment/{ID}") is None


def test_custom_emoji_url_to_id() -> None:
    assert custom_emoji_url_to_id("https://cohost.org/static/f0c56e99113f1a0731b4.svg") == "f0c56e99113f1a0731b4"
    assert custom_emoji_url_to_id("https://cohost.org/static/noext") is None
    assert custom_emoji_url_to_id("https://example.com/static/a.svg") is None


def test_cacheable_for_url() -> None:
    assert cacheable_for_url(f"https://staging.cohostcdn.org/attachment/{ID}/a.png") == AttachmentResource(id=ID)

    static = cacheable_for_url("https://cohost.org/static/abc.png?v=2")
    assert static == StaticResource(filename="abc.png", url="https://cohost.org/static/abc.png?v=2")

    assert cacheable_for_url("https://example.com/a.png") is None
