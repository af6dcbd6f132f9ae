# tests/unit/test_redirect_transforms.py
from __future__ import annotations

import pytest

from postmirror.core.attachments.transforms import IdentityTransform, RedirectTransform, WidthTransform


def test_identity_leaves_url_alone() -> None:
    assert IdentityTransform().apply("https://cdn.example/a/b.png") == "https://cdn.example/a/b.png"


def test_width_appends_query_parameter() -> None:
    t = WidthTransform(675)
    assert t.apply("https://cdn.example/a/b.png") == "https://cdn.example/a/b.png?width=675"
    assert t.apply("https://cdn.example/a/b.png?sig=1") == "https://cdn.example/a/b.png?sig=1&width=675"


def test_width_must_be_positive() -> None:
    with pytest.raises(ValueError):
        WidthTransform(0)


def test_strategies_satisfy_protocol() -> None:
    assert isinstance(IdentityTransform(), RedirectTransform)
    assert isinstance(WidthTransform(10), RedirectTransform)
