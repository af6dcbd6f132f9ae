# tests/utils.py
"""
Shared fakes and canonical values for the attachment cache tests.
"""

from __future__ import annotations

from typing import Any

ATTACHMENT_ID = "44444444-4444-4444-4444-444444444444"
REDIRECT_URL = f"https://cohost.org/rc/attachment-redirect/{ATTACHMENT_ID}"
ASSET_URL = f"https://staging.cohostcdn.org/attachment/{ATTACHMENT_ID}/My%20File.png"

PNG_BODY = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
WEBP_BODY = b"RIFF\x00\x00\x00\x00WEBPVP8 " + b"\x00" * 32


class FakeResponse:
    """Just enough of requests.Response for the cache's HTTP helpers."""

    def __init__(self, status: int = 200, headers: dict[str, str] | None = None, body: bytes = b"") -> None:
        self.status_code = status
        self.headers = dict(headers or {})
        self.content = body


class FakeHttp:
    """
    Scripted stand-in for `requests.get` / `requests.head`.

    GET responses are keyed by URL. HEAD responses are a per-URL queue; the last
    response repeats once the queue runs dry.
    """

    def __init__(self) -> None:
        self.get_responses: dict[str, FakeResponse] = {}
        self.head_responses: dict[str, list[FakeResponse]] = {}
        self.get_calls: list[str] = []
        self.head_calls: list[str] = []
        self.last_headers: dict[str, str] | None = None

    def on_get(self, url: str, *, status: int = 200, headers: dict[str, str] | None = None, body: bytes = b"") -> None:
        self.get_responses[url] = FakeResponse(status, headers, body)

    def on_head(self, url: str, *responses: FakeResponse) -> None:
        self.head_responses[url] = list(responses)

    def get(self, url: str, *, headers: dict[str, str], timeout: Any) -> FakeResponse:
        self.get_calls.append(url)
        self.last_headers = dict(headers)
        if url not in self.get_responses:
            raise AssertionError(f"unexpected GET {url}")
        return self.get_responses[url]

    def head(self, url: str, *, headers: dict[str, str], timeout: Any, allow_redirects: bool) -> FakeResponse:
        assert allow_redirects is False
        self.head_calls.append(url)
        queue = self.head_responses.get(url)
        if not queue:
            raise AssertionError(f"unexpected HEAD {url}")
        return queue.pop(0) if len(queue) > 1 else queue[0]


def redirect_to(location: str) -> FakeResponse:
    return FakeResponse(302, {"Location": location})


def not_acceptable() -> FakeResponse:
    return FakeResponse(406, {})
