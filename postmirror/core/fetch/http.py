# postmirror/core/fetch/http.py
"""
Blocking HTTP helpers for the attachment cache.

Two request shapes are used:
  - plain GET for direct downloads (imported URLs, static/avatar/header assets,
    and the final hop of an attachment download)
  - HEAD with redirects disabled, to read the platform's attachment redirect
    target without downloading it
"""

from __future__ import annotations

import logging
from urllib.parse import unquote

import requests

from postmirror.schemas.models import CachePolicy

from .errors import (
    HeaderDecodeError,
    MalformedRedirectTargetError,
    NetworkError,
    RedirectExpectedError,
)

logger = logging.getLogger(__name__)

# Content-Type → stored file extension for imported resources
_EXTENSIONS: dict[str, str] = {
    "image/gif": "gif",
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/svg+xml": "svg",
    "image/webp": "webp",
}
_FALLBACK_EXT = "bin"


def _headers_for(policy: CachePolicy) -> dict[str, str]:
    return {"User-Agent": policy.user_agent} if policy.user_agent else {}


def http_get(url: str, *, policy: CachePolicy) -> tuple[str | None, bytes]:
    """
    GET `url` and return `(content_type, body)`.

    Redirects are followed (requests' default). With `policy.allow_non_200`
    False, a final status >= 400 raises NetworkError rather than handing an
    error page back to be cached.
    """
    try:
        resp = requests.get(url, headers=_headers_for(policy), timeout=policy.timeout_s)
    except requests.RequestException as e:
        raise NetworkError(f"GET {url}: {e}") from e

    if resp.status_code >= 400 and not policy.allow_non_200:
        raise NetworkError(f"HTTP {resp.status_code} for {url}")

    return resp.headers.get("Content-Type"), resp.content


def _decode_header(value: str, *, url: str) -> str:
    # http.client hands header bytes over as latin-1; re-read them as UTF-8
    try:
        raw = value.encode("latin-1")
    except UnicodeEncodeError:
        return value
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise HeaderDecodeError(f"Location header is not UTF-8 for {url}: {value!r}") from e


def resolve_redirect(url: str, *, policy: CachePolicy) -> str:
    """
    Return the Location target of the redirect endpoint at `url`.

    The attachment redirect endpoint occasionally answers 406 Not Acceptable
    instead of 302, so a response without a Location header is retried up to
    `policy.redirect_retries` extra times before RedirectExpectedError.
    Only this loop retries; transport errors propagate immediately.
    """
    attempts = policy.redirect_retries + 1
    status: int | None = None
    for attempt in range(1, attempts + 1):
        try:
            resp = requests.head(
                url,
                headers=_headers_for(policy),
                timeout=policy.timeout_s,
                allow_redirects=False,
            )
        except requests.RequestException as e:
            raise NetworkError(f"HEAD {url}: {e}") from e

        status = resp.status_code
        location = resp.headers.get("Location")
        if location is not None:
            return _decode_header(location, url=url)

        if attempt < attempts:
            logger.warning("no redirect from %s (HTTP %s), retrying (%d/%d)", url, status, attempt, attempts - 1)

    raise RedirectExpectedError(f"expected redirect but got {status}: {url}")


def original_filename(target: str) -> str:
    """
    Filename carried by a redirect target: its last path segment, percent-decoded once.

    >>> original_filename("https://cdn.example/attachment/abc/My%20File.png")
    'My File.png'
    """
    if "/" not in target:
        raise MalformedRedirectTargetError(f"redirect target has no slashes: {target}")
    _, encoded = target.rsplit("/", 1)
    try:
        return unquote(encoded, errors="strict")
    except UnicodeDecodeError as e:
        raise MalformedRedirectTargetError(f"redirect target filename is not UTF-8: {target}") from e


def guess_extension(content_type: str | None) -> str:
    """Map a Content-Type header to a stored file extension, falling back to `bin`."""
    if content_type:
        ext = _EXTENSIONS.get(content_type.split(";", 1)[0].strip().lower())
        if ext:
            return ext
    logger.warning("unknown attachment mime type: %r", content_type)
    return _FALLBACK_EXT


__all__ = [
    "http_get",
    "resolve_redirect",
    "original_filename",
    "guess_extension",
]
