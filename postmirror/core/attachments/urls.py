# postmirror/core/attachments/urls.py
"""
Platform URL helpers: attachment ids <-> redirect URLs, static asset ids, and
mapping URLs found in post HTML onto cacheable resources.
"""

from __future__ import annotations

from postmirror.schemas.models import AttachmentResource, StaticResource

ATTACHMENT_REDIRECT_BASE = "https://cohost.org/rc/attachment-redirect/"
STATIC_BASE = "https://cohost.org/static/"

# Every URL form an attachment id has been served under
_ATTACHMENT_PREFIXES = (
    ATTACHMENT_REDIRECT_BASE,
    "https://cohost.org/api/v1/attachments/",
    "https://staging.cohostcdn.org/attachment/",
)
_ID_LEN = 36


def attachment_id_to_url(id: str, base: str = ATTACHMENT_REDIRECT_BASE) -> str:
    return f"{base}{id}"


def attachment_url_to_id(url: str) -> str | None:
    """
    Extract the attachment id from any known attachment URL form.

    Anything after the 36-char id (a trailing filename, a query string) is ignored.
    """
    for prefix in _ATTACHMENT_PREFIXES:
        if url.startswith(prefix):
            rest = url[len(prefix) :]
            return rest[:_ID_LEN] if len(rest) >= _ID_LEN else None
    return None


def custom_emoji_url_to_id(url: str) -> str | None:
    if not url.startswith(STATIC_BASE):
        return None
    basename = url[len(STATIC_BASE) :]
    if "." not in basename:
        return None
    return basename.rsplit(".", 1)[0]


def cacheable_for_url(url: str) -> AttachmentResource | StaticResource | None:
    """Map a platform URL to the resource that caches it, or None for foreign URLs."""
    attachment_id = attachment_url_to_id(url)
    if attachment_id is not None:
        return AttachmentResource(id=attachment_id)
    if url.startswith(STATIC_BASE):
        filename = url[len(STATIC_BASE) :].split("?", 1)[0]
        if filename and "/" not in filename:
            return StaticResource(filename=filename, url=url)
    return None


__all__ = [
    "ATTACHMENT_REDIRECT_BASE",
    "STATIC_BASE",
    "attachment_id_to_url",
    "attachment_url_to_id",
    "custom_emoji_url_to_id",
    "cacheable_for_url",
]
