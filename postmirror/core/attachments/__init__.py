# postmirror/core/attachments/__init__.py
from .context import AttachmentsContext, RealAttachmentsContext
from .entry import CacheEntry, probe_file, store_bytes, store_copy
from .paths import AttachmentNamespace, CachePath
from .transforms import IdentityTransform, RedirectTransform, WidthTransform
from .urls import (
    attachment_id_to_url,
    attachment_url_to_id,
    cacheable_for_url,
    custom_emoji_url_to_id,
)

__all__ = [
    "AttachmentsContext",
    "RealAttachmentsContext",
    "CacheEntry",
    "probe_file",
    "store_bytes",
    "store_copy",
    "AttachmentNamespace",
    "CachePath",
    "RedirectTransform",
    "IdentityTransform",
    "WidthTransform",
    "attachment_id_to_url",
    "attachment_url_to_id",
    "custom_emoji_url_to_id",
    "cacheable_for_url",
]
