# postmirror/core/attachments/context.py
"""
Public entry points of the attachment cache.

Callers (the import and render pipelines) hand over a local file, an imported
URL, or a platform resource descriptor, and get back a `CachePath` to bytes on
disk. Each call probes the cache first and only touches the network on a miss.

Not safe for concurrent use: nothing guards the probe-then-write sequence, so
two callers populating the same key at once can both download it. Serialize
per key if running in parallel.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol
from uuid import uuid4

from postmirror.core.fetch import (
    NoFilenameError,
    OfflineRequiredError,
    UnsupportedFilenameError,
    cache_error_guard,
    guess_extension,
    http_get,
    imported_dirname,
    original_filename,
    resolve_redirect,
)
from postmirror.schemas.models import (
    AttachmentResource,
    AvatarResource,
    Cacheable,
    CachePolicy,
    HeaderResource,
    ImportedResource,
    StaticResource,
    ThumbnailResource,
)

from .entry import CacheEntry, probe_file, store_bytes, store_copy
from .paths import AttachmentNamespace, CachePath
from .transforms import IdentityTransform, RedirectTransform, WidthTransform
from .urls import attachment_id_to_url

logger = logging.getLogger(__name__)


class AttachmentsContext(Protocol):
    def store(self, input_path: Path) -> CachePath: ...

    def cache_imported(self, url: str, contextual_name: str) -> CachePath: ...

    def cache_resource(self, cacheable: Cacheable) -> CachePath: ...

    def cache_thumb(self, id: str) -> CachePath: ...


class RealAttachmentsContext:
    """Filesystem + HTTP implementation of `AttachmentsContext`."""

    def __init__(self, policy: CachePolicy | None = None) -> None:
        self.policy = policy or CachePolicy()

    @property
    def storage_root(self) -> Path:
        return self.policy.storage_root

    # -------------------------
    # Entry points
    # -------------------------

    def store(self, input_path: Path | str) -> CachePath:
        """Copy a local file into a fresh `{uuid}/` directory under its own base name."""
        input_path = Path(input_path)
        filename = input_path.name
        if not filename:
            raise NoFilenameError(f"no filename: {input_path}")
        try:
            filename.encode("utf-8")
        except UnicodeEncodeError as e:
            raise UnsupportedFilenameError(f"unsupported filename: {input_path}") from e

        with cache_error_guard(input_path):
            entry = CacheEntry(AttachmentNamespace.root.path(self.storage_root, str(uuid4())))
            entry.create()
            return store_copy(input_path, entry.directory.join(filename))

    def cache_imported(self, url: str, contextual_name: str) -> CachePath:
        """Cache an external URL referenced by the post `contextual_name` as `file.{ext}`."""
        with cache_error_guard(url):
            entry = CacheEntry(AttachmentNamespace.root.path(self.storage_root, imported_dirname(url, contextual_name)))
            logger.debug("imported %s -> %s", url, entry.directory)
            entry.create()

            hit = entry.probe()
            if hit is not None:
                return hit

            self._require_network(url)
            logger.info("downloading attachment: %s", url)
            content_type, body = http_get(url, policy=self.policy)
            return entry.populate(f"file.{guess_extension(content_type)}", body)

    def cache_resource(self, cacheable: Cacheable) -> CachePath:
        if isinstance(cacheable, AttachmentResource):
            return self._cache_attachment(cacheable.id, AttachmentNamespace.root, IdentityTransform())
        if isinstance(cacheable, ThumbnailResource):
            return self.cache_thumb(cacheable.id)
        if isinstance(cacheable, StaticResource):
            return self._cache_flat(AttachmentNamespace.static, cacheable.filename, cacheable.url)
        if isinstance(cacheable, AvatarResource):
            return self._cache_flat(AttachmentNamespace.avatar, cacheable.filename, cacheable.url)
        if isinstance(cacheable, HeaderResource):
            return self._cache_flat(AttachmentNamespace.header, cacheable.filename, cacheable.url)
        if isinstance(cacheable, ImportedResource):
            return self.cache_imported(cacheable.url, cacheable.contextual_name)
        raise TypeError(f"not a cacheable resource: {cacheable!r}")

    def cache_thumb(self, id: str) -> CachePath:
        """Cache the resized variant of attachment `id` under `thumbs/{id}/`."""
        return self._cache_attachment(id, AttachmentNamespace.thumbs, WidthTransform(self.policy.thumbnail_width))

    # -------------------------
    # Strategies
    # -------------------------

    def _require_network(self, url: str) -> None:
        if not self.policy.allow_network:
            raise OfflineRequiredError(f"cache miss and networking is disabled by policy: {url}")

    def _cache_attachment(self, id: str, namespace: AttachmentNamespace, transform: RedirectTransform) -> CachePath:
        """
        Cache a platform attachment reached through the redirect endpoint.

        HEAD the endpoint (no redirect following) for the real asset URL, take
        the percent-decoded last path segment as the filename, apply `transform`
        to the resolved URL and GET that.
        """
        url = attachment_id_to_url(id, base=self.policy.attachment_redirect_base)
        with cache_error_guard(url):
            entry = CacheEntry(namespace.path(self.storage_root, id))
            entry.create()

            hit = entry.probe()
            if hit is not None:
                return hit

            self._require_network(url)
            logger.info("downloading attachment: %s", url)

            target = resolve_redirect(url, policy=self.policy)
            filename = original_filename(target)
            logger.debug("original filename: %s", filename)

            download_url = transform.apply(target)
            if download_url != target:
                logger.debug("transformed redirect target: %s", download_url)

            _, body = http_get(download_url, policy=self.policy)
            return entry.populate(filename, body)

    def _cache_flat(self, namespace: AttachmentNamespace, filename: str, url: str) -> CachePath:
        with cache_error_guard(url):
            path = namespace.path(self.storage_root, filename)
            logger.debug("%s %s -> %s", namespace.value, url, path)

            hit = probe_file(path)
            if hit is not None:
                return hit

            self._require_network(url)
            logger.info("downloading resource: %s", url)
            _, body = http_get(url, policy=self.policy)
            return store_bytes(path, body)


__all__ = ["AttachmentsContext", "RealAttachmentsContext"]
