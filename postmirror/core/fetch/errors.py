# postmirror/core/fetch/errors.py
"""
Typed errors + utilities for the attachment cache.

Exports
-------
- AttachmentCacheError and its subclasses (naming, cache-cell, redirect,
  transport and storage failures)
- CACHE_ERRORS
- classify_cache_error(exc, subject=None)
- cache_error_guard(subject=None)
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import requests

# =========================
# Exception types
# =========================


class AttachmentCacheError(RuntimeError):
    """Base class for attachment cache failures."""


# --- naming / namespace ---


class NoFilenameError(AttachmentCacheError):
    """A local source path has no base name to store it under."""


class UnsupportedFilenameError(AttachmentCacheError):
    """A local source path's base name is not representable as text."""


class InvalidNameError(AttachmentCacheError):
    """A path segment is not a safe, native filename inside the namespace root."""


class MissingNameError(AttachmentCacheError):
    """A required name component is empty or absent."""


# --- cache cells ---


class EmptyCacheDirectoryError(AttachmentCacheError):
    """A cache directory exists but holds no entry where one was expected."""


class OfflineRequiredError(AttachmentCacheError):
    """Cache miss occurred but policy forbids network access."""


# --- redirect indirection ---


class RedirectExpectedError(AttachmentCacheError):
    """The redirect endpoint never answered with a Location header."""


class MalformedRedirectTargetError(AttachmentCacheError):
    """The redirect target carries no usable filename."""


class HeaderDecodeError(AttachmentCacheError):
    """A response header could not be decoded as UTF-8."""


# --- transport / storage ---


class NetworkError(AttachmentCacheError):
    """HTTP/transport failure while attempting to fetch a resource."""


class StorageError(AttachmentCacheError):
    """Filesystem failure while reading or writing the cache."""


# Selector tuple for grouped exception handling
CACHE_ERRORS = (
    NoFilenameError,
    UnsupportedFilenameError,
    InvalidNameError,
    MissingNameError,
    EmptyCacheDirectoryError,
    OfflineRequiredError,
    RedirectExpectedError,
    MalformedRedirectTargetError,
    HeaderDecodeError,
    NetworkError,
    StorageError,
)

# =========================
# Classification helpers
# =========================


def classify_cache_error(exc: Exception, subject: object | None = None) -> AttachmentCacheError:
    """
    Map arbitrary exceptions raised while caching to a typed AttachmentCacheError.

    Heuristics:
      - Any AttachmentCacheError subclass → passed through
      - requests.* errors → NetworkError
      - OSError (filesystem) → StorageError
      - Fallback → AttachmentCacheError

    `subject` (the URL or path being cached) is prefixed to the message so a
    fatal error names the offending resource.
    """
    if isinstance(exc, AttachmentCacheError):
        return exc

    prefix = f"{subject}: " if subject is not None else ""

    # requests.RequestException derives from OSError, so it must be checked first
    if isinstance(exc, requests.RequestException):
        return NetworkError(f"{prefix}{exc}")

    if isinstance(exc, OSError):
        return StorageError(f"{prefix}{type(exc).__name__}: {exc}")

    return AttachmentCacheError(f"{prefix}{type(exc).__name__}: {exc}")


@contextmanager
def cache_error_guard(subject: object | None = None) -> Iterator[None]:
    """Context manager to normalize unexpected exceptions from cache internals."""
    try:
        yield
    except CACHE_ERRORS:
        raise
    except Exception as exc:  # noqa: BLE001
        raise classify_cache_error(exc, subject) from exc


__all__ = [
    "AttachmentCacheError",
    "NoFilenameError",
    "UnsupportedFilenameError",
    "InvalidNameError",
    "MissingNameError",
    "EmptyCacheDirectoryError",
    "OfflineRequiredError",
    "RedirectExpectedError",
    "MalformedRedirectTargetError",
    "HeaderDecodeError",
    "NetworkError",
    "StorageError",
    "CACHE_ERRORS",
    "classify_cache_error",
    "cache_error_guard",
]
