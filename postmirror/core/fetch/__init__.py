# postmirror/core/fetch/__init__.py
from .cache import _sha256, imported_dirname
from .errors import (
    CACHE_ERRORS,
    AttachmentCacheError,
    EmptyCacheDirectoryError,
    HeaderDecodeError,
    InvalidNameError,
    MalformedRedirectTargetError,
    MissingNameError,
    NetworkError,
    NoFilenameError,
    OfflineRequiredError,
    RedirectExpectedError,
    StorageError,
    UnsupportedFilenameError,
    cache_error_guard,
    classify_cache_error,
)
from .http import guess_extension, http_get, original_filename, resolve_redirect

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
    "imported_dirname",
    "_sha256",
    "http_get",
    "resolve_redirect",
    "original_filename",
    "guess_extension",
]
