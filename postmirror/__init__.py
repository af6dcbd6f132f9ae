"""Attachment cache for mirroring platform posts into a static site."""

__version__ = "0.1.0"
