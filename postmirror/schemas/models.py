# postmirror/schemas/models.py

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ============================================================
# Cache policy
# ============================================================


class CachePolicy(BaseModel):
    """
    Process-wide settings for the attachment cache.

    One policy is built at startup and handed to the attachments context; it is
    frozen so the storage root and network behaviour cannot drift mid-run.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, extra="ignore")

    storage_root: Path = Field(
        default=Path("attachments"),
        description="Base directory under which every cached resource is stored.",
    )
    attachment_redirect_base: str = Field(
        "https://cohost.org/rc/attachment-redirect/",
        description="Front-door URL prefix that redirects an attachment id to its real asset.",
    )
    thumbnail_width: int = Field(
        675,
        gt=0,
        description="Width requested from the asset host when caching thumbnails.",
    )
    redirect_retries: int = Field(
        2,
        ge=0,
        description="Extra HEAD attempts when the redirect endpoint answers without a Location header.",
    )
    timeout_s: float | None = Field(
        None,
        gt=0,
        description="HTTP timeout in seconds. None keeps the HTTP client's own default.",
    )
    user_agent: str | None = Field(
        None,
        description="Optional User-Agent header. None sends the HTTP client's default headers only.",
    )
    allow_network: bool = Field(
        True,
        description="If False, a cache miss raises instead of downloading (rebuild strictly from cache).",
    )
    allow_non_200: bool = Field(
        False,
        description="If False, raise on any GET status >= 400 instead of caching the error body.",
    )

    @field_validator("attachment_redirect_base")
    @classmethod
    def _base_ends_with_slash(cls, v: str) -> str:
        return v if v.endswith("/") else v + "/"


# ============================================================
# Resource descriptors
# ============================================================


class AttachmentResource(BaseModel):
    """Platform attachment, reached through the redirect endpoint."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    kind: Literal["attachment"] = "attachment"
    id: str = Field(..., description="Platform-issued attachment id (usually a 36-char UUID).")


class ThumbnailResource(BaseModel):
    """Width-constrained variant of an attachment, cached apart from the full-size file."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    kind: Literal["thumbnail"] = "thumbnail"
    id: str = Field(..., description="Platform-issued attachment id.")


class StaticResource(BaseModel):
    """Platform static asset (custom emoji and the like)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    kind: Literal["static"] = "static"
    filename: str = Field(..., description="Destination filename in the static namespace.")
    url: str = Field(..., description="Direct source URL.")


class AvatarResource(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    kind: Literal["avatar"] = "avatar"
    filename: str = Field(..., description="Destination filename in the avatar namespace.")
    url: str = Field(..., description="Direct source URL.")


class HeaderResource(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    kind: Literal["header"] = "header"
    filename: str = Field(..., description="Destination filename in the header namespace.")
    url: str = Field(..., description="Direct source URL.")


class ImportedResource(BaseModel):
    """An arbitrary external URL referenced by an imported post."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    kind: Literal["imported"] = "imported"
    url: str = Field(..., description="External URL to download.")
    contextual_name: str = Field(..., description="Base name of the post that references the URL.")


# Tagged union over every resource the cache knows how to fetch.
Cacheable = Annotated[
    AttachmentResource | ThumbnailResource | StaticResource | AvatarResource | HeaderResource | ImportedResource,
    Field(discriminator="kind"),
]


__all__ = [
    "CachePolicy",
    "AttachmentResource",
    "ThumbnailResource",
    "StaticResource",
    "AvatarResource",
    "HeaderResource",
    "ImportedResource",
    "Cacheable",
]
