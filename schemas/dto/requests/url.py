"""
Request DTOs for link creation and management endpoints.
"""

from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class CreateUrlRequest(BaseModel):
    """Request body for creating a new short link (POST /api/urls).

    Accepts ``url`` as an alias for ``originalUrl``. Format checks on the URL,
    the slug and ``expiresAt`` are done by the registry so the error carries
    the offending field name.
    """

    model_config = ConfigDict(populate_by_name=True)

    original_url: str = Field(
        validation_alias=AliasChoices("originalUrl", "original_url", "url")
    )
    slug: Optional[str] = None
    # ISO 8601 string, one of the presets ("never", "1day", "7days", "30days") or null
    expires_at: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("expiresAt", "expires_at")
    )

    @field_validator("slug", mode="before")
    @classmethod
    def _blank_slug_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class UpdateUrlRequest(BaseModel):
    """Request body for PATCH /api/urls/{id}: toggles the ``active`` flag."""

    model_config = ConfigDict(populate_by_name=True)

    active: bool
