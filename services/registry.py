"""
Slug registry: creation, lookup and lifecycle of short links.

Validation and slug generation live here; atomicity lives in the store.
The uniqueness check in ``create`` is a fast path for a friendly error;
the store re-checks under its lock, so a racing create still gets a
ConflictError rather than a duplicate.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from errors import ConflictError, NotFoundError, ValidationError
from schemas.models.link import ShortLink
from shared.datetime_utils import resolve_expiry
from shared.generators import generate_slug
from shared.logging import get_logger
from shared.validators import SLUG_MAX_LENGTH, validate_slug, validate_url
from storage.protocol import LinkStore

log = get_logger(__name__)


class SlugRegistry:
    def __init__(
        self,
        store: LinkStore,
        slug_length: int = 8,
        cascade_click_events: bool = True,
    ) -> None:
        self._store = store
        self.slug_length = slug_length
        self.cascade_click_events = cascade_click_events

    def create(
        self,
        original_url: str,
        requested_slug: Optional[str] = None,
        expires_at: Union[str, datetime, None] = None,
    ) -> ShortLink:
        """Validate and store a new short link.

        Raises:
            ValidationError: malformed URL, slug or expiry.
            ConflictError: *requested_slug* is already taken.
        """
        if not validate_url(original_url):
            raise ValidationError("Invalid URL format", field="originalUrl")

        try:
            expiry = resolve_expiry(expires_at)
        except ValueError as exc:
            raise ValidationError("Invalid expiry date format", field="expiresAt") from exc

        if requested_slug:
            if not validate_slug(requested_slug):
                raise ValidationError(
                    "Slug can only contain letters, numbers, hyphens and "
                    f"underscores (1-{SLUG_MAX_LENGTH} characters)",
                    field="slug",
                )
            if self._store.get_link_by_slug(requested_slug) is not None:
                raise ConflictError("Slug already in use", field="slug")
            slug = requested_slug
        else:
            slug = generate_slug(self.slug_length)

        link = self._store.add_link(original_url, slug, expiry)
        log.info(
            "link_created",
            link_id=link.id,
            slug=link.slug,
            custom_slug=bool(requested_slug),
            expires_at=link.expires_at.isoformat() if link.expires_at else None,
        )
        return link

    def get_by_id(self, link_id: int) -> ShortLink:
        link = self._store.get_link(link_id)
        if link is None:
            raise NotFoundError("URL not found")
        return link

    def get_by_slug(self, slug: str) -> ShortLink:
        link = self._store.get_link_by_slug(slug)
        if link is None:
            raise NotFoundError("URL not found")
        return link

    def list_all(self) -> list[ShortLink]:
        """All links, newest first."""
        return self._store.list_links()

    def delete(self, link_id: int) -> None:
        """Remove a link and free its slug for reuse."""
        if not self._store.remove_link(link_id, cascade=self.cascade_click_events):
            raise NotFoundError("URL not found")
        log.info("link_deleted", link_id=link_id, cascade=self.cascade_click_events)

    def increment_clicks(self, link_id: int) -> ShortLink:
        link = self._store.increment_clicks(link_id)
        if link is None:
            raise NotFoundError("URL not found")
        return link

    def set_active(self, link_id: int, active: bool) -> ShortLink:
        link = self._store.update_link(link_id, active=active)
        if link is None:
            raise NotFoundError("URL not found")
        log.info("link_status_changed", link_id=link_id, active=active)
        return link
