"""
In-memory LinkStore.

Both collections, the slug index and the id sequences live behind a single
re-entrant lock, so every public method is one critical section:

- ``add_link`` re-checks the slug index before inserting, so two racing
  creates of the same slug cannot both succeed.
- ``increment_clicks`` is read-increment-store under the lock (no lost
  updates).
- ``remove_link`` drops the record and its slug index entry together.

Readers receive immutable snapshots; the lists returned are copies.
"""

from __future__ import annotations

import itertools
import threading
from datetime import datetime
from typing import Any, Callable, Optional

from errors import ConflictError
from schemas.models.click import ClickEvent
from schemas.models.link import ShortLink
from shared.datetime_utils import utc_now
from shared.device import DeviceType
from shared.logging import get_logger

log = get_logger(__name__)

# Fields of a ShortLink that may change after creation
_MUTABLE_LINK_FIELDS = frozenset({"active"})


class InMemoryLinkStore:
    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self._clock = clock
        self._lock = threading.RLock()
        self._links: dict[int, ShortLink] = {}
        self._slug_index: dict[str, int] = {}
        self._clicks: dict[int, ClickEvent] = {}
        self._link_ids = itertools.count(1)
        self._click_ids = itertools.count(1)

    # ── Links ────────────────────────────────────────────────────────────────

    def add_link(
        self, original_url: str, slug: str, expires_at: Optional[datetime]
    ) -> ShortLink:
        with self._lock:
            if slug in self._slug_index:
                raise ConflictError("Slug already in use", field="slug")
            link = ShortLink(
                id=next(self._link_ids),
                original_url=original_url,
                slug=slug,
                clicks=0,
                active=True,
                created_at=self._clock(),
                expires_at=expires_at,
            )
            self._links[link.id] = link
            self._slug_index[slug] = link.id
            return link

    def get_link(self, link_id: int) -> Optional[ShortLink]:
        with self._lock:
            return self._links.get(link_id)

    def get_link_by_slug(self, slug: str) -> Optional[ShortLink]:
        with self._lock:
            link_id = self._slug_index.get(slug)
            if link_id is None:
                return None
            return self._links[link_id]

    def list_links(self) -> list[ShortLink]:
        with self._lock:
            links = list(self._links.values())
        return sorted(links, key=lambda link: (link.created_at, link.id), reverse=True)

    def update_link(self, link_id: int, **changes: Any) -> Optional[ShortLink]:
        unknown = set(changes) - _MUTABLE_LINK_FIELDS
        if unknown:
            raise ValueError(f"Immutable or unknown link fields: {sorted(unknown)}")
        with self._lock:
            link = self._links.get(link_id)
            if link is None:
                return None
            updated = link.model_copy(update=changes)
            self._links[link_id] = updated
            return updated

    def increment_clicks(self, link_id: int) -> Optional[ShortLink]:
        with self._lock:
            link = self._links.get(link_id)
            if link is None:
                return None
            updated = link.model_copy(update={"clicks": link.clicks + 1})
            self._links[link_id] = updated
            return updated

    def remove_link(self, link_id: int, cascade: bool = False) -> bool:
        with self._lock:
            link = self._links.pop(link_id, None)
            if link is None:
                return False
            self._slug_index.pop(link.slug, None)
            if cascade:
                orphaned = [
                    event_id
                    for event_id, event in self._clicks.items()
                    if event.short_url_id == link_id
                ]
                for event_id in orphaned:
                    del self._clicks[event_id]
                log.debug(
                    "click_events_cascaded", link_id=link_id, removed=len(orphaned)
                )
            return True

    # ── Click events ─────────────────────────────────────────────────────────

    def add_click(
        self,
        short_url_id: int,
        referrer: Optional[str],
        user_agent: Optional[str],
        ip_address: Optional[str],
        device: Optional[DeviceType],
    ) -> ClickEvent:
        with self._lock:
            event = ClickEvent(
                id=next(self._click_ids),
                short_url_id=short_url_id,
                referrer=referrer,
                user_agent=user_agent,
                ip_address=ip_address,
                device=device,
                timestamp=self._clock(),
            )
            self._clicks[event.id] = event
            return event

    def list_clicks(self, short_url_id: Optional[int] = None) -> list[ClickEvent]:
        with self._lock:
            events = [
                event
                for event in self._clicks.values()
                if short_url_id is None or event.short_url_id == short_url_id
            ]
        return sorted(events, key=lambda e: (e.timestamp, e.id), reverse=True)

    def counts(self) -> dict[str, int]:
        with self._lock:
            return {"links": len(self._links), "clicks": len(self._clicks)}
