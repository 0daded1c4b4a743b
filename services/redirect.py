"""
Redirect path: slug → original URL, with click tracking.

The click event is appended first and the link counter incremented second.
The two writes are separate store operations: a crash between them leaves
an event without a matching counter increment. Analytics tolerate that
(``totalClicks`` reads the counters, the breakdowns read the events).
Writing the event first means a partial failure over-reports events
relative to ``totalClicks``; it never leaves a counted click without its
event.
"""

from __future__ import annotations

from typing import Optional

from errors import GoneError
from schemas.models.link import ShortLink
from services.click_recorder import ClickRecorder
from services.registry import SlugRegistry
from shared.datetime_utils import is_expired
from shared.logging import get_logger, hash_ip, should_sample

log = get_logger(__name__)


class RedirectService:
    def __init__(self, registry: SlugRegistry, recorder: ClickRecorder) -> None:
        self._registry = registry
        self._recorder = recorder

    def resolve(self, slug: str) -> ShortLink:
        """Return the link for *slug* if it may be followed.

        Raises:
            NotFoundError: unknown slug.
            GoneError: link deactivated or past its expiry.
        """
        link = self._registry.get_by_slug(slug)
        if not link.active:
            log.info("redirect_rejected", slug=slug, reason="inactive")
            raise GoneError("This link is no longer active")
        if is_expired(link.expires_at):
            log.info("redirect_rejected", slug=slug, reason="expired")
            raise GoneError("This link has expired")
        return link

    def follow(
        self,
        slug: str,
        referrer: Optional[str] = None,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> ShortLink:
        """Resolve *slug*, record the click and bump the counter.

        Rejected redirects record nothing.
        """
        link = self.resolve(slug)
        event = self._recorder.record(link.id, referrer, user_agent, ip_address)
        updated = self._registry.increment_clicks(link.id)

        if should_sample("url_redirect"):
            log.info(
                "url_redirect",
                slug=slug,
                link_id=link.id,
                clicks=updated.clicks,
                device=event.device.value if event.device else None,
                client_ip=hash_ip(ip_address),
            )
        return updated
