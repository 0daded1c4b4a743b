"""
Click recorder: appends one immutable ClickEvent per redirect.

Recording never fails on bad input: missing referrer/user-agent are stored
as absent and unknown user agents classify as desktop. Incrementing the
link's counter is the caller's job (see services.redirect).
"""

from __future__ import annotations

from typing import Optional

from schemas.models.click import ClickEvent
from shared.device import classify_device
from shared.logging import get_logger
from storage.protocol import LinkStore

log = get_logger(__name__)


class ClickRecorder:
    def __init__(self, store: LinkStore) -> None:
        self._store = store

    def record(
        self,
        short_url_id: int,
        raw_referrer: Optional[str],
        raw_user_agent: Optional[str],
        ip_address: Optional[str] = None,
    ) -> ClickEvent:
        event = self._store.add_click(
            short_url_id=short_url_id,
            referrer=raw_referrer or None,
            user_agent=raw_user_agent or None,
            ip_address=ip_address or None,
            device=classify_device(raw_user_agent),
        )
        log.debug(
            "click_recorded",
            event_id=event.id,
            link_id=short_url_id,
            device=event.device.value if event.device else None,
        )
        return event
