"""LinkStore protocol - services depend on this, not the concrete implementation."""

from datetime import datetime
from typing import Any, Optional, Protocol, runtime_checkable

from schemas.models.click import ClickEvent
from schemas.models.link import ShortLink
from shared.device import DeviceType


@runtime_checkable
class LinkStore(Protocol):
    def add_link(
        self, original_url: str, slug: str, expires_at: Optional[datetime]
    ) -> ShortLink: ...

    def get_link(self, link_id: int) -> Optional[ShortLink]: ...

    def get_link_by_slug(self, slug: str) -> Optional[ShortLink]: ...

    def list_links(self) -> list[ShortLink]: ...

    def update_link(self, link_id: int, **changes: Any) -> Optional[ShortLink]: ...

    def increment_clicks(self, link_id: int) -> Optional[ShortLink]: ...

    def remove_link(self, link_id: int, cascade: bool = False) -> bool: ...

    def add_click(
        self,
        short_url_id: int,
        referrer: Optional[str],
        user_agent: Optional[str],
        ip_address: Optional[str],
        device: Optional[DeviceType],
    ) -> ClickEvent: ...

    def list_clicks(self, short_url_id: Optional[int] = None) -> list[ClickEvent]: ...

    def counts(self) -> dict[str, int]: ...
