"""
Response DTOs for the analytics endpoints.

AnalyticsSummary      - GET /api/analytics       (200)
LinkAnalyticsResponse - GET /api/analytics/{id}  (200)

Field names serialise in camelCase (``totalClicks``, ``deviceStats``,
``clickEvents``) to match what the dashboard reads.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from schemas.models.click import ClickEvent
from schemas.models.link import ShortLink


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DeviceStats(_CamelModel):
    """Click event counts per device category."""

    mobile: int = 0
    desktop: int = 0
    tablet: int = 0


class AnalyticsSummary(_CamelModel):
    """Service-wide totals plus device and referrer breakdowns.

    ``total_clicks`` is the sum of the per-link counters, not the number of
    stored click events.
    """

    total_clicks: int = 0
    total_links: int = 0
    active_links: int = 0
    device_stats: DeviceStats = Field(default_factory=DeviceStats)
    referrer_stats: dict[str, int] = Field(default_factory=dict)


class LinkAnalyticsResponse(_CamelModel):
    """A single link together with its click events, newest first."""

    url: ShortLink
    click_events: list[ClickEvent]
