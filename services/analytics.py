"""
Analytics aggregator: read-only summaries over links and click events.

Every call rescans both collections; nothing is cached or maintained
incrementally. The two collections are snapshotted separately, so a
summary taken mid-redirect may count an event whose counter increment has
not landed yet.
"""

from __future__ import annotations

from collections import Counter

from schemas.dto.responses.analytics import (
    AnalyticsSummary,
    DeviceStats,
    LinkAnalyticsResponse,
)
from services.registry import SlugRegistry
from shared.device import DeviceType
from shared.logging import get_logger, should_sample
from shared.referrers import normalize_referrer
from storage.protocol import LinkStore

log = get_logger(__name__)


class AnalyticsAggregator:
    def __init__(self, store: LinkStore, registry: SlugRegistry) -> None:
        self._store = store
        self._registry = registry

    def summarize(self) -> AnalyticsSummary:
        links = self._store.list_links()
        events = self._store.list_clicks()

        devices: Counter[DeviceType] = Counter(
            event.device for event in events if event.device is not None
        )
        referrers: Counter[str] = Counter(
            normalize_referrer(event.referrer) for event in events
        )

        summary = AnalyticsSummary(
            # Sum of counters, not len(events): the two can drift apart
            total_clicks=sum(link.clicks for link in links),
            total_links=len(links),
            active_links=sum(1 for link in links if link.active),
            device_stats=DeviceStats(
                mobile=devices[DeviceType.MOBILE],
                desktop=devices[DeviceType.DESKTOP],
                tablet=devices[DeviceType.TABLET],
            ),
            referrer_stats=dict(referrers),
        )
        if should_sample("analytics_query"):
            log.info(
                "analytics_query",
                total_links=summary.total_links,
                total_clicks=summary.total_clicks,
                events_scanned=len(events),
            )
        return summary

    def detail(self, short_url_id: int) -> LinkAnalyticsResponse:
        """One link plus its click events, newest first.

        Raises:
            NotFoundError: unknown link id.
        """
        link = self._registry.get_by_id(short_url_id)
        return LinkAnalyticsResponse(
            url=link, click_events=self._store.list_clicks(short_url_id)
        )
