"""
Analytics endpoints polled by the dashboard.

GET /analytics         - service-wide summary
GET /analytics/{url_id} - one link with its click events
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from dependencies import get_aggregator
from schemas.dto.responses.analytics import AnalyticsSummary, LinkAnalyticsResponse
from schemas.dto.responses.common import ErrorResponse
from services.analytics import AnalyticsAggregator

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("", response_model=AnalyticsSummary)
async def get_analytics(
    aggregator: AnalyticsAggregator = Depends(get_aggregator),
) -> AnalyticsSummary:
    return aggregator.summarize()


@router.get(
    "/{url_id}",
    response_model=LinkAnalyticsResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_url_analytics(
    url_id: int, aggregator: AnalyticsAggregator = Depends(get_aggregator)
) -> LinkAnalyticsResponse:
    return aggregator.detail(url_id)
