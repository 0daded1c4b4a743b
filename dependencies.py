"""
FastAPI dependency providers.

All injectable dependencies are defined here as plain functions used with
FastAPI's Depends() system. The objects themselves are built once by
create_app() and stored on app.state.
"""

from __future__ import annotations

from fastapi import Request

from services.analytics import AnalyticsAggregator
from services.redirect import RedirectService
from services.registry import SlugRegistry
from storage.protocol import LinkStore


def get_store(request: Request) -> LinkStore:
    """Return the shared LinkStore from app.state."""
    return request.app.state.store


def get_registry(request: Request) -> SlugRegistry:
    return request.app.state.registry


def get_redirect_service(request: Request) -> RedirectService:
    return request.app.state.redirect_service


def get_aggregator(request: Request) -> AnalyticsAggregator:
    return request.app.state.aggregator
