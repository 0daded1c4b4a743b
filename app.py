"""
FastAPI application factory.
create_app() is the single entry point for building the app.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import sentry_sdk
from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import AppSettings
from errors import register_error_handlers
from routes.analytics_routes import router as analytics_router
from routes.health_routes import router as health_router
from routes.redirect_routes import router as redirect_router
from routes.url_routes import router as url_router
from services.analytics import AnalyticsAggregator
from services.click_recorder import ClickRecorder
from services.redirect import RedirectService
from services.registry import SlugRegistry
from shared.logging import get_logger, setup_logging
from storage.memory import InMemoryLinkStore
from storage.protocol import LinkStore

log = get_logger(__name__)


def create_app(
    settings: Optional[AppSettings] = None, store: Optional[LinkStore] = None
) -> FastAPI:
    """Create and return a fully configured FastAPI application.

    A fresh in-memory store is created unless *store* is supplied.
    """
    if settings is None:
        settings = AppSettings()

    setup_logging(settings.logging, production=settings.is_production)

    # Initialise Sentry before anything else so it captures startup errors
    if settings.sentry.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry.sentry_dsn,
            send_default_pii=settings.sentry.sentry_send_pii,
            traces_sample_rate=settings.sentry.sentry_traces_sample_rate,
            environment=settings.env,
        )

    if store is None:
        store = InMemoryLinkStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("app_started", app_name=settings.app_name, env=settings.env)
        yield
        log.info("app_stopped", app_name=settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url=settings.docs_url,
        redoc_url=None,
        lifespan=lifespan,
    )

    registry = SlugRegistry(
        store,
        slug_length=settings.slug_length,
        cascade_click_events=settings.cascade_click_events,
    )
    recorder = ClickRecorder(store)
    app.state.settings = settings
    app.state.store = store
    app.state.registry = registry
    app.state.recorder = recorder
    app.state.redirect_service = RedirectService(registry, recorder)
    app.state.aggregator = AnalyticsAggregator(store, registry)

    # all origins allowed by default; the dashboard runs on its own origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    api = APIRouter(prefix=settings.api_prefix)
    api.include_router(url_router)
    api.include_router(redirect_router)
    api.include_router(analytics_router)
    app.include_router(api)
    app.include_router(health_router)

    return app
