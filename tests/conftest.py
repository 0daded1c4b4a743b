"""
Shared test fixtures.

Every test runs from an empty temporary directory so pydantic-settings never
reads a developer's real .env file; tests control config through
monkeypatch.setenv() or explicit AppSettings arguments.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app import create_app
from config import AppSettings
from services.analytics import AnalyticsAggregator
from services.click_recorder import ClickRecorder
from services.redirect import RedirectService
from services.registry import SlugRegistry
from storage.memory import InMemoryLinkStore

BASE_TIME = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Deterministic clock: each call returns a time one second later."""

    def __init__(self, start: datetime = BASE_TIME) -> None:
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep .env files and service env vars out of every test."""
    monkeypatch.chdir(tmp_path)
    for var in ("ENV", "SLUG_LENGTH", "CASCADE_CLICK_EVENTS", "SENTRY_DSN", "LOG_FORMAT"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock) -> InMemoryLinkStore:
    return InMemoryLinkStore(clock=clock)


@pytest.fixture
def registry(store) -> SlugRegistry:
    return SlugRegistry(store)


@pytest.fixture
def recorder(store) -> ClickRecorder:
    return ClickRecorder(store)


@pytest.fixture
def redirects(registry, recorder) -> RedirectService:
    return RedirectService(registry, recorder)


@pytest.fixture
def aggregator(store, registry) -> AnalyticsAggregator:
    return AnalyticsAggregator(store, registry)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings()


@pytest.fixture
def app(settings, store):
    return create_app(settings, store=store)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
