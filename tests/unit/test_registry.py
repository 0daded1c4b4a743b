"""Unit tests for SlugRegistry."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from errors import ConflictError, NotFoundError, ValidationError
from services.registry import SlugRegistry
from shared.validators import validate_slug
from storage.memory import InMemoryLinkStore

URL = "https://example.com/a/very/long/path?with=query"


class TestCreate:
    def test_custom_slug_roundtrip(self, registry):
        registry.create(URL, "promo")
        link = registry.get_by_slug("promo")
        assert link.original_url == URL
        assert link.clicks == 0
        assert link.active is True

    def test_generated_slug(self, registry):
        link = registry.create(URL)
        assert len(link.slug) == 8
        assert validate_slug(link.slug)

    def test_generated_slug_length_configurable(self, store):
        assert len(SlugRegistry(store, slug_length=12).create(URL).slug) == 12

    def test_generated_slugs_unique(self, registry):
        slugs = {registry.create(URL).slug for _ in range(200)}
        assert len(slugs) == 200

    def test_concurrent_generated_slugs_never_collide(self):
        registry = SlugRegistry(InMemoryLinkStore())
        with ThreadPoolExecutor(max_workers=8) as pool:
            links = list(pool.map(lambda _: registry.create(URL), range(200)))
        assert len({link.slug for link in links}) == 200
        assert len({link.id for link in links}) == 200

    def test_duplicate_slug_conflicts(self, registry):
        registry.create(URL, "taken")
        with pytest.raises(ConflictError) as exc_info:
            registry.create("https://other.example", "taken")
        assert exc_info.value.field == "slug"

    def test_generated_collision_surfaces_as_conflict(self, registry):
        registry.create(URL, "AAAAAAAA")
        with patch("services.registry.generate_slug", return_value="AAAAAAAA"):
            with pytest.raises(ConflictError):
                registry.create(URL)

    @pytest.mark.parametrize(
        "url",
        ["", "example.com", "not a url", "javascript:alert(1)", "/relative"],
        ids=["empty", "no_scheme", "text", "javascript", "relative"],
    )
    def test_invalid_url(self, registry, url):
        with pytest.raises(ValidationError) as exc_info:
            registry.create(url)
        assert exc_info.value.field == "originalUrl"

    @pytest.mark.parametrize(
        "slug", ["has space", "x" * 51, "bad/slug", "ünï"], ids=["space", "long", "slash", "unicode"]
    )
    def test_invalid_slug(self, registry, slug):
        with pytest.raises(ValidationError) as exc_info:
            registry.create(URL, slug)
        assert exc_info.value.field == "slug"

    def test_invalid_expiry(self, registry):
        with pytest.raises(ValidationError) as exc_info:
            registry.create(URL, "abc", "next tuesday")
        assert exc_info.value.field == "expiresAt"

    def test_failed_validation_stores_nothing(self, registry):
        with pytest.raises(ValidationError):
            registry.create(URL, "bad slug")
        assert registry.list_all() == []

    def test_expiry_iso_string(self, registry):
        link = registry.create(URL, "exp", "2030-05-01T10:00:00Z")
        assert link.expires_at == datetime(2030, 5, 1, 10, tzinfo=timezone.utc)

    def test_expiry_preset(self, registry):
        before = datetime.now(timezone.utc)
        link = registry.create(URL, "week", "7days")
        assert before + timedelta(days=7) <= link.expires_at
        assert link.expires_at <= datetime.now(timezone.utc) + timedelta(days=7)

    def test_never_expires(self, registry):
        assert registry.create(URL, "forever", "never").expires_at is None


class TestLookups:
    def test_get_by_id(self, registry):
        link = registry.create(URL, "abc")
        assert registry.get_by_id(link.id) == link

    def test_get_by_id_missing(self, registry):
        with pytest.raises(NotFoundError):
            registry.get_by_id(404)

    def test_get_by_slug_missing(self, registry):
        with pytest.raises(NotFoundError):
            registry.get_by_slug("ghost")

    def test_list_all_newest_first(self, registry):
        slugs = ["one", "two", "three"]
        for slug in slugs:
            registry.create(URL, slug)
        assert [link.slug for link in registry.list_all()] == list(reversed(slugs))


class TestDelete:
    def test_delete_then_lookup_fails(self, registry):
        link = registry.create(URL, "gone")
        registry.delete(link.id)
        with pytest.raises(NotFoundError):
            registry.get_by_slug("gone")

    def test_slug_reusable(self, registry):
        link = registry.create(URL, "reuse")
        registry.delete(link.id)
        again = registry.create("https://second.example", "reuse")
        assert again.original_url == "https://second.example"

    def test_delete_missing(self, registry):
        with pytest.raises(NotFoundError):
            registry.delete(99)

    @pytest.mark.parametrize("cascade, remaining", [(True, 0), (False, 1)], ids=["cascade", "orphan"])
    def test_cascade_setting(self, store, cascade, remaining):
        registry = SlugRegistry(store, cascade_click_events=cascade)
        link = registry.create(URL, "abc")
        store.add_click(link.id, None, None, None, None)
        registry.delete(link.id)
        assert len(store.list_clicks(link.id)) == remaining


class TestCounters:
    def test_increment(self, registry):
        link = registry.create(URL, "abc")
        assert registry.increment_clicks(link.id).clicks == 1

    def test_increment_missing(self, registry):
        with pytest.raises(NotFoundError):
            registry.increment_clicks(1)

    def test_concurrent_increments(self, registry):
        link = registry.create(URL, "abc")
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda _: registry.increment_clicks(link.id), range(250)))
        assert registry.get_by_id(link.id).clicks == 250


class TestSetActive:
    def test_deactivate_and_reactivate(self, registry):
        link = registry.create(URL, "abc")
        assert registry.set_active(link.id, False).active is False
        assert registry.get_by_slug("abc").active is False
        assert registry.set_active(link.id, True).active is True

    def test_missing(self, registry):
        with pytest.raises(NotFoundError):
            registry.set_active(5, False)
