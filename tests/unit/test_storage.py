"""Unit tests for the in-memory LinkStore, including its concurrency guarantees."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from errors import ConflictError
from shared.device import DeviceType
from storage.memory import InMemoryLinkStore
from storage.protocol import LinkStore

URL = "https://example.com/landing"


def _click(store, link_id, device=DeviceType.DESKTOP, referrer=None):
    return store.add_click(
        short_url_id=link_id,
        referrer=referrer,
        user_agent=None,
        ip_address=None,
        device=device,
    )


def test_satisfies_protocol(store):
    assert isinstance(store, LinkStore)


# ── Links ─────────────────────────────────────────────────────────────────────


class TestAddLink:
    def test_assigns_monotonic_ids(self, store):
        ids = [store.add_link(URL, f"s{i}", None).id for i in range(3)]
        assert ids == [1, 2, 3]

    def test_initial_state(self, store, clock):
        link = store.add_link(URL, "abc", None)
        assert link.clicks == 0
        assert link.active is True
        assert link.created_at == clock.now

    def test_duplicate_slug_conflicts(self, store):
        store.add_link(URL, "taken", None)
        with pytest.raises(ConflictError):
            store.add_link("https://other.example", "taken", None)

    def test_failed_insert_does_not_consume_state(self, store):
        store.add_link(URL, "taken", None)
        with pytest.raises(ConflictError):
            store.add_link(URL, "taken", None)
        assert store.counts()["links"] == 1

    def test_lookup_by_id_and_slug(self, store):
        link = store.add_link(URL, "abc", None)
        assert store.get_link(link.id) == link
        assert store.get_link_by_slug("abc") == link
        assert store.get_link(999) is None
        assert store.get_link_by_slug("nope") is None


def test_list_links_newest_first(store):
    first = store.add_link(URL, "first", None)
    second = store.add_link(URL, "second", None)
    third = store.add_link(URL, "third", None)
    assert [link.id for link in store.list_links()] == [third.id, second.id, first.id]


class TestUpdateLink:
    def test_toggle_active(self, store):
        link = store.add_link(URL, "abc", None)
        updated = store.update_link(link.id, active=False)
        assert updated.active is False
        assert store.get_link_by_slug("abc").active is False
        # earlier snapshot is untouched
        assert link.active is True

    def test_unknown_id(self, store):
        assert store.update_link(42, active=False) is None

    @pytest.mark.parametrize("field", ["slug", "clicks", "original_url"])
    def test_immutable_fields_rejected(self, store, field):
        link = store.add_link(URL, "abc", None)
        with pytest.raises(ValueError):
            store.update_link(link.id, **{field: "x"})


class TestIncrementClicks:
    def test_increments(self, store):
        link = store.add_link(URL, "abc", None)
        store.increment_clicks(link.id)
        assert store.increment_clicks(link.id).clicks == 2

    def test_unknown_id(self, store):
        assert store.increment_clicks(42) is None

    def test_concurrent_increments_are_not_lost(self, store):
        link = store.add_link(URL, "hot", None)
        n = 500
        with ThreadPoolExecutor(max_workers=16) as pool:
            list(pool.map(lambda _: store.increment_clicks(link.id), range(n)))
        assert store.get_link(link.id).clicks == n


class TestRemoveLink:
    def test_removes_record_and_slug(self, store):
        link = store.add_link(URL, "abc", None)
        assert store.remove_link(link.id) is True
        assert store.get_link(link.id) is None
        assert store.get_link_by_slug("abc") is None

    def test_slug_reusable_after_removal(self, store):
        link = store.add_link(URL, "abc", None)
        store.remove_link(link.id)
        again = store.add_link("https://new.example", "abc", None)
        assert again.id != link.id

    def test_unknown_id(self, store):
        assert store.remove_link(42) is False

    def test_cascade_drops_click_events(self, store):
        keep = store.add_link(URL, "keep", None)
        drop = store.add_link(URL, "drop", None)
        _click(store, keep.id)
        _click(store, drop.id)
        _click(store, drop.id)
        store.remove_link(drop.id, cascade=True)
        assert store.list_clicks(drop.id) == []
        assert len(store.list_clicks()) == 1

    def test_without_cascade_events_are_orphaned(self, store):
        link = store.add_link(URL, "abc", None)
        _click(store, link.id)
        store.remove_link(link.id, cascade=False)
        assert len(store.list_clicks(link.id)) == 1


# ── Click events ──────────────────────────────────────────────────────────────


class TestClicks:
    def test_add_click(self, store, clock):
        link = store.add_link(URL, "abc", None)
        event = _click(store, link.id, device=DeviceType.TABLET, referrer="https://t.co")
        assert event.id == 1
        assert event.short_url_id == link.id
        assert event.device is DeviceType.TABLET
        assert event.timestamp == clock.now

    def test_list_filters_and_orders_newest_first(self, store):
        a = store.add_link(URL, "a", None)
        b = store.add_link(URL, "b", None)
        e1 = _click(store, a.id)
        _click(store, b.id)
        e3 = _click(store, a.id)
        assert [e.id for e in store.list_clicks(a.id)] == [e3.id, e1.id]
        assert len(store.list_clicks()) == 3

    def test_counts(self, store):
        link = store.add_link(URL, "abc", None)
        _click(store, link.id)
        assert store.counts() == {"links": 1, "clicks": 1}


def test_concurrent_creates_of_same_slug_yield_one_winner():
    store = InMemoryLinkStore()
    outcomes = []

    def attempt(_):
        try:
            store.add_link(URL, "contested", None)
            outcomes.append("ok")
        except ConflictError:
            outcomes.append("conflict")

    with ThreadPoolExecutor(max_workers=16) as pool:
        list(pool.map(attempt, range(64)))

    assert outcomes.count("ok") == 1
    assert outcomes.count("conflict") == 63
