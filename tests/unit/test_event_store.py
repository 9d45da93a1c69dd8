"""Tests for the in-memory event store (``infrastructure/event_store.py``).

Covers:
- Per-stream ordering and isolation.
- Duplicate detection within a stream.
- Protocol conformance and testing helpers.
"""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from aggregate_root.core.errors import EventDuplicatedInStream, EventStoreError
from aggregate_root.domain.events import DomainEvent
from aggregate_root.infrastructure.event_store import IEventStore, InMemoryEventStore


@dataclass(frozen=True)
class ItemAdded(DomainEvent):
    sku: str = ""


class TestInMemoryEventStore:
    @pytest.fixture
    def store(self) -> InMemoryEventStore:
        return InMemoryEventStore()

    def test_unknown_stream_is_empty(self, store):
        assert store.read_stream_events_forward("cart-1") == []
        assert store.stream_names() == []

    def test_ordering_preserved(self, store):
        events = [ItemAdded(event_id=f"ev-{i}") for i in range(10)]
        for event in events:
            store.publish_event(event, stream_name="cart-1")
        assert store.read_stream_events_forward("cart-1") == events

    def test_streams_are_isolated(self, store):
        a, b = ItemAdded(sku="a"), ItemAdded(sku="b")
        store.publish_event(a, stream_name="cart-1")
        store.publish_event(b, stream_name="cart-2")
        assert store.read_stream_events_forward("cart-1") == [a]
        assert store.read_stream_events_forward("cart-2") == [b]
        assert store.stream_names() == ["cart-1", "cart-2"]
        assert len(store) == 2

    def test_duplicate_event_id_in_stream_rejected(self, store):
        store.publish_event(ItemAdded(event_id="dup-1"), stream_name="cart-1")
        with pytest.raises(EventDuplicatedInStream) as exc_info:
            store.publish_event(ItemAdded(event_id="dup-1"), stream_name="cart-1")
        assert isinstance(exc_info.value, EventStoreError)
        assert exc_info.value.stream_name == "cart-1"
        assert exc_info.value.event_id == "dup-1"
        assert len(store) == 1

    def test_same_event_in_other_stream_allowed(self, store):
        event = ItemAdded()
        store.publish_event(event, stream_name="cart-1")
        store.publish_event(event, stream_name="all-carts")
        assert len(store) == 2

    def test_events_without_id_never_deduplicated(self, store):
        marker = object()
        for event in (2, 2, "paid", "paid", marker, marker):
            store.publish_event(event, stream_name="s")
        assert store.read_stream_events_forward("s") == [2, 2, "paid", "paid", marker, marker]

    def test_read_returns_a_copy(self, store):
        store.publish_event(ItemAdded(), stream_name="cart-1")
        events = store.read_stream_events_forward("cart-1")
        events.clear()
        assert len(store.read_stream_events_forward("cart-1")) == 1

    def test_clear(self, store):
        event = ItemAdded()
        store.publish_event(event, stream_name="cart-1")
        store.clear()
        assert len(store) == 0
        store.publish_event(event, stream_name="cart-1")
        assert len(store) == 1

    def test_matches_protocol(self, store):
        assert isinstance(store, IEventStore)
