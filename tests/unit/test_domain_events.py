"""Tests for the ``DomainEvent`` base class (``domain/events.py``)."""

from __future__ import annotations

import dataclasses
from datetime import datetime

import pytest

from aggregate_root.domain.events import DomainEvent


@dataclasses.dataclass(frozen=True)
class OrderCreated(DomainEvent):
    order_number: str = ""


class TestDomainEvent:
    def test_default_fields_populated(self):
        e = DomainEvent()
        assert isinstance(e.event_id, str)
        assert len(e.event_id) == 36  # UUID4 format
        assert isinstance(e.timestamp, datetime)
        assert e.timestamp.tzinfo is not None
        assert e.metadata == ()

    def test_event_id_unique(self):
        ids = {DomainEvent().event_id for _ in range(100)}
        assert len(ids) == 100

    def test_frozen(self):
        e = OrderCreated(order_number="o-1")
        with pytest.raises(dataclasses.FrozenInstanceError):
            e.order_number = "oops"  # type: ignore[misc]

    def test_metadata_dict(self):
        e = DomainEvent(metadata=(("user_id", "u-1"), ("ip", "10.0.0.1")))
        d = e.metadata_dict()
        assert d == {"user_id": "u-1", "ip": "10.0.0.1"}
        d["user_id"] = "changed"
        assert e.metadata_dict()["user_id"] == "u-1"
