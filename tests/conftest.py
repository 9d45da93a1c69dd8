"""Shared fixtures for the aggregate-root test suite."""

from __future__ import annotations

import pytest

from aggregate_root.core.config import configuration
from aggregate_root.infrastructure.event_store import InMemoryEventStore


@pytest.fixture
def event_store() -> InMemoryEventStore:
    """Return an empty in-memory event store."""
    return InMemoryEventStore()


@pytest.fixture(autouse=True)
def _reset_global_configuration():
    """Keep the process-wide default event store from leaking between tests."""
    configuration.reset()
    yield
    configuration.reset()
