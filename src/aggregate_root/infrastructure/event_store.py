"""Event store interface consumed by aggregates, plus an in-memory store.

Design invariants
-----------------
1.  ``read_stream_events_forward()`` returns a stream's events in
    **publish order**; an unknown stream reads as an empty list.
2.  ``publish_event()`` appends exactly one event to one stream.  Callers
    preserve ordering by publishing sequentially.
3.  The store is **append-only** — events can never be deleted or
    modified.  ``clear()`` exists only for testing.

This module provides:

*  ``IEventStore`` — the protocol aggregates talk to.
*  ``InMemoryEventStore`` — dict-of-lists implementation for tests and
   local development.  No persistence across restarts.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Protocol, runtime_checkable

from aggregate_root.core.errors import EventDuplicatedInStream

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------

@runtime_checkable
class IEventStore(Protocol):
    """Append-only, per-stream event log."""

    def read_stream_events_forward(self, stream_name: str) -> list[Any]:
        """Return every event of *stream_name* in publish order."""
        ...

    def publish_event(self, event: Any, stream_name: str) -> None:
        """Append *event* to *stream_name*."""
        ...


# ---------------------------------------------------------------------------
# In-memory implementation
# ---------------------------------------------------------------------------

def _event_id(event: Any) -> str | None:
    """Dedup key: the event's ``event_id``, if it carries one."""
    return getattr(event, "event_id", None) or None


class InMemoryEventStore:
    """List-per-stream event store.  No persistence across restarts.

    Good for: unit tests, local development, examples.

    Publishing an event whose ``event_id`` is already in the target stream
    raises ``EventDuplicatedInStream``.  Events without an ``event_id`` are
    never deduplicated, so a value may be published any number of times.
    The same event may appear in different streams.
    """

    def __init__(self) -> None:
        self._streams: dict[str, list[Any]] = defaultdict(list)
        self._seen: dict[str, set[Any]] = defaultdict(set)

    def read_stream_events_forward(self, stream_name: str) -> list[Any]:
        events = list(self._streams.get(stream_name, ()))
        logger.debug("Read %d events from stream %s", len(events), stream_name)
        return events

    def publish_event(self, event: Any, stream_name: str) -> None:
        event_id = _event_id(event)
        if event_id is not None:
            if event_id in self._seen[stream_name]:
                raise EventDuplicatedInStream(stream_name, str(event_id))
            self._seen[stream_name].add(event_id)
        self._streams[stream_name].append(event)

    def stream_names(self) -> list[str]:
        """Names of non-empty streams, in creation order."""
        return [name for name, events in self._streams.items() if events]

    # -- Testing helpers ---------------------------------------------------

    def clear(self) -> None:
        """Remove all events.  Testing only."""
        self._streams.clear()
        self._seen.clear()

    def __len__(self) -> int:
        return sum(len(events) for events in self._streams.values())
