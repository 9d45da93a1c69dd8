"""Base class for domain events.

Design invariants
-----------------
1.  Every event is **immutable** (``frozen=True``).
2.  ``event_id`` is a UUID4 generated at creation time; event stores may
    use it as the dedup key within a stream.
3.  The aggregate machinery only looks at ``type(event)``.  Any object can
    be applied; subclassing ``DomainEvent`` is a convenience, not a
    requirement.

Example::

    @dataclass(frozen=True)
    class OrderCreated(DomainEvent):
        order_number: str = ""
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from aggregate_root.core.ids import new_id as _uuid
from aggregate_root.core.ids import utc_now as _now


@dataclass(frozen=True)
class DomainEvent:
    """Immutable base for domain events.

    Shared fields
    ~~~~~~~~~~~~~
    event_id        Unique identity (UUID4).
    timestamp       UTC creation time.
    metadata        Free-form tuple of ``(key, value)`` pairs.
    """

    event_id: str = field(default_factory=_uuid)
    timestamp: datetime = field(default_factory=_now)
    metadata: tuple[tuple[str, Any], ...] = ()

    def metadata_dict(self) -> dict[str, Any]:
        """Return a mutable dict copy of ``metadata``."""
        return dict(self.metadata)
