"""Turn domain objects into event-sourced aggregates.

Quick start::

    from aggregate_root import AggregateRoot, InMemoryEventStore

    store = InMemoryEventStore()

    class Order(AggregateRoot, event_store=store):
        def __init__(self) -> None:
            self.status = "draft"

        def apply_order_created(self, event) -> None:
            self.status = "created"
"""

from aggregate_root.core.config import Configuration, Settings, configuration, load_settings
from aggregate_root.core.errors import (
    AggregateRootError,
    ConfigError,
    EventDuplicatedInStream,
    EventStoreError,
    NoEventStoreConfigured,
    NoHandlerFound,
    NoStreamSpecified,
)
from aggregate_root.domain.aggregate import (
    AggregateRoot,
    AggregateRootDefinition,
    aggregate_root,
)
from aggregate_root.domain.events import DomainEvent
from aggregate_root.domain.strategies import (
    DefaultApplyStrategy,
    HandlerTableStrategy,
    IApplyStrategy,
    resolve_dispatch,
    underscore,
)
from aggregate_root.infrastructure.event_store import IEventStore, InMemoryEventStore

__version__ = "0.1.0"

__all__ = [
    "AggregateRoot",
    "AggregateRootDefinition",
    "AggregateRootError",
    "ConfigError",
    "Configuration",
    "DefaultApplyStrategy",
    "DomainEvent",
    "EventDuplicatedInStream",
    "EventStoreError",
    "HandlerTableStrategy",
    "IApplyStrategy",
    "IEventStore",
    "InMemoryEventStore",
    "NoEventStoreConfigured",
    "NoHandlerFound",
    "NoStreamSpecified",
    "Settings",
    "aggregate_root",
    "configuration",
    "load_settings",
    "resolve_dispatch",
    "underscore",
]
