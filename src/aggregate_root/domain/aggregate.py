"""Event-sourced aggregate root capability.

A domain class becomes an aggregate by inheriting from ``AggregateRoot``.
Its state then changes only through ``apply(event)``, which routes the
event through the configured apply strategy and records it as
unpublished.  ``load()`` rebuilds state by replaying a stream from an event
store; ``store()`` publishes the recorded events to one.

Configuration is fixed when the class is defined::

    class Order(AggregateRoot, event_store=store):
        def __init__(self) -> None:
            self.status = "draft"

        def apply_order_created(self, event: OrderCreated) -> None:
            self.status = "created"

or shared between several classes through a definition built once::

    OrderRoot = aggregate_root(strategy=HandlerTableStrategy(...))

    class Order(OrderRoot):
        ...

Subclasses inherit their parents' configuration and may override it with
their own class keywords.

Lifecycle
---------
``Fresh`` (no unpublished events) → ``Dirty`` (``apply``) → ``Clean``
(``store`` or ``load``) → ``Dirty`` …

Known limitations, kept on purpose:

*  ``load()`` on a dirty aggregate drops its unpublished events once the
   replay succeeds.
*  A replay that fails half-way leaves the events applied so far in place.
*  A publish that fails half-way leaves *every* event unpublished locally,
   including those the store already accepted; retrying ``store()`` will
   publish them again.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, ClassVar, TypeVar

from aggregate_root.core.config import configuration
from aggregate_root.core.errors import NoEventStoreConfigured, NoStreamSpecified
from aggregate_root.domain.strategies import (
    ApplyStrategy,
    DefaultApplyStrategy,
    resolve_dispatch,
)
from aggregate_root.infrastructure.event_store import IEventStore

logger = logging.getLogger(__name__)

_UNSET: Any = object()

_A = TypeVar("_A", bound="AggregateRoot")


@dataclass(frozen=True)
class AggregateRootDefinition:
    """Apply strategy and default event store shared by an aggregate class."""

    strategy: ApplyStrategy
    event_store: IEventStore | None = None
    dispatch: Callable[[Any, Any], None] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Raises TypeError for strategies that can't dispatch.
        object.__setattr__(self, "dispatch", resolve_dispatch(self.strategy))

    def replace(
        self,
        strategy: ApplyStrategy = _UNSET,
        event_store: IEventStore | None = _UNSET,
    ) -> AggregateRootDefinition:
        return AggregateRootDefinition(
            strategy=self.strategy if strategy is _UNSET else strategy,
            event_store=self.event_store if event_store is _UNSET else event_store,
        )


class AggregateRoot:
    """Mixin giving a domain class ``apply``, ``load`` and ``store``."""

    _aggregate_root_definition: ClassVar[AggregateRootDefinition] = AggregateRootDefinition(
        strategy=DefaultApplyStrategy(),
    )

    def __init_subclass__(
        cls,
        *,
        strategy: ApplyStrategy = _UNSET,
        event_store: IEventStore | None = _UNSET,
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)
        cls._aggregate_root_definition = cls._aggregate_root_definition.replace(
            strategy=strategy, event_store=event_store,
        )

    # -- Configuration -----------------------------------------------------

    @property
    def apply_strategy(self) -> ApplyStrategy:
        return type(self)._aggregate_root_definition.strategy

    @property
    def default_event_store(self) -> IEventStore | None:
        return type(self)._aggregate_root_definition.event_store

    # -- State -------------------------------------------------------------

    @property
    def _unpublished(self) -> list[Any]:
        # Created lazily so subclasses need not call super().__init__().
        return vars(self).setdefault("_unpublished_events", [])

    @property
    def unpublished_events(self) -> tuple[Any, ...]:
        """Events applied since construction or the last load/store."""
        return tuple(self._unpublished)

    @property
    def loaded_from_stream_name(self) -> str | None:
        """Stream this aggregate was last loaded from, if any."""
        return vars(self).get("_loaded_from_stream_name")

    # -- Operations --------------------------------------------------------

    def apply(self, event: Any) -> None:
        """Mutate state according to *event* and record it as unpublished.

        Errors raised by the apply strategy (e.g. ``NoHandlerFound``)
        propagate and the event is not recorded.
        """
        type(self)._aggregate_root_definition.dispatch(self, event)
        self._unpublished.append(event)

    def load(
        self: _A,
        stream_name: str,
        event_store: IEventStore | None = None,
    ) -> _A:
        """Replay *stream_name* onto this aggregate and return ``self``.

        Unpublished events are discarded once the replay succeeds.
        """
        store = self._resolve_event_store(event_store, "load")
        events = store.read_stream_events_forward(stream_name)
        for event in events:
            self.apply(event)
        self._unpublished.clear()
        self._loaded_from_stream_name = stream_name
        logger.debug(
            "Loaded %s from stream %s (%d events)",
            type(self).__name__, stream_name, len(events),
        )
        return self

    def store(
        self,
        stream_name: str | None = None,
        event_store: IEventStore | None = None,
    ) -> None:
        """Publish unpublished events in apply order, then forget them.

        *stream_name* defaults to the stream this aggregate was loaded
        from.  If a publish fails the error propagates and no event is
        forgotten, including those already published.
        """
        if stream_name is None:
            stream_name = self.loaded_from_stream_name
        if stream_name is None:
            raise NoStreamSpecified(type(self))
        store = self._resolve_event_store(event_store, "store")

        pending = self._unpublished
        for event in pending:
            store.publish_event(event, stream_name=stream_name)
        logger.debug(
            "Stored %d events of %s to stream %s",
            len(pending), type(self).__name__, stream_name,
        )
        pending.clear()

    def _resolve_event_store(
        self,
        event_store: IEventStore | None,
        operation: str,
    ) -> IEventStore:
        for candidate in (
            event_store,
            self.default_event_store,
            configuration.default_event_store,
        ):
            if candidate is not None:
                return candidate
        raise NoEventStoreConfigured(type(self), operation)


def aggregate_root(
    *,
    strategy: ApplyStrategy | None = None,
    event_store: IEventStore | None = None,
) -> type[AggregateRoot]:
    """Build a configured ``AggregateRoot`` base to share between classes.

    ``strategy`` defaults to ``DefaultApplyStrategy()``; ``event_store``
    defaults to none, in which case ``load``/``store`` need one per call
    (or a global default from ``configuration``).
    """
    return type(
        "AggregateRoot",
        (AggregateRoot,),
        {"__module__": __name__},
        strategy=strategy if strategy is not None else DefaultApplyStrategy(),
        event_store=event_store,
    )
