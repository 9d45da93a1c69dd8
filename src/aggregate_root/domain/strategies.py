"""Apply strategies: route an event to the aggregate's mutation logic.

An apply strategy is an object with a ``dispatch(aggregate, event)``
method, or a plain callable ``strategy(aggregate, event) -> None``.
One strategy instance is chosen per aggregate definition and shared by
every instance of it, so strategies must not keep per-aggregate state.

This module provides:

*  ``IApplyStrategy`` — the protocol.
*  ``resolve_dispatch`` — turns either form into the callable to invoke.
*  ``DefaultApplyStrategy`` — naming convention, ``OrderCreated`` is
   handled by ``apply_order_created``.  Strict: a missing handler raises
   ``NoHandlerFound``.
*  ``HandlerTableStrategy`` — explicit event type → handler table.  Lenient
   by default: unmapped event types are ignored.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from aggregate_root.core.errors import NoHandlerFound

if TYPE_CHECKING:
    from aggregate_root.core.config import Settings

# Handler in a table: a method name on the aggregate or a function
# taking ``(aggregate, event)``.
TableHandler = str | Callable[[Any, Any], None]

_ACRONYM_BOUNDARY = re.compile(r"([A-Z\d]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")


def underscore(name: str) -> str:
    """Convert a CamelCase class name to snake_case.

    >>> underscore("OrderCreated")
    'order_created'
    >>> underscore("HTTPRequestSent")
    'http_request_sent'
    """
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    name = _WORD_BOUNDARY.sub(r"\1_\2", name)
    return name.replace("-", "_").lower()


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------

@runtime_checkable
class IApplyStrategy(Protocol):
    """Routes *event* to the state mutation logic of *aggregate*."""

    def dispatch(self, aggregate: Any, event: Any) -> None:
        """Mutate *aggregate* according to *event*.

        Raise ``NoHandlerFound`` (or any other error) to reject the event;
        the aggregate will not record it.
        """
        ...


# Anything an aggregate accepts as its strategy.
ApplyStrategy = IApplyStrategy | Callable[[Any, Any], None]


def resolve_dispatch(strategy: ApplyStrategy) -> Callable[[Any, Any], None]:
    """Return the callable that applies events for *strategy*.

    ``strategy.dispatch`` wins when present; otherwise *strategy* itself
    must be callable.
    """
    dispatch = getattr(strategy, "dispatch", None)
    if callable(dispatch):
        return dispatch
    if callable(strategy):
        return strategy
    raise TypeError(
        f"apply strategy must define dispatch(aggregate, event) or be "
        f"callable, got {type(strategy).__name__}"
    )


@lru_cache(maxsize=1)
def _aggregate_root_names() -> frozenset[str]:
    from aggregate_root.domain.aggregate import AggregateRoot

    return frozenset(dir(AggregateRoot))


def _is_reserved(aggregate: Any, name: str) -> bool:
    """True if *name* belongs to the aggregate machinery, not to a handler."""
    from aggregate_root.domain.aggregate import AggregateRoot

    return isinstance(aggregate, AggregateRoot) and name in _aggregate_root_names()


# ---------------------------------------------------------------------------
# Implementations
# ---------------------------------------------------------------------------

class DefaultApplyStrategy:
    """Call ``<prefix><snake_case event class name>(event)`` on the aggregate."""

    def __init__(self, prefix: str = "apply_") -> None:
        self._prefix = prefix

    @classmethod
    def from_settings(cls, settings: Settings) -> DefaultApplyStrategy:
        return cls(prefix=settings.handler_prefix)

    @property
    def prefix(self) -> str:
        return self._prefix

    def handler_name(self, event_type: type) -> str:
        return f"{self._prefix}{underscore(event_type.__name__)}"

    def dispatch(self, aggregate: Any, event: Any) -> None:
        name = self.handler_name(type(event))
        handler = None if _is_reserved(aggregate, name) else getattr(aggregate, name, None)
        if not callable(handler):
            raise NoHandlerFound(type(aggregate), type(event), name)
        handler(event)

    __call__ = dispatch

    def __repr__(self) -> str:
        return f"DefaultApplyStrategy(prefix={self._prefix!r})"


class HandlerTableStrategy:
    """Look the handler up in an explicit ``{event_type: handler}`` table.

    Event types are matched exactly (no subclass lookup).  A handler is
    either the name of a method on the aggregate, called with the event, or
    a function called with ``(aggregate, event)``.

    With ``strict=False`` (default) events missing from the table are
    ignored; with ``strict=True`` they raise ``NoHandlerFound``.
    """

    def __init__(
        self,
        table: Mapping[type, TableHandler],
        *,
        strict: bool = False,
    ) -> None:
        self._table: dict[type, TableHandler] = dict(table)
        self._strict = strict

    @property
    def strict(self) -> bool:
        return self._strict

    def handles(self, event_type: type) -> bool:
        return event_type in self._table

    def dispatch(self, aggregate: Any, event: Any) -> None:
        handler = self._table.get(type(event))
        if handler is None:
            if self._strict:
                raise NoHandlerFound(type(aggregate), type(event))
            return
        if isinstance(handler, str):
            getattr(aggregate, handler)(event)
        else:
            handler(aggregate, event)

    __call__ = dispatch

    def __repr__(self) -> str:
        names = sorted(t.__name__ for t in self._table)
        return f"HandlerTableStrategy({names}, strict={self._strict})"
