"""Custom exception hierarchy for aggregate roots."""


class AggregateRootError(Exception):
    """Base exception for all aggregate root errors."""


# --- Configuration ---
class ConfigError(AggregateRootError):
    """Invalid or missing configuration."""


class NoEventStoreConfigured(ConfigError):
    """Neither a per-call nor a default event store is available."""

    def __init__(self, aggregate_type: type, operation: str):
        self.aggregate_type = aggregate_type
        self.operation = operation
        super().__init__(
            f"{aggregate_type.__name__}.{operation}() needs an event store: "
            "pass event_store=... or configure a default one"
        )


class NoStreamSpecified(AggregateRootError):
    """``store()`` called without a stream name on a never-loaded aggregate."""

    def __init__(self, aggregate_type: type):
        self.aggregate_type = aggregate_type
        super().__init__(
            f"{aggregate_type.__name__}.store() needs a stream name: "
            "pass one or load() the aggregate first"
        )


# --- Dispatch ---
class NoHandlerFound(AggregateRootError):
    """The apply strategy has no handler for the event's type."""

    def __init__(
        self,
        aggregate_type: type,
        event_type: type,
        handler_name: str | None = None,
    ):
        self.aggregate_type = aggregate_type
        self.event_type = event_type
        self.handler_name = handler_name
        detail = f" (expected method {handler_name!r})" if handler_name else ""
        super().__init__(
            f"{aggregate_type.__name__} has no handler for "
            f"{event_type.__name__}{detail}"
        )


# --- Event store ---
class EventStoreError(AggregateRootError):
    """Error raised by a bundled event store implementation."""


class EventDuplicatedInStream(EventStoreError):
    """The same event was published twice into one stream."""

    def __init__(self, stream_name: str, event_id: str):
        self.stream_name = stream_name
        self.event_id = event_id
        super().__init__(
            f"Event {event_id} already published to stream {stream_name!r}"
        )
