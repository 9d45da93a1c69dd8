"""Domain layer — events, apply strategies, the aggregate root mixin.

Nothing here talks to an event store directly except through the
``IEventStore`` protocol.
"""
