"""Primitives: exceptions, clocks, timestamp parsing."""

from __future__ import annotations

from .clock import Clock, FrozenClock, system_clock
from .exceptions import (
    CacheError,
    ConfigurationError,
    EntityStoreError,
    ExpiryHooksError,
    HandlerError,
    InfrastructureError,
    TimerQueueError,
    TrackedSetError,
)
from .timestamps import coerce_entity_id, parse_end_timestamp

__all__ = [
    "CacheError",
    "Clock",
    "ConfigurationError",
    "EntityStoreError",
    "ExpiryHooksError",
    "FrozenClock",
    "HandlerError",
    "InfrastructureError",
    "TimerQueueError",
    "TrackedSetError",
    "coerce_entity_id",
    "parse_end_timestamp",
    "system_clock",
]
