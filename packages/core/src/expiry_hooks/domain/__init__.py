"""Domain: entity status and the events that describe expiration."""

from __future__ import annotations

from expiry_hooks.domain.events import (
    DomainEvent,
    EntityBecameUpcoming,
    EntityExpired,
    EntityWithdrawn,
    ExpirySource,
)
from expiry_hooks.domain.status import EntityStatus

__all__: list[str] = [
    "DomainEvent",
    "EntityBecameUpcoming",
    "EntityExpired",
    "EntityStatus",
    "EntityWithdrawn",
    "ExpirySource",
]
