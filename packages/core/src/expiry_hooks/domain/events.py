"""Domain events emitted by the expiration scheduler."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DomainEvent(BaseModel):
    """Base class for all expiry-hooks events.

    Events are immutable and carry the correlation ID of the trigger that
    produced them (a status transition, a timer fire or a sweep).
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    event_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    entity_id: int = Field(gt=0)
    correlation_id: str | None = None


class ExpirySource(str, Enum):
    """Which path produced an :class:`EntityExpired` event."""

    TIMER = "timer"
    SWEEP = "sweep"
    EDIT = "edit"
    MANUAL = "manual"


class EntityExpired(DomainEvent):
    """The canonical "entity has ended" notification.

    Subscribers must tolerate receiving it more than once for the same id,
    and must tolerate ids whose timer was never scheduled (manual or sweep
    emission).
    """

    entity: Any = Field(default=None, exclude=True)
    source: ExpirySource = ExpirySource.TIMER


class EntityBecameUpcoming(DomainEvent):
    """Emitted after a published entity received its expiration timer."""

    ends_at: datetime | None = None


class EntityWithdrawn(DomainEvent):
    """Emitted when an entity is unpublished or about to be deleted."""

    reason: str = "unpublished"
