"""IEntityStore — read access to the entities whose end time is tracked."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IEntity(Protocol):
    """Read-only view of an entity owned by the entity store.

    ``end_timestamp_raw`` is the unparsed metadata value; it may be missing
    or malformed. ``has_ended()`` is authoritative and owned by the store,
    so time-zone and drift rules live there rather than in the scheduler.
    """

    id: int
    kind: str
    status: Any
    end_timestamp_raw: str | None

    def has_ended(self) -> bool:
        ...


@runtime_checkable
class IEntityStore(Protocol):
    """Port for looking up entities by id.

    Usage::

        store = InMemoryEntityStore(clock=clock)
        entity = await store.get(42)
        if entity is not None and entity.has_ended():
            ...
    """

    async def get(self, entity_id: int) -> IEntity | None:
        """Return the entity, or ``None`` if it does not exist."""
        ...
