"""ITrackedSet — durable set of entity ids that are not yet confirmed expired."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Collection


@runtime_checkable
class ITrackedSet(Protocol):
    """Port for the redundancy tracker's durable membership set.

    ``members`` returns the raw stored values; callers coerce them, since a
    durable backend may hand back strings, bytes or leftovers from older
    writers. ``add`` and ``discard`` must be idempotent.
    """

    async def members(self) -> Collection[object]:
        """Return every stored entry."""
        ...

    async def add(self, entity_id: int) -> None:
        """Insert ``entity_id``. Already present is a no-op."""
        ...

    async def discard(self, entity_id: int) -> None:
        """Remove ``entity_id``. Absent is a no-op."""
        ...
