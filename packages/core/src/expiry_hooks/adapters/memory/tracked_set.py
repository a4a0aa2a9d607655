"""InMemoryTrackedSet — set-backed fake of the durable tracked set."""

from __future__ import annotations

from expiry_hooks.ports.tracked_set import ITrackedSet


class InMemoryTrackedSet(ITrackedSet):
    def __init__(self, initial: set[object] | None = None) -> None:
        self._members: set[object] = set(initial or ())
        self.writes = 0

    async def members(self) -> frozenset[object]:
        return frozenset(self._members)

    async def add(self, entity_id: int) -> None:
        self._members.add(entity_id)
        self.writes += 1

    async def discard(self, entity_id: int) -> None:
        self._members.discard(entity_id)
        self.writes += 1

    # --- Test helpers ---

    def seed(self, *raw: object) -> None:
        """Insert raw values, including ones a real store might hand back."""
        self._members.update(raw)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._members

    def __len__(self) -> int:
        return len(self._members)

    def clear(self) -> None:
        self._members.clear()
