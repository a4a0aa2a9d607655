"""ICacheService - Protocol for the cache invalidation the cleanup chain needs."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ICacheService(Protocol):
    """
    Abstract interface for cache invalidation.
    Only deletion is required; reads and writes belong to the host.
    """

    async def delete(self, key: str, namespace: str) -> None:
        """Delete ``key`` from ``namespace``. Missing keys are ignored."""
        ...

    async def invalidate_entity(self, entity_id: int) -> None:
        """Drop every derived cache entry the host keeps for ``entity_id``."""
        ...
