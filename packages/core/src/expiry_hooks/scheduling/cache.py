"""CacheInvalidator — the cache-clearing step of the expiration cleanup chain."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from ..events.filters import FilterPipeline

if TYPE_CHECKING:
    from ..config import ExpiryHooksConfig
    from ..domain.events import EntityExpired
    from ..ports.cache import ICacheService

logger = logging.getLogger("expiry_hooks.scheduling")

EXTEND_CACHE_KEYS = "extend_cache_keys"


class CacheInvalidator:
    """Deletes the cache entries that mention an expired entity.

    The key list starts as::

        ["<prefix>_<id>", "<prefix>_upcoming", "<prefix>_past"]

    and is passed through the ``extend_cache_keys`` filter pipeline, where
    extensions may append (the convention) or rewrite it. A single string
    counts as one key and ``None`` as no keys; empty and non-string entries
    are skipped. The host's per-entity object cache is dropped regardless.
    """

    def __init__(
        self,
        config: ExpiryHooksConfig,
        cache: ICacheService,
        key_filters: FilterPipeline[list[str]] | None = None,
    ) -> None:
        self._config = config
        self._cache = cache
        if key_filters is None:
            key_filters = FilterPipeline(EXTEND_CACHE_KEYS)
        self.key_filters: FilterPipeline[list[str]] = key_filters

    def default_cache_keys(self, entity_id: int) -> list[str]:
        prefix = self._config.cache_prefix
        return [f"{prefix}_{entity_id}", f"{prefix}_upcoming", f"{prefix}_past"]

    def cache_keys(self, entity_id: int) -> list[object]:
        keys = self.key_filters.apply(self.default_cache_keys(entity_id), entity_id)
        if keys is None:
            logger.warning(
                "%s filters returned None for entity %s; no cache keys to delete",
                self.key_filters.name,
                entity_id,
            )
            return []
        if isinstance(keys, (str, bytes)):
            return [keys]
        if isinstance(keys, Iterable):
            return list(keys)
        return [keys]

    async def handle(self, event: EntityExpired) -> list[str]:
        return await self.invalidate(event.entity_id)

    async def invalidate(self, entity_id: int) -> list[str]:
        """Delete every cache key for ``entity_id``; returns the keys deleted."""
        namespace = self._config.cache_namespace
        deleted: list[str] = []
        for key in self.cache_keys(entity_id):
            if not isinstance(key, str) or not key:
                logger.debug(
                    "Skipping invalid cache key %r for entity %s", key, entity_id
                )
                continue
            await self._cache.delete(key, namespace)
            deleted.append(key)

        await self._cache.invalidate_entity(entity_id)
        logger.info(
            "Invalidated %d cache key(s) for entity %s in namespace %r",
            len(deleted),
            entity_id,
            namespace,
        )
        return deleted
