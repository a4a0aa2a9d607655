"""Redis implementation of the cache port."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from redis.exceptions import RedisError as RedisClientError

from expiry_hooks.ports.cache import ICacheService

from .exceptions import RedisCacheError

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = logging.getLogger("expiry_hooks.redis")


class RedisCacheService(ICacheService):
    """
    Redis implementation of ICacheService.

    Keys are laid out as ``{prefix}:{namespace}:{key}``. Per-entity derived
    entries live under ``{prefix}:{namespace}:entity:{id}:{field}`` and are
    dropped together by :meth:`invalidate_entity`.

    Failures are raised as :class:`RedisCacheError`, never swallowed.
    """

    def __init__(
        self, redis_client: Redis[bytes], key_prefix: str = "expiry_hooks"
    ) -> None:
        self._redis = redis_client
        self._key_prefix = key_prefix

    def _get_key(self, key: str, namespace: str) -> str:
        return f"{self._key_prefix}:{namespace}:{key}"

    async def delete(self, key: str, namespace: str) -> None:
        full_key = self._get_key(key, namespace)
        try:
            await self._redis.delete(full_key)
        except RedisClientError as e:
            logger.error("Redis delete failed for key %s: %s", full_key, e)
            raise RedisCacheError(f"Failed to delete {full_key}: {e}") from e

    async def invalidate_entity(self, entity_id: int) -> None:
        """Drop every ``entity:{id}`` entry in every namespace (SCAN)."""
        pattern = f"{self._key_prefix}:*:entity:{entity_id}:*"
        removed = 0
        try:
            cursor: int = 0
            while True:
                cursor, keys = await self._redis.scan(cursor, match=pattern)
                if keys:
                    await self._redis.delete(*keys)
                    removed += len(keys)
                if cursor == 0:
                    break
        except RedisClientError as e:
            logger.error("Redis invalidation failed for entity %s: %s", entity_id, e)
            raise RedisCacheError(
                f"Failed to invalidate cache of entity {entity_id}: {e}"
            ) from e
        logger.debug("Dropped %d cached entries of entity %s", removed, entity_id)
