"""Redis implementation of the durable tracked set."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from redis.exceptions import RedisError as RedisClientError

from expiry_hooks.ports.tracked_set import ITrackedSet

from .exceptions import RedisTrackedSetError

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = logging.getLogger("expiry_hooks.redis")


class RedisTrackedSet(ITrackedSet):
    """Tracked set stored as a native Redis SET.

    ``SADD``/``SREM`` are atomic and idempotent. Members come back exactly
    as Redis stores them (``bytes`` for a default client); the tracker
    coerces them.
    """

    def __init__(
        self, redis_client: Redis[bytes], key: str = "expiry_hooks:tracked"
    ) -> None:
        """
        Initialize the tracked set.

        Args:
            redis_client: Async Redis client instance.
            key: Redis key of the SET.
        """
        self._redis = redis_client
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    async def members(self) -> set[object]:
        try:
            return set(await self._redis.smembers(self._key))
        except RedisClientError as exc:
            logger.error("Failed to read tracked set %s: %s", self._key, exc)
            raise RedisTrackedSetError(f"Failed to read {self._key}: {exc}") from exc

    async def add(self, entity_id: int) -> None:
        try:
            await self._redis.sadd(self._key, str(entity_id))
        except RedisClientError as exc:
            logger.error("Failed to track entity %s: %s", entity_id, exc)
            raise RedisTrackedSetError(
                f"Failed to add {entity_id} to {self._key}: {exc}"
            ) from exc
        logger.debug("SADD %s %s", self._key, entity_id)

    async def discard(self, entity_id: int) -> None:
        try:
            await self._redis.srem(self._key, str(entity_id))
        except RedisClientError as exc:
            logger.error("Failed to untrack entity %s: %s", entity_id, exc)
            raise RedisTrackedSetError(
                f"Failed to remove {entity_id} from {self._key}: {exc}"
            ) from exc
        logger.debug("SREM %s %s", self._key, entity_id)
