"""Redis adapters for expiry-hooks."""

from __future__ import annotations

from .cache import RedisCacheService
from .exceptions import RedisCacheError, RedisError, RedisTrackedSetError
from .tracked_set import RedisTrackedSet

__all__ = [
    "RedisCacheError",
    "RedisCacheService",
    "RedisError",
    "RedisTrackedSet",
    "RedisTrackedSetError",
]
