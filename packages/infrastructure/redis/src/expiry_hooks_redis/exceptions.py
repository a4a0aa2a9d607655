"""Redis-specific exceptions for expiry-hooks-redis."""

from __future__ import annotations

from expiry_hooks.primitives.exceptions import (
    CacheError,
    InfrastructureError,
    TrackedSetError,
)


class RedisError(InfrastructureError):
    """Base class for all Redis-related infrastructure errors."""


class RedisTrackedSetError(RedisError, TrackedSetError):
    """Raised when the tracked set cannot be read or written.

    Catchable either as a Redis failure or as a tracked-set failure.
    """


class RedisCacheError(RedisError, CacheError):
    """Raised when a cache deletion against Redis fails."""
