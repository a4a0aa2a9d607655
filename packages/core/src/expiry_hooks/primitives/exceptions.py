"""Exceptions for expiry-hooks.

Precondition failures (missing entity, malformed end timestamp, stale timer
fire) are never exceptions here: they are ordinary no-op paths. Everything
below is reserved for configuration mistakes and for collaborators that
cannot be reached.
"""

from __future__ import annotations


class ExpiryHooksError(Exception):
    """Root exception for the expiry-hooks toolkit."""


class ConfigurationError(ExpiryHooksError):
    """Raised when the toolkit is wired or configured incorrectly."""


class HandlerError(ExpiryHooksError):
    """Raised when an event handler or filter cannot be registered or invoked."""


class InfrastructureError(ExpiryHooksError):
    """Base class for failures of an external collaborator.

    Adapters raise subclasses of this when the backing system is
    unavailable. The core never catches them; they propagate to the host.
    """


class EntityStoreError(InfrastructureError):
    """Raised when the entity store cannot be read."""


class TimerQueueError(InfrastructureError):
    """Raised when the timer queue rejects or loses an operation."""


class CacheError(InfrastructureError):
    """Raised when a cache delete or invalidation fails."""


class TrackedSetError(InfrastructureError):
    """Raised when the durable tracked set cannot be read or written."""
