"""Expiration scheduling — per-entity timers and the cleanup chain.

* :class:`ExpirationScheduler` answers *when*: it keeps exactly one timer
  per published entity and turns a validated fire into
  :class:`~expiry_hooks.domain.events.EntityExpired`.

* :class:`CacheInvalidator` is the cache step of the cleanup chain that
  subscribes to that event.

* :class:`TimerQueueWorker` drives the in-memory timer queue for hosts
  that do not bring their own.
"""

from .cache import EXTEND_CACHE_KEYS, CacheInvalidator
from .scheduler import ExpirationScheduler
from .worker import TimerQueueWorker

__all__ = [
    "EXTEND_CACHE_KEYS",
    "CacheInvalidator",
    "ExpirationScheduler",
    "TimerQueueWorker",
]
