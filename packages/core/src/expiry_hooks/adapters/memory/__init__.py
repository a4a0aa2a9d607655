from .cache import InMemoryCacheService
from .entity_store import InMemoryEntityStore, StoredEntity
from .timer_queue import InMemoryTimerQueue, ScheduledTimer
from .tracked_set import InMemoryTrackedSet

__all__ = [
    "InMemoryCacheService",
    "InMemoryEntityStore",
    "InMemoryTimerQueue",
    "InMemoryTrackedSet",
    "ScheduledTimer",
    "StoredEntity",
]
