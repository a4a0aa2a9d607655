from .background_worker import IBackgroundWorker
from .cache import ICacheService
from .entity_store import IEntity, IEntityStore
from .event_dispatcher import EventHandler, FeatureFlag, IEventDispatcher
from .timer_queue import ITimerQueue
from .tracked_set import ITrackedSet

__all__ = [
    "EventHandler",
    "FeatureFlag",
    "IBackgroundWorker",
    "ICacheService",
    "IEntity",
    "IEntityStore",
    "IEventDispatcher",
    "ITimerQueue",
    "ITrackedSet",
]
