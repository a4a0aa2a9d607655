"""expiry-hooks — deferred "entity has ended" events with a reconciliation safety net.

Pure-python core. pydantic for events and configuration; storage, timer
queue and cache are ports implemented by the host (in-memory adapters
included for tests and single-process use).
"""

from __future__ import annotations

# ── Adapters ────────────────────────────────────────────────────
from .adapters.memory import (
    InMemoryCacheService,
    InMemoryEntityStore,
    InMemoryTimerQueue,
    InMemoryTrackedSet,
    ScheduledTimer,
    StoredEntity,
)
from .bootstrap import ExpiryHooks, bootstrap_expiry_hooks
from .config import ExpiryHooksConfig
from .correlation import (
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)

# ── Domain ───────────────────────────────────────────────────────
from .domain import (
    DomainEvent,
    EntityBecameUpcoming,
    EntityExpired,
    EntityStatus,
    EntityWithdrawn,
    ExpirySource,
)
from .events import EventDispatcher, FilterPipeline

# ── Ports ────────────────────────────────────────────────────────
from .ports import (
    FeatureFlag,
    IBackgroundWorker,
    ICacheService,
    IEntity,
    IEntityStore,
    IEventDispatcher,
    ITimerQueue,
    ITrackedSet,
)
from .primitives import (
    CacheError,
    Clock,
    ConfigurationError,
    EntityStoreError,
    ExpiryHooksError,
    FrozenClock,
    HandlerError,
    InfrastructureError,
    TimerQueueError,
    TrackedSetError,
    coerce_entity_id,
    parse_end_timestamp,
    system_clock,
)

# ── Scheduling / tracking ────────────────────────────────────────
from .scheduling import (
    EXTEND_CACHE_KEYS,
    CacheInvalidator,
    ExpirationScheduler,
    TimerQueueWorker,
)
from .tracking import RedundancyTracker, SweepResult

__all__ = [
    "EXTEND_CACHE_KEYS",
    "CacheError",
    "CacheInvalidator",
    "Clock",
    "ConfigurationError",
    "DomainEvent",
    "EntityBecameUpcoming",
    "EntityExpired",
    "EntityStatus",
    "EntityStoreError",
    "EntityWithdrawn",
    "EventDispatcher",
    "ExpirationScheduler",
    "ExpiryHooks",
    "ExpiryHooksConfig",
    "ExpiryHooksError",
    "ExpirySource",
    "FeatureFlag",
    "FilterPipeline",
    "FrozenClock",
    "HandlerError",
    "IBackgroundWorker",
    "ICacheService",
    "IEntity",
    "IEntityStore",
    "IEventDispatcher",
    "ITimerQueue",
    "ITrackedSet",
    "InMemoryCacheService",
    "InMemoryEntityStore",
    "InMemoryTimerQueue",
    "InMemoryTrackedSet",
    "InfrastructureError",
    "RedundancyTracker",
    "ScheduledTimer",
    "StoredEntity",
    "SweepResult",
    "TimerQueueError",
    "TimerQueueWorker",
    "TrackedSetError",
    "bootstrap_expiry_hooks",
    "coerce_entity_id",
    "correlation_scope",
    "generate_correlation_id",
    "get_correlation_id",
    "parse_end_timestamp",
    "set_correlation_id",
    "system_clock",
]
