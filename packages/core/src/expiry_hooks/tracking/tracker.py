"""RedundancyTracker — durable set of upcoming entities and the daily sweep.

Optional safety net for hosts whose timer queue can miss fires (downtime,
queue eviction, clock skew):

1. every entity that becomes upcoming is added to a durable tracked set;
2. any :class:`EntityExpired`, from whichever path, removes it again;
3. a recurring sweep re-validates every tracked id against the entity
   store and re-emits :class:`EntityExpired` for those that have ended.

Disabled by default. When disabled nothing is registered and the tracked
set is never touched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any

from ..correlation import correlation_scope
from ..domain.events import (
    DomainEvent,
    EntityBecameUpcoming,
    EntityExpired,
    EntityWithdrawn,
    ExpirySource,
)
from ..primitives.clock import Clock, system_clock
from ..primitives.timestamps import coerce_entity_id

if TYPE_CHECKING:
    from ..config import ExpiryHooksConfig
    from ..ports.entity_store import IEntityStore
    from ..ports.event_dispatcher import FeatureFlag, IEventDispatcher
    from ..ports.timer_queue import ITimerQueue
    from ..ports.tracked_set import ITrackedSet
    from ..scheduling.scheduler import ExpirationScheduler

logger = logging.getLogger("expiry_hooks.tracking")


@dataclass
class SweepResult:
    """Outcome of one reconciliation pass."""

    started_at: datetime
    completed_at: datetime | None = None
    checked: int = 0
    invalid: int = 0
    expired: list[int] = field(default_factory=list)
    pruned: list[int] = field(default_factory=list)
    correlation_id: str | None = None


class RedundancyTracker:
    """Keeps the tracked set and reconciles it against the entity store."""

    def __init__(
        self,
        config: ExpiryHooksConfig,
        entity_store: IEntityStore,
        timer_queue: ITimerQueue,
        tracked_set: ITrackedSet,
        dispatcher: IEventDispatcher[Any],
        scheduler: ExpirationScheduler,
        *,
        enabled: FeatureFlag | None = None,
        clock: Clock = system_clock,
    ) -> None:
        self._config = config
        self._store = entity_store
        self._queue = timer_queue
        self._tracked = tracked_set
        self._dispatcher = dispatcher
        self._scheduler = scheduler
        self._enabled = enabled or (lambda: config.tracker_enabled)
        self._clock = clock
        self._active = False

    @property
    def is_active(self) -> bool:
        return self._active

    # -- lifecycle --------------------------------------------------------

    async def setup(self) -> bool:
        """Register the tracker if the feature flag allows it.

        The flag is read here and only here. Returns whether the tracker is
        active.
        """
        if self._active:
            return True
        if not self._enabled():
            logger.debug("Redundancy tracker disabled; no hooks registered")
            return False

        self._dispatcher.register(EntityBecameUpcoming, self.add)
        self._dispatcher.register(EntityWithdrawn, self.remove)
        self._dispatcher.register(EntityExpired, self.remove)
        await self.ensure_sweep_scheduled()
        self._active = True
        logger.info("Redundancy tracker enabled")
        return True

    async def ensure_sweep_scheduled(self) -> datetime:
        """Create the recurring sweep unless the timer queue already has one."""
        hook = self._config.sweep_hook
        when = await self._queue.next_scheduled(hook)
        if when is not None:
            return when
        now = self._clock()
        await self._queue.schedule_recurring(now, self._config.sweep_interval, hook)
        logger.info(
            "Scheduled recurring sweep %r every %s", hook, self._config.sweep_interval
        )
        return now

    async def teardown(self) -> None:
        """Detach from the dispatcher and drop the recurring sweep."""
        self._dispatcher.unregister(EntityBecameUpcoming, self.add)
        self._dispatcher.unregister(EntityWithdrawn, self.remove)
        self._dispatcher.unregister(EntityExpired, self.remove)

        hook = self._config.sweep_hook
        when = await self._queue.next_scheduled(hook)
        while when is not None:
            await self._queue.unschedule(when, hook)
            following = await self._queue.next_scheduled(hook)
            if following == when:
                break
            when = following
        self._active = False
        logger.info("Redundancy tracker disabled")

    # -- tracked set ------------------------------------------------------

    async def add(self, target: int | DomainEvent) -> None:
        if not self._active:
            return
        entity_id = _entity_id(target)
        await self._tracked.add(entity_id)
        logger.debug("Tracking entity %s", entity_id)

    async def remove(self, target: int | DomainEvent) -> None:
        if not self._active:
            return
        entity_id = _entity_id(target)
        await self._tracked.discard(entity_id)
        logger.debug("Stopped tracking entity %s", entity_id)

    async def tracked_ids(self) -> set[int]:
        """Tracked ids after coercion; invalid entries are left out."""
        ids: set[int] = set()
        for raw in await self._tracked.members():
            entity_id = coerce_entity_id(raw)
            if entity_id is not None:
                ids.add(entity_id)
        return ids

    # -- reconciliation ---------------------------------------------------

    async def sweep(self) -> SweepResult:
        """Re-validate every tracked id and catch expirations the timer missed.

        Ids whose entity is gone or of another kind are pruned. Ended
        entities go through :meth:`ExpirationScheduler.expire`, which emits
        :class:`EntityExpired` and so removes them through the same
        subscribers as a normal fire. Everything else is left alone.
        """
        result = SweepResult(started_at=self._clock())
        if not self._active:
            result.completed_at = self._clock()
            return result

        with correlation_scope() as correlation_id:
            result.correlation_id = correlation_id
            raw_members = await self._tracked.members()
            ids: set[int] = set()
            for raw in raw_members:
                entity_id = coerce_entity_id(raw)
                if entity_id is None:
                    result.invalid += 1
                    continue
                ids.add(entity_id)

            for entity_id in sorted(ids):
                result.checked += 1
                entity = await self._store.get(entity_id)
                if entity is None or entity.kind != self._config.entity_kind:
                    await self._tracked.discard(entity_id)
                    result.pruned.append(entity_id)
                    continue

                if entity.has_ended():
                    emitted = await self._scheduler.expire(
                        entity_id, source=ExpirySource.SWEEP
                    )
                    if emitted:
                        result.expired.append(entity_id)

        result.completed_at = self._clock()
        logger.info(
            "Sweep checked %d tracked entities: %d expired, %d pruned, %d invalid",
            result.checked,
            len(result.expired),
            len(result.pruned),
            result.invalid,
        )
        return result


def _entity_id(target: int | DomainEvent) -> int:
    if isinstance(target, DomainEvent):
        return target.entity_id
    return target
