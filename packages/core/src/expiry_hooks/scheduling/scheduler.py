"""ExpirationScheduler — one timer per published entity, one expired event per end.

The scheduler mirrors how a CMS publishes scheduled posts, keyed on an
entity's *end* time instead of its publish time:

* entering ``published`` reads the end timestamp and arms a one-shot timer
  (after cancelling any timer left over for the same id);
* leaving ``published``, or deleting the entity, cancels it;
* when the timer fires the entity is re-fetched and re-validated with the
  store's own ``has_ended()`` before :class:`EntityExpired` is dispatched.

Every failed precondition is a quiet no-op. Only collaborator failures
escape, and they escape unchanged.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..correlation import correlation_scope
from ..domain.events import (
    EntityBecameUpcoming,
    EntityExpired,
    EntityWithdrawn,
    ExpirySource,
)
from ..domain.status import EntityStatus
from ..primitives.clock import Clock, system_clock
from ..primitives.timestamps import coerce_entity_id, parse_end_timestamp

if TYPE_CHECKING:
    from datetime import datetime

    from ..config import ExpiryHooksConfig
    from ..ports.entity_store import IEntity, IEntityStore
    from ..ports.event_dispatcher import IEventDispatcher
    from ..ports.timer_queue import ITimerQueue

logger = logging.getLogger("expiry_hooks.scheduling")


class ExpirationScheduler:
    """Schedules, reschedules and cancels the per-entity expiration timer.

    Holds no state of its own beyond its collaborators; the timer queue is
    the only record of what is scheduled.
    """

    def __init__(
        self,
        config: ExpiryHooksConfig,
        entity_store: IEntityStore,
        timer_queue: ITimerQueue,
        dispatcher: IEventDispatcher[Any],
        clock: Clock = system_clock,
    ) -> None:
        self._config = config
        self._store = entity_store
        self._queue = timer_queue
        self._dispatcher = dispatcher
        self._clock = clock

    def setup(self) -> None:
        """Make timer cancellation the first :class:`EntityExpired` subscriber."""
        self._dispatcher.register(EntityExpired, self.clear_scheduled_timer)

    # -- inbound triggers -------------------------------------------------

    async def handle_status_transition(
        self,
        new_status: EntityStatus | str,
        old_status: EntityStatus | str,
        entity: IEntity,
    ) -> None:
        """React to a lifecycle status change of ``entity``.

        Re-saving an already published entity is not a transition and does
        nothing; edits to its end time go through
        :meth:`handle_end_timestamp_changed`.
        """
        if not self._is_managed(entity):
            return

        new = EntityStatus.coerce(new_status)
        old = EntityStatus.coerce(old_status)

        if new.is_schedulable and not old.is_schedulable:
            ends_at = await self._schedule_entity(entity)
            await self._announce_upcoming(entity.id, ends_at)

        if old.is_schedulable and not new.is_schedulable:
            await self.clear_scheduled_timer(entity.id)
            await self._dispatch(EntityWithdrawn(entity_id=entity.id, reason=new.value))

    async def handle_before_delete(self, entity_id: int) -> None:
        """Cancel the timer of an entity that is about to be removed."""
        if coerce_entity_id(entity_id) is None:
            return
        entity = await self._store.get(entity_id)
        if entity is not None and not self._is_managed(entity):
            return
        await self.clear_scheduled_timer(entity_id)
        await self._dispatch(EntityWithdrawn(entity_id=entity_id, reason="deleted"))

    async def handle_end_timestamp_changed(self, entity_id: int) -> None:
        """Re-run the schedule step after the end time of an entity was edited.

        A published entity gets its timer moved to the new instant. If the
        new value is malformed the timer is dropped; if it lies in the past
        the entity is validated and expired right away.
        """
        entity = await self._store.get(entity_id)
        if entity is None or not self._is_managed(entity):
            return
        if not EntityStatus.coerce(entity.status).is_schedulable:
            return

        ends_at = await self._schedule_entity(entity)
        if ends_at is not None:
            await self._announce_upcoming(entity_id, ends_at)
            return

        await self.clear_scheduled_timer(entity_id)
        await self.expire(entity_id, source=ExpirySource.EDIT)

    async def handle_timer_fired(self, entity_id: int) -> bool:
        """Timer-queue callback. Returns whether :class:`EntityExpired` was emitted."""
        return await self.expire(entity_id, source=ExpirySource.TIMER)

    # -- operations -------------------------------------------------------

    async def schedule(self, entity_id: int) -> datetime | None:
        """Arm the expiration timer for ``entity_id``.

        Returns the scheduled instant, or ``None`` when the entity is
        missing, of another kind, or has no valid future end timestamp.
        """
        entity = await self._store.get(entity_id)
        if entity is None or not self._is_managed(entity):
            return None
        return await self._schedule_entity(entity)

    async def clear_scheduled_timer(self, target: int | EntityExpired) -> int:
        """Cancel every pending timer for an entity; returns how many were removed.

        Also subscribed to :class:`EntityExpired`, so no timer survives an
        expiration regardless of which path emitted it.
        """
        entity_id = target.entity_id if isinstance(target, EntityExpired) else target
        hook = self._config.timer_hook
        args = (entity_id,)

        removed = 0
        when = await self._queue.next_scheduled(hook, args)
        while when is not None:
            await self._queue.unschedule(when, hook, args)
            removed += 1
            following = await self._queue.next_scheduled(hook, args)
            if following == when:
                logger.warning(
                    "Timer queue did not drop %s%s at %s", hook, args, when.isoformat()
                )
                break
            when = following

        if removed:
            logger.info(
                "Cleared %d expiration timer(s) for entity %s", removed, entity_id
            )
        return removed

    async def expire(
        self, entity_id: int, *, source: ExpirySource = ExpirySource.MANUAL
    ) -> bool:
        """Validate that ``entity_id`` has ended and dispatch :class:`EntityExpired`.

        Shared by the timer callback and the reconciliation sweep. A missing
        entity, another kind, or ``has_ended()`` being false is a stale
        trigger: nothing is emitted and nothing is rescheduled.
        """
        entity = await self._store.get(entity_id)
        if entity is None or not self._is_managed(entity):
            logger.debug(
                "Ignoring %s expiration for entity %s: not found or not managed",
                source.value,
                entity_id,
            )
            return False

        if not entity.has_ended():
            logger.debug(
                "Ignoring stale %s expiration for entity %s: has not ended",
                source.value,
                entity_id,
            )
            return False

        await self._dispatch(
            EntityExpired(entity_id=entity_id, entity=entity, source=source)
        )
        logger.info("Entity %s expired (source=%s)", entity_id, source.value)
        return True

    # -- internals --------------------------------------------------------

    async def _schedule_entity(self, entity: IEntity) -> datetime | None:
        ends_at = parse_end_timestamp(
            entity.end_timestamp_raw, default_tz=self._config.tz
        )
        if ends_at is None:
            logger.debug(
                "Not scheduling entity %s: end timestamp %r is missing or malformed",
                entity.id,
                entity.end_timestamp_raw,
            )
            return None

        if ends_at <= self._clock():
            logger.debug(
                "Not scheduling entity %s: end timestamp %s is not in the future",
                entity.id,
                ends_at.isoformat(),
            )
            return None

        await self.clear_scheduled_timer(entity.id)
        await self._queue.schedule_once(ends_at, self._config.timer_hook, (entity.id,))
        logger.info(
            "Scheduled expiration of entity %s at %s", entity.id, ends_at.isoformat()
        )
        return ends_at

    async def _announce_upcoming(
        self, entity_id: int, ends_at: datetime | None
    ) -> None:
        if ends_at is None and not self._config.track_unschedulable:
            return
        await self._dispatch(EntityBecameUpcoming(entity_id=entity_id, ends_at=ends_at))

    async def _dispatch(self, event: Any) -> None:
        with correlation_scope() as correlation_id:
            if event.correlation_id is None:
                event = event.model_copy(update={"correlation_id": correlation_id})
            await self._dispatcher.dispatch(event)

    def _is_managed(self, entity: IEntity) -> bool:
        if coerce_entity_id(entity.id) is None:
            return False
        return entity.kind == self._config.entity_kind
