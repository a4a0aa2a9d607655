"""bootstrap_expiry_hooks — one-call wiring of scheduler, cleanup chain, tracker."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .adapters.memory.entity_store import InMemoryEntityStore
from .config import ExpiryHooksConfig
from .domain.events import EntityExpired, ExpirySource
from .events.dispatcher import EventDispatcher
from .primitives.clock import Clock, system_clock
from .primitives.timestamps import coerce_entity_id
from .scheduling.cache import CacheInvalidator
from .scheduling.scheduler import ExpirationScheduler
from .tracking.tracker import RedundancyTracker

if TYPE_CHECKING:
    from .domain.status import EntityStatus
    from .events.filters import FilterPipeline
    from .ports.cache import ICacheService
    from .ports.entity_store import IEntity, IEntityStore
    from .ports.event_dispatcher import EventHandler, FeatureFlag, IEventDispatcher
    from .ports.timer_queue import ITimerQueue
    from .ports.tracked_set import ITrackedSet

logger = logging.getLogger("expiry_hooks")


class ExpiryHooks:
    """Container returned by :func:`bootstrap_expiry_hooks`.

    Exposes the wired components and the host-facing triggers: status
    transitions, deletions, end-time edits and timer fires.

    Attributes:
        config: The :class:`ExpiryHooksConfig` in effect.
        dispatcher: Event dispatcher carrying :class:`EntityExpired`.
        scheduler: The :class:`ExpirationScheduler`.
        cache_invalidator: The cache step of the cleanup chain.
        tracker: The :class:`RedundancyTracker` (``tracker.is_active`` tells
            whether the feature flag enabled it).
    """

    def __init__(
        self,
        config: ExpiryHooksConfig,
        dispatcher: IEventDispatcher[Any],
        scheduler: ExpirationScheduler,
        cache_invalidator: CacheInvalidator,
        tracker: RedundancyTracker,
    ) -> None:
        self.config = config
        self.dispatcher = dispatcher
        self.scheduler = scheduler
        self.cache_invalidator = cache_invalidator
        self.tracker = tracker

    @property
    def cache_key_filters(self) -> FilterPipeline[list[str]]:
        """The ``extend_cache_keys`` pipeline."""
        return self.cache_invalidator.key_filters

    def subscribe_expired(self, handler: EventHandler[EntityExpired]) -> None:
        """Add an external :class:`EntityExpired` subscriber after the built-in ones."""
        self.dispatcher.register(EntityExpired, handler)

    # -- inbound triggers -------------------------------------------------

    async def on_status_transition(
        self,
        new_status: EntityStatus | str,
        old_status: EntityStatus | str,
        entity: IEntity,
    ) -> None:
        await self.scheduler.handle_status_transition(new_status, old_status, entity)

    async def on_before_delete(self, entity_id: int) -> None:
        await self.scheduler.handle_before_delete(entity_id)

    async def on_end_timestamp_changed(self, entity_id: int) -> None:
        await self.scheduler.handle_end_timestamp_changed(entity_id)

    async def expire_now(self, entity_id: int) -> bool:
        """Manually trigger validation and expiration of ``entity_id``."""
        return await self.scheduler.expire(entity_id, source=ExpirySource.MANUAL)

    async def handle_timer(self, hook: str, args: tuple[Any, ...] = ()) -> bool:
        """Route a due timer from the host's queue.

        Returns ``True`` if the hook belongs to this toolkit and ran to a
        positive outcome (an expiration was emitted, or a sweep ran).
        """
        if hook == self.config.timer_hook:
            entity_id = coerce_entity_id(args[0]) if args else None
            if entity_id is None:
                logger.debug("Ignoring %s timer with invalid args %r", hook, args)
                return False
            return await self.scheduler.handle_timer_fired(entity_id)

        if hook == self.config.sweep_hook:
            if not self.tracker.is_active:
                logger.debug("Ignoring %s timer: tracker disabled", hook)
                return False
            await self.tracker.sweep()
            return True

        logger.debug("Ignoring unknown timer hook %r", hook)
        return False


async def bootstrap_expiry_hooks(
    *,
    entity_store: IEntityStore,
    timer_queue: ITimerQueue,
    cache: ICacheService,
    tracked_set: ITrackedSet,
    config: ExpiryHooksConfig | None = None,
    tracker_enabled: FeatureFlag | None = None,
    clock: Clock | None = None,
    dispatcher: IEventDispatcher[Any] | None = None,
    cache_key_filters: FilterPipeline[list[str]] | None = None,
) -> ExpiryHooks:
    """Wire up the complete expiration toolkit in one call.

    1. Creates (or reuses) the event dispatcher. A bundled
       :class:`InMemoryEntityStore` is bound to ``config.tz`` so that it
       reads naive end timestamps in the same zone as the scheduler
       (:class:`ConfigurationError` if it was built with another zone).
       Host stores own their time-zone rules and must apply the same zone.
    2. Creates the :class:`ExpirationScheduler` and registers timer
       cancellation as the first :class:`EntityExpired` subscriber.
    3. Registers the :class:`CacheInvalidator` as the second subscriber.
    4. Creates the :class:`RedundancyTracker`; if ``tracker_enabled`` (or
       ``config.tracker_enabled``) is true it registers tracked-set
       maintenance and makes sure the recurring sweep exists.

    Parameters
    ----------
    entity_store, timer_queue, cache, tracked_set:
        Collaborator implementations (see :mod:`expiry_hooks.ports`).
    config:
        Optional :class:`ExpiryHooksConfig`; defaults are used otherwise.
    tracker_enabled:
        Optional feature flag evaluated once, overriding
        ``config.tracker_enabled``.
    clock:
        Source of "now" for scheduling decisions and sweep bookkeeping.

    Example
    -------
    ::

        hooks = await bootstrap_expiry_hooks(
            entity_store=store,
            timer_queue=queue,
            cache=cache,
            tracked_set=tracked,
            config=ExpiryHooksConfig(tracker_enabled=True),
        )
        hooks.cache_key_filters.register(
            lambda keys, entity_id: [*keys, f"custom_{entity_id}"]
        )
        await hooks.on_status_transition("published", "draft", entity)
    """
    config = config or ExpiryHooksConfig()
    clock = clock or system_clock
    dispatcher = dispatcher if dispatcher is not None else EventDispatcher()

    if isinstance(entity_store, InMemoryEntityStore):
        entity_store.bind_timezone(config.tz)

    scheduler = ExpirationScheduler(
        config, entity_store, timer_queue, dispatcher, clock=clock
    )
    scheduler.setup()

    cache_invalidator = CacheInvalidator(config, cache, cache_key_filters)
    dispatcher.register(EntityExpired, cache_invalidator)

    tracker = RedundancyTracker(
        config,
        entity_store,
        timer_queue,
        tracked_set,
        dispatcher,
        scheduler,
        enabled=tracker_enabled,
        clock=clock,
    )
    await tracker.setup()

    logger.info(
        "expiry-hooks ready (entity_kind=%s, tracker=%s)",
        config.entity_kind,
        "on" if tracker.is_active else "off",
    )
    return ExpiryHooks(config, dispatcher, scheduler, cache_invalidator, tracker)
