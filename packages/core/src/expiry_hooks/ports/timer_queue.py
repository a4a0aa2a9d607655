"""ITimerQueue — protocol for wall-clock one-shot and recurring callbacks."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime, timedelta


@runtime_checkable
class ITimerQueue(Protocol):
    """Port for the host's timer queue.

    A timer is identified by ``(time, hook, args)``. The queue only stores
    timers; when one is due the host routes ``hook`` with ``args`` back
    into the toolkit (see ``ExpiryHooks.handle_timer``).

    Usage::

        await queue.schedule_once(ends_at, "entity_ended", (42,))

        when = await queue.next_scheduled("entity_ended", (42,))
        if when is not None:
            await queue.unschedule(when, "entity_ended", (42,))
    """

    async def schedule_once(
        self, time: datetime, hook: str, args: tuple[Any, ...]
    ) -> None:
        """Schedule a single callback at ``time``."""
        ...

    async def schedule_recurring(
        self,
        time: datetime,
        interval: timedelta,
        hook: str,
        args: tuple[Any, ...] = (),
    ) -> None:
        """Schedule a callback at ``time`` and then every ``interval``."""
        ...

    async def next_scheduled(
        self, hook: str, args: tuple[Any, ...] = ()
    ) -> datetime | None:
        """Return the next run time of ``(hook, args)``, or ``None``."""
        ...

    async def unschedule(
        self, time: datetime, hook: str, args: tuple[Any, ...] = ()
    ) -> None:
        """Remove the timer at ``time`` for ``(hook, args)``. Missing is a no-op."""
        ...
