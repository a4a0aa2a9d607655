"""In-memory implementation of the timer queue for testing and single-process hosts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from expiry_hooks.ports.timer_queue import ITimerQueue
from expiry_hooks.primitives.clock import Clock, system_clock


@dataclass(frozen=True)
class ScheduledTimer:
    time: datetime
    hook: str
    args: tuple[Any, ...] = ()
    interval: timedelta | None = None

    @property
    def is_recurring(self) -> bool:
        return self.interval is not None


class InMemoryTimerQueue(ITimerQueue):
    """
    List-backed :class:`ITimerQueue`.

    Duplicates are stored as-is (the queue does not deduplicate), which
    lets tests observe whether callers keep at most one timer per
    ``(hook, args)``. :meth:`pop_due` hands due timers to the host and
    re-arms recurring ones.
    """

    def __init__(self, clock: Clock = system_clock) -> None:
        self._clock = clock
        self._timers: list[ScheduledTimer] = []

    async def schedule_once(
        self, time: datetime, hook: str, args: tuple[Any, ...]
    ) -> None:
        self._timers.append(ScheduledTimer(_utc(time), hook, tuple(args)))

    async def schedule_recurring(
        self,
        time: datetime,
        interval: timedelta,
        hook: str,
        args: tuple[Any, ...] = (),
    ) -> None:
        if interval <= timedelta(0):
            raise ValueError("interval must be positive")
        self._timers.append(ScheduledTimer(_utc(time), hook, tuple(args), interval))

    async def next_scheduled(
        self, hook: str, args: tuple[Any, ...] = ()
    ) -> datetime | None:
        times = [t.time for t in self._matching(hook, args)]
        return min(times) if times else None

    async def unschedule(
        self, time: datetime, hook: str, args: tuple[Any, ...] = ()
    ) -> None:
        target = _utc(time)
        for timer in self._matching(hook, args):
            if timer.time == target:
                self._timers.remove(timer)
                return

    def pop_due(self, now: datetime | None = None) -> list[ScheduledTimer]:
        """Remove and return every timer due at ``now``, earliest first.

        Recurring timers are re-armed at their next occurrence after ``now``
        (missed occurrences collapse into one run).
        """
        now = _utc(now or self._clock())
        due = sorted((t for t in self._timers if t.time <= now), key=lambda t: t.time)
        for timer in due:
            self._timers.remove(timer)
            if timer.interval is not None:
                next_time = timer.time + timer.interval
                while next_time <= now:
                    next_time += timer.interval
                self._timers.append(
                    ScheduledTimer(next_time, timer.hook, timer.args, timer.interval)
                )
        return due

    def _matching(self, hook: str, args: tuple[Any, ...]) -> list[ScheduledTimer]:
        key = tuple(args)
        return [t for t in self._timers if t.hook == hook and t.args == key]

    # --- Test helpers ---

    def timers(self, hook: str | None = None) -> list[ScheduledTimer]:
        return [t for t in self._timers if hook is None or t.hook == hook]

    def count(self, hook: str, args: tuple[Any, ...] = ()) -> int:
        return len(self._matching(hook, args))

    def clear(self) -> None:
        self._timers.clear()

    @property
    def scheduled_count(self) -> int:
        return len(self._timers)


def _utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
