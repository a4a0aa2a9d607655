"""Injectable wall-clock sources.

Everything that compares against "now" takes a ``Clock`` so that timer
fires and sweeps can be driven from tests (or replayed) without sleeping.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    """Current UTC time, whole seconds."""
    return datetime.now(timezone.utc).replace(microsecond=0)


class FrozenClock:
    """Manually driven clock.

    Usage::

        clock = FrozenClock(datetime(2025, 1, 1, tzinfo=timezone.utc))
        clock.advance(seconds=301)
        clock()  # 2025-01-01 00:05:01+00:00
    """

    def __init__(self, now: datetime | None = None) -> None:
        self._now = _ensure_utc(now or system_clock())

    def __call__(self) -> datetime:
        return self._now

    def set(self, now: datetime) -> None:
        self._now = _ensure_utc(now)

    def advance(
        self, delta: timedelta | None = None, *, seconds: float = 0
    ) -> datetime:
        self._now = self._now + (delta or timedelta()) + timedelta(seconds=seconds)
        return self._now


def _ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
