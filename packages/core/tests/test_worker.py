from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from expiry_hooks import FrozenClock, InMemoryTimerQueue, TimerQueueWorker

NOW = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class RecordingRouter:
    def __init__(self, fail_on: str | None = None) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.fail_on = fail_on

    async def __call__(self, hook: str, args: tuple[Any, ...]) -> bool:
        self.calls.append((hook, args))
        if hook == self.fail_on:
            raise RuntimeError(f"{hook} failed")
        return True


@pytest.mark.asyncio
async def test_run_once_routes_only_due_timers(
    queue: InMemoryTimerQueue, clock: FrozenClock
) -> None:
    router = RecordingRouter()
    worker = TimerQueueWorker(queue, router)
    await queue.schedule_once(NOW - timedelta(seconds=1), "ended", (1,))
    await queue.schedule_once(NOW + timedelta(minutes=1), "ended", (2,))

    assert await worker.run_once() == 1
    assert router.calls == [("ended", (1,))]
    assert queue.count("ended", (2,)) == 1


@pytest.mark.asyncio
async def test_recurring_timer_is_rearmed_and_missed_runs_collapse(
    queue: InMemoryTimerQueue, clock: FrozenClock
) -> None:
    router = RecordingRouter()
    worker = TimerQueueWorker(queue, router)
    await queue.schedule_recurring(NOW, timedelta(days=1), "sweep")

    await worker.run_once()
    clock.advance(timedelta(days=3, hours=1))
    await worker.run_once()

    assert router.calls == [("sweep", ()), ("sweep", ())]
    assert await queue.next_scheduled("sweep") == NOW + timedelta(days=4)


@pytest.mark.asyncio
async def test_router_failure_is_logged_and_does_not_stop_the_batch(
    queue: InMemoryTimerQueue, caplog: pytest.LogCaptureFixture
) -> None:
    router = RecordingRouter(fail_on="broken")
    worker = TimerQueueWorker(queue, router)
    await queue.schedule_once(NOW - timedelta(seconds=2), "broken", (1,))
    await queue.schedule_once(NOW - timedelta(seconds=1), "ended", (2,))

    assert await worker.run_once() == 1

    assert router.calls == [("broken", (1,)), ("ended", (2,))]
    assert "Failed to run timer broken" in caplog.text


@pytest.mark.asyncio
async def test_start_trigger_stop(queue: InMemoryTimerQueue) -> None:
    router = RecordingRouter()
    worker = TimerQueueWorker(queue, router, poll_interval=60.0)
    await worker.start()
    await worker.start()

    await queue.schedule_once(NOW, "ended", (9,))
    worker.trigger()
    for _ in range(50):
        if router.calls:
            break
        await asyncio.sleep(0.01)

    await worker.stop()
    assert router.calls == [("ended", (9,))]
