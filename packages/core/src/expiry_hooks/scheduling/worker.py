"""TimerQueueWorker — drives an in-process timer queue and routes due timers."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING, Any

from ..ports.background_worker import IBackgroundWorker

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ..adapters.memory.timer_queue import InMemoryTimerQueue

    TimerRouter = Callable[[str, tuple[Any, ...]], Awaitable[Any]]

logger = logging.getLogger("expiry_hooks.workers")


class TimerQueueWorker(IBackgroundWorker):
    """Polls an :class:`InMemoryTimerQueue` and hands due timers to a router.

    The router is normally ``ExpiryHooks.handle_timer``. Uses trigger +
    polling fallback: call :meth:`trigger` to wake immediately (e.g. after
    scheduling a near timer); otherwise runs every ``poll_interval``
    seconds.

    A due timer is removed from the queue before it is routed, so a router
    failure drops that fire; the worker logs it and moves on. The
    reconciliation sweep picks such entities up later.
    """

    def __init__(
        self,
        timer_queue: InMemoryTimerQueue,
        router: TimerRouter,
        poll_interval: float = 1.0,
    ) -> None:
        self._queue = timer_queue
        self._router = router
        self._poll_interval = poll_interval
        self._running = False
        self._task: asyncio.Task[None] | None = None
        self._trigger = asyncio.Event()

    def trigger(self) -> None:
        """Wake the worker immediately."""
        self._trigger.set()

    async def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._task = asyncio.create_task(self._run_loop())
        logger.info(
            "TimerQueueWorker started (poll_interval=%.1fs)", self._poll_interval
        )

    async def stop(self) -> None:
        self._running = False
        self._trigger.set()
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError, asyncio.TimeoutError):
                await asyncio.wait_for(self._task, timeout=5.0)
        logger.info("TimerQueueWorker stopped")

    async def run_once(self) -> int:
        """Fire every due timer once (useful in tests). Returns how many ran."""
        return await self._process()

    async def _run_loop(self) -> None:
        while self._running:
            with contextlib.suppress(asyncio.TimeoutError):
                await asyncio.wait_for(
                    self._trigger.wait(), timeout=self._poll_interval
                )
            self._trigger.clear()
            try:
                await self._process()
            except Exception:
                logger.exception("TimerQueueWorker error")

    async def _process(self) -> int:
        count = 0
        for timer in self._queue.pop_due():
            try:
                await self._router(timer.hook, timer.args)
                count += 1
            except Exception:
                logger.exception(
                    "Failed to run timer %s%s due at %s",
                    timer.hook,
                    timer.args,
                    timer.time.isoformat(),
                )
        if count > 0:
            logger.info("TimerQueueWorker: ran %d due timer(s)", count)
        return count
