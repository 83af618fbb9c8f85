"""Interval-based automatic sync."""

import asyncio
from typing import Any, Callable, Coroutine

from loguru import logger

from memosync.utils.helpers import now_ms


class AutoSyncScheduler:
    """
    Call ``on_tick`` every ``interval_s`` seconds.

    Only one timer task exists at a time and it is re-armed after the tick
    finished, so a slow sync delays the next one instead of overlapping it.
    """

    def __init__(
        self,
        on_tick: Callable[[], Coroutine[Any, Any, Any]],
        interval_s: float,
    ):
        if interval_s <= 0:
            raise ValueError("interval_s must be > 0")
        self.on_tick = on_tick
        self.interval_s = interval_s
        self.next_run_at_ms: int | None = None
        self.ticks = 0
        self._timer_task: asyncio.Task | None = None
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start the scheduler; the first tick fires after one interval."""
        self._running = True
        self._arm_timer()
        logger.info(f"Auto sync started, every {self.interval_s / 60:g} minutes")

    def stop(self) -> None:
        """Stop the scheduler. A tick already in progress runs to completion."""
        self._running = False
        self.next_run_at_ms = None
        if self._timer_task:
            self._timer_task.cancel()
            self._timer_task = None

    def _arm_timer(self) -> None:
        """Schedule the next timer tick."""
        if self._timer_task:
            self._timer_task.cancel()
        if not self._running:
            return

        self.next_run_at_ms = now_ms() + int(self.interval_s * 1000)

        async def tick():
            await asyncio.sleep(self.interval_s)
            if self._running:
                await self._on_timer()

        self._timer_task = asyncio.create_task(tick())

    async def _on_timer(self) -> None:
        """Run one tick, then re-arm."""
        self.ticks += 1
        # Detach so re-arming below does not cancel the task we are running in
        self._timer_task = None
        try:
            await self.on_tick()
        except Exception as e:
            logger.error(f"Auto sync tick failed: {e}")
        self._arm_timer()
