"""asyncio-backed periodic timer.

Ticks are scheduled with ``asyncio.sleep`` and may drift; callers compare
wall-clock time against absolute deadlines instead of counting ticks.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from url_throttle.adapters.timer.base import AbstractPeriodicTimer, TimerCallback

logger = logging.getLogger(__name__)


class AsyncioPeriodicTimer(AbstractPeriodicTimer):
    """Runs a synchronous callback every ``interval_seconds`` on the running loop."""

    def __init__(
        self,
        interval_seconds: float,
        *,
        sleeper: Callable[[float], Awaitable[None]] | None = None,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be > 0")
        self._interval = interval_seconds
        self._sleep = sleeper or asyncio.sleep
        self._task: asyncio.Task[None] | None = None

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, callback: TimerCallback) -> None:
        if self.active:
            return
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run(callback))
        logger.debug("timer.started", extra={"interval_s": self._interval})

    def cancel(self) -> None:
        task = self._task
        self._task = None
        if task is None or task.done():
            return
        # A callback may cancel its own timer; the task then ends after the tick.
        if task is not asyncio.current_task():
            task.cancel()
        logger.debug("timer.cancelled")

    async def _run(self, callback: TimerCallback) -> None:
        me = asyncio.current_task()
        while self._task is me:
            await self._sleep(self._interval)
            if self._task is not me:
                return
            try:
                callback()
            except Exception:
                logger.exception("timer.callback_failed")
