from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, Protocol

logger = logging.getLogger(__name__)

TickCallback = Callable[[], Awaitable[None]]


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Default wall-clock implementation."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_every(self, interval: float, callback: TickCallback) -> TimerHandle: ...


class _TaskHandle:
    def __init__(self, task: asyncio.Task[None]) -> None:
        self._task = task

    def cancel(self) -> None:
        self._task.cancel()


class AsyncioScheduler:
    """Runs a callback every ``interval`` seconds on the running event loop.

    The first run happens one interval after scheduling. Runs never overlap:
    the next sleep starts when the previous callback has returned.
    """

    def call_every(self, interval: float, callback: TickCallback) -> TimerHandle:
        task = asyncio.create_task(self._run(interval, callback), name="simulator-poll")
        return _TaskHandle(task)

    async def _run(self, interval: float, callback: TickCallback) -> None:
        while True:
            await asyncio.sleep(interval)
            try:
                await callback()
            except Exception:
                logger.exception("Scheduled callback failed")
