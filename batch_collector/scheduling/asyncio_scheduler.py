"""Event-loop backed scheduler."""

from __future__ import annotations

import asyncio
from typing import Callable

from batch_collector.scheduling.interface import Scheduler, TimerHandle


class AsyncioScheduler(Scheduler):
    """Schedules callbacks with ``loop.call_later``.

    When no loop is given, the running loop at scheduling time is used, so
    collectors must be pushed to from inside that loop.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def schedule_after(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(max(delay_ms, 0) / 1000, callback)
