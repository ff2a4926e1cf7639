"""Manual-clock scheduler — deterministic timers for tests and simulations."""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable

from batch_collector.scheduling.interface import Scheduler

logger = logging.getLogger(__name__)


@dataclass(order=True)
class VirtualTimerHandle:
    due_ms: int
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class VirtualScheduler(Scheduler):
    """Runs callbacks only when the clock is advanced.

    ``advance(ms)`` fires every timer due within the window in due-time
    order (ties in scheduling order), moving ``now_ms`` to each timer's due
    time before calling it. Timers registered by a callback that fall inside
    the same window fire too.
    """

    def __init__(self, start_ms: int = 0) -> None:
        self._now = start_ms
        self._heap: list[VirtualTimerHandle] = []
        self._seq = itertools.count()

    @property
    def now_ms(self) -> int:
        return self._now

    @property
    def pending(self) -> int:
        return sum(1 for h in self._heap if not h.cancelled)

    def schedule_after(self, delay_ms: int, callback: Callable[[], None]) -> VirtualTimerHandle:
        handle = VirtualTimerHandle(self._now + max(delay_ms, 0), next(self._seq), callback)
        heapq.heappush(self._heap, handle)
        return handle

    def advance(self, ms: int) -> int:
        """Move the clock forward by *ms*; return the number of callbacks run."""
        if ms < 0:
            raise ValueError("cannot move the clock backwards")
        target = self._now + ms
        fired = 0
        while self._heap and self._heap[0].due_ms <= target:
            handle = heapq.heappop(self._heap)
            if handle.cancelled:
                continue
            self._now = handle.due_ms
            handle.cancel()
            handle.callback()
            fired += 1
        self._now = target
        logger.debug("virtual clock at %dms (%d fired)", self._now, fired)
        return fired

    def run_pending(self) -> int:
        return self.advance(0)
