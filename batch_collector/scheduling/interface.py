"""Scheduler ABC — no internal deps."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(ABC):
    """Timer facility used by the collector.

    Callbacks must always run on their own task boundary, never nested
    inside the ``schedule_after`` call that registered them.
    """

    @abstractmethod
    def schedule_after(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle: ...

    def cancel(self, handle: TimerHandle) -> None:
        handle.cancel()
