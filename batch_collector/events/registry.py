"""Listener registry with per-callback failure isolation."""

from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

from batch_collector.core.models import CollectorEvent

logger = logging.getLogger(__name__)

T = TypeVar("T")

FlushListener = Callable[[list[T]], None]


class ListenerRegistry(Generic[T]):
    """Maps each CollectorEvent to the callbacks subscribed to it.

    ``emit`` calls every callback registered at the moment of emission. A
    callback that raises is isolated at its own call site: the error is
    logged at DEBUG and the remaining callbacks still receive the payload.
    """

    def __init__(self) -> None:
        # dict as an insertion-ordered set
        self._listeners: dict[CollectorEvent, dict[FlushListener[T], None]] = {}

    @staticmethod
    def _event(event: CollectorEvent | str) -> CollectorEvent:
        try:
            return CollectorEvent(event)
        except ValueError:
            raise ValueError(f"Unknown event '{event}'") from None

    def subscribe(self, event: CollectorEvent | str, callback: FlushListener[T]) -> Callable[[], None]:
        key = self._event(event)
        self._listeners.setdefault(key, {})[callback] = None

        def unsubscribe() -> None:
            self._listeners.get(key, {}).pop(callback, None)

        return unsubscribe

    def emit(self, event: CollectorEvent | str, payload: list[T]) -> None:
        key = self._event(event)
        for callback in list(self._listeners.get(key, ())):
            try:
                callback(payload)
            except Exception:
                logger.debug("listener %r failed on %s", callback, key.value, exc_info=True)

    def count(self, event: CollectorEvent | str) -> int:
        return len(self._listeners.get(self._event(event), ()))
