"""BatchCollector — buffers items and emits them as one batch after a delay."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Generic, TypeVar

from batch_collector.core.models import CollectorConfig, CollectorEvent
from batch_collector.events.registry import FlushListener, ListenerRegistry
from batch_collector.scheduling.asyncio_scheduler import AsyncioScheduler
from batch_collector.scheduling.interface import Scheduler, TimerHandle
from batch_collector.storage.backends import resolve_store
from batch_collector.storage.interface import KeyValueStore
from batch_collector.storage.persistence import PersistenceAdapter

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BatchCollector(Generic[T]):
    """Collects items and emits ``CollectorEvent.FLUSH`` with the batch.

    Usage::

        collector = BatchCollector[dict](CollectorConfig(delay_ms=5000))
        collector.subscribe(BATCH_FLUSH_EVENT, send_to_backend)
        collector.push({"action": "button_click", "id": "submit-btn"})

    With ``reset_timer_on_push`` (default) the batch is flushed ``delay_ms``
    after the last push; without it, ``delay_ms`` after the first push of the
    current window.

    Without an explicit ``scheduler`` the collector binds to the running
    event loop, so it must be constructed inside one.

    When ``storage_type`` is not ``memory`` every mutation is mirrored to the
    store under ``storage_key`` and a batch left over by a previous process
    is recovered at construction. Recovery claims the batch synchronously
    but emits it on the next scheduler tick, so listeners subscribed right
    after construction still receive it. With ``auto_clear`` the claim
    deletes the stored batch, which keeps sibling instances from replaying
    it; without it the batch stays stored and is adopted into the buffer
    until ``clear()``.
    """

    def __init__(
        self,
        config: CollectorConfig,
        *,
        scheduler: Scheduler | None = None,
        store: KeyValueStore | None = None,
    ) -> None:
        self._config = config
        # Bound up front so a missing loop fails before any stored batch is claimed.
        self._scheduler = scheduler or AsyncioScheduler(asyncio.get_running_loop())
        self._buffer: list[T] = []
        self._timer: TimerHandle | None = None
        self._listeners: ListenerRegistry[T] = ListenerRegistry()
        self._persistence: PersistenceAdapter | None = None

        if config.persistent:
            backend = store if store is not None else resolve_store(config.storage_type, config.storage_dir)
            self._persistence = PersistenceAdapter(backend, config.storage_key)

        logger.info(
            "BatchCollector delay=%dms reset=%s storage=%s key=%s auto_clear=%s",
            config.delay_ms,
            config.reset_timer_on_push,
            config.storage_type.value,
            config.storage_key,
            config.auto_clear,
        )
        self._recover()

    @property
    def config(self) -> CollectorConfig:
        return self._config

    @property
    def pending(self) -> bool:
        """True while a flush timer is armed."""
        return self._timer is not None

    # -- public API ---------------------------------------------------------

    def subscribe(self, event: CollectorEvent | str, callback: FlushListener[T]) -> Callable[[], None]:
        """Register *callback* for *event*; returns an idempotent unsubscribe."""
        return self._listeners.subscribe(event, callback)

    def push(self, item: T) -> None:
        # Arm first: a scheduler error leaves the buffer and the timer untouched.
        self._schedule_flush()
        self._buffer.append(item)
        self._mirror()

    def items(self) -> list[T]:
        return list(self._buffer)

    def clear(self) -> bool:
        """Cancel the pending flush and drop the buffer and its stored copy."""
        self._clear_timer()
        self._buffer = []
        self._mirror()
        return True

    # -- recovery -----------------------------------------------------------

    def _recover(self) -> None:
        if self._persistence is None:
            return

        if self._config.auto_clear:
            pending: list[Any] = self._persistence.claim_persisted()
        else:
            pending = self._persistence.read_persisted()
            self._buffer = list(pending)

        if not pending:
            return

        logger.info("recovered %d pending items from %r", len(pending), self._persistence.key)
        try:
            self._scheduler.schedule_after(0, lambda: self._listeners.emit(CollectorEvent.FLUSH, list(pending)))
        except Exception:
            if self._config.auto_clear:
                # Put the claimed batch back for the next instance.
                self._persistence.write_persisted(pending)
            raise

    # -- flushing -----------------------------------------------------------

    def _flush(self, clear: bool = True) -> bool:
        """Emit the batch; with *clear*, also drop it. False if there was nothing to emit."""
        self._clear_timer()

        if not self._buffer:
            return False

        items = list(self._buffer)

        if clear:
            self._buffer = []
            self._mirror()

        logger.debug("flushing %d items (clear=%s)", len(items), clear)
        self._listeners.emit(CollectorEvent.FLUSH, items)
        return True

    def _on_timer(self) -> None:
        self._flush(self._config.auto_clear)

    def _schedule_flush(self) -> bool:
        if not self._config.reset_timer_on_push and self._timer is not None:
            return False  # keep the first schedule of this window

        handle = self._scheduler.schedule_after(self._config.delay_ms, self._on_timer)
        self._clear_timer()
        self._timer = handle
        logger.debug("flush armed for %dms", self._config.delay_ms)
        return True

    def _clear_timer(self) -> bool:
        if self._timer is None:
            return False
        self._scheduler.cancel(self._timer)
        self._timer = None
        logger.debug("flush timer cancelled")
        return True

    def _mirror(self) -> bool:
        if self._persistence is None:
            return False
        return self._persistence.write_persisted(self._buffer)
