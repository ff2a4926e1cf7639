"""batch_collector — buffer items and deliver them as one batch after a quiet period.

Usage::

    from batch_collector import BATCH_FLUSH_EVENT, create_collector

    collector = create_collector(delay_ms=5000, storage_type="local")
    collector.subscribe(BATCH_FLUSH_EVENT, lambda items: send(items))
    collector.push({"action": "button_click"})
"""

from __future__ import annotations

import os
from typing import Any

from dotenv import load_dotenv

from batch_collector.core.models import (
    BATCH_FLUSH_EVENT,
    DEFAULT_STORAGE_DIR,
    DEFAULT_STORAGE_KEY,
    CollectorConfig,
    CollectorEvent,
    StorageType,
)
from batch_collector.core.collector import BatchCollector
from batch_collector.scheduling import AsyncioScheduler, Scheduler, VirtualScheduler
from batch_collector.storage import FileStore, InMemoryStore, KeyValueStore

__all__ = [
    "BATCH_FLUSH_EVENT",
    "AsyncioScheduler",
    "BatchCollector",
    "CollectorConfig",
    "CollectorEvent",
    "DEFAULT_STORAGE_KEY",
    "FileStore",
    "InMemoryStore",
    "KeyValueStore",
    "Scheduler",
    "StorageType",
    "VirtualScheduler",
    "config_from_env",
    "create_collector",
]

_TRUE = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUE


def config_from_env(**overrides: Any) -> CollectorConfig:
    """Build a CollectorConfig from the environment; keyword overrides win.

    Environment variables (all optional):
      BATCH_COLLECTOR_DELAY_MS     — default ``5000``
      BATCH_COLLECTOR_RESET_TIMER  — ``1``/``0``, default ``1``
      BATCH_COLLECTOR_STORAGE      — ``memory`` | ``local`` | ``session``
      BATCH_COLLECTOR_STORAGE_KEY  — default ``batch-collector-pending``
      BATCH_COLLECTOR_STORAGE_DIR  — directory for ``local`` storage
      BATCH_COLLECTOR_AUTO_CLEAR   — ``1``/``0``, default ``1``
    """
    load_dotenv()  # reads .env into os.environ (no-op if file missing)

    values: dict[str, Any] = {
        "delay_ms": os.environ.get("BATCH_COLLECTOR_DELAY_MS", "5000"),
        "reset_timer_on_push": _env_flag("BATCH_COLLECTOR_RESET_TIMER", True),
        "storage_type": os.environ.get("BATCH_COLLECTOR_STORAGE", StorageType.MEMORY.value),
        "storage_key": os.environ.get("BATCH_COLLECTOR_STORAGE_KEY", DEFAULT_STORAGE_KEY),
        "storage_dir": os.environ.get("BATCH_COLLECTOR_STORAGE_DIR", DEFAULT_STORAGE_DIR),
        "auto_clear": _env_flag("BATCH_COLLECTOR_AUTO_CLEAR", True),
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    return CollectorConfig(**values)


def create_collector(
    *,
    scheduler: Scheduler | None = None,
    store: KeyValueStore | None = None,
    **overrides: Any,
) -> BatchCollector[Any]:
    """Wire a BatchCollector from environment + keyword overrides."""
    return BatchCollector(config_from_env(**overrides), scheduler=scheduler, store=store)
