"""Storage-type to backend selection."""

from __future__ import annotations

import logging

from batch_collector.core.models import DEFAULT_STORAGE_DIR, StorageType
from batch_collector.storage.file_store import FileStore
from batch_collector.storage.in_memory import InMemoryStore
from batch_collector.storage.interface import KeyValueStore

logger = logging.getLogger(__name__)

# Outlives individual collectors, not the process.
SESSION_STORE = InMemoryStore()


def resolve_store(
    storage_type: StorageType,
    storage_dir: str = DEFAULT_STORAGE_DIR,
) -> KeyValueStore | None:
    """Return the backend for *storage_type*, or ``None`` when there is none.

    ``None`` covers both ``memory`` and a ``local`` directory that cannot be
    created; collectors then behave as memory-only.
    """
    if storage_type is StorageType.SESSION:
        return SESSION_STORE
    if storage_type is StorageType.LOCAL:
        try:
            return FileStore(storage_dir)
        except OSError as exc:
            logger.warning("local storage unavailable at %s: %s", storage_dir, exc)
            return None
    return None
