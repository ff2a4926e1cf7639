"""Persistence adapter — mirrors a collector buffer to a KeyValueStore.

An empty batch is represented by the key being absent, never by ``"[]"``.
A present value that does not decode to a JSON array is treated as foreign
data: it reads as "no pending batch" and is never overwritten by a read or
a claim.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import BaseModel

from batch_collector.core.models import DEFAULT_STORAGE_KEY
from batch_collector.storage.interface import KeyValueStore

logger = logging.getLogger(__name__)


def _encode(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def decode_batch(raw: str | None) -> list[Any]:
    """Decode a persisted value; anything but a JSON array yields ``[]``."""
    if not raw:
        return []
    try:
        parsed = json.loads(raw)
    except ValueError:
        return []
    return parsed if isinstance(parsed, list) else []


class PersistenceAdapter:
    """Read / write / claim the pending batch stored under one key.

    ``store`` may be ``None`` (backend unavailable): reads then return an
    empty batch and writes report failure.
    """

    def __init__(self, store: KeyValueStore | None, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._store = store
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    @property
    def available(self) -> bool:
        return self._store is not None

    def read_persisted(self) -> list[Any]:
        if self._store is None:
            return []
        try:
            return decode_batch(self._store.get(self._key))
        except Exception as exc:
            logger.warning("read of %r failed: %s", self._key, exc)
            return []

    def write_persisted(self, items: list[Any]) -> bool:
        if self._store is None:
            return False
        try:
            if items:
                self._store.set(self._key, json.dumps(items, default=_encode))
            else:
                self._store.delete(self._key)
        except Exception as exc:
            logger.warning("write of %r failed (%d items): %s", self._key, len(items), exc)
            return False
        return True

    def claim_persisted(self) -> list[Any]:
        """Atomically read and delete the pending batch.

        Only a value that decodes to a non-empty array is removed, so at most
        one claimant sees any given batch and foreign data is left alone.
        """
        if self._store is None:
            return []
        try:
            raw = self._store.take(self._key, lambda value: bool(decode_batch(value)))
        except Exception as exc:
            logger.warning("claim of %r failed: %s", self._key, exc)
            return []
        return decode_batch(raw)
