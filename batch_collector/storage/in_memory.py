"""Dict-backed store — suitable for single-process use and tests."""

from __future__ import annotations

import threading
from typing import Callable

from batch_collector.storage.interface import KeyValueStore


class InMemoryStore(KeyValueStore):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def take(self, key: str, accept: Callable[[str], bool]) -> str | None:
        with self._lock:
            raw = self._data.get(key)
            if raw is None or not accept(raw):
                return None
            del self._data[key]
            return raw

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._data)
