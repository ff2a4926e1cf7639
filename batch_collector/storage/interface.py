"""KeyValueStore ABC — synchronous string store used for batch persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable


class KeyValueStore(ABC):
    """Synchronous durable key-value interface.

    Swap in another backend (SQLite, Redis, ...) by implementing this ABC.
    ``take`` must be atomic with respect to every other collector sharing
    the store; override it when the default get-then-delete is not.
    """

    @abstractmethod
    def get(self, key: str) -> str | None: ...

    @abstractmethod
    def set(self, key: str, value: str) -> None: ...

    @abstractmethod
    def delete(self, key: str) -> None: ...

    def take(self, key: str, accept: Callable[[str], bool]) -> str | None:
        """Remove and return the value at *key* if ``accept(value)`` holds.

        Values rejected by *accept* are left in place and ``None`` is returned.
        """
        raw = self.get(key)
        if raw is None or not accept(raw):
            return None
        self.delete(key)
        return raw
