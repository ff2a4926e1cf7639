"""Core data models — no internal dependencies, only Pydantic + stdlib."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

DEFAULT_STORAGE_KEY = "batch-collector-pending"
DEFAULT_STORAGE_DIR = "./.batch_collector"


# ---------------------------------------------------------------------------
# Emitted events
# ---------------------------------------------------------------------------

class CollectorEvent(str, Enum):
    FLUSH = "flush"


BATCH_FLUSH_EVENT = CollectorEvent.FLUSH


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

class StorageType(str, Enum):
    MEMORY = "memory"
    LOCAL = "local"  # durable across restarts
    SESSION = "session"  # shared for the lifetime of the process

    @classmethod
    def _missing_(cls, value: object) -> StorageType | None:
        if not isinstance(value, str):
            return None
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        # Browser-style names
        return {"localstorage": cls.LOCAL, "sessionstorage": cls.SESSION}.get(normalized)


class CollectorConfig(BaseModel):
    """Construction options for a BatchCollector. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    delay_ms: PositiveInt
    reset_timer_on_push: bool = True
    storage_type: StorageType = StorageType.MEMORY
    storage_key: str = Field(default=DEFAULT_STORAGE_KEY, min_length=1)
    auto_clear: bool = True
    storage_dir: str = DEFAULT_STORAGE_DIR

    @field_validator("storage_type", mode="before")
    @classmethod
    def _coerce_storage_type(cls, value: Any) -> Any:
        if isinstance(value, str) and not isinstance(value, StorageType):
            return StorageType(value)
        return value

    @field_validator("storage_key")
    @classmethod
    def _reject_blank_key(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("storage_key must not be blank")
        return value

    @property
    def persistent(self) -> bool:
        return self.storage_type is not StorageType.MEMORY
