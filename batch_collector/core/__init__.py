from batch_collector.core.models import (
    BATCH_FLUSH_EVENT,
    DEFAULT_STORAGE_KEY,
    CollectorConfig,
    CollectorEvent,
    StorageType,
)
from batch_collector.core.collector import BatchCollector

__all__ = [
    "BATCH_FLUSH_EVENT",
    "BatchCollector",
    "CollectorConfig",
    "CollectorEvent",
    "DEFAULT_STORAGE_KEY",
    "StorageType",
]
