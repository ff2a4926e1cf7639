from batch_collector.storage.interface import KeyValueStore
from batch_collector.storage.in_memory import InMemoryStore
from batch_collector.storage.file_store import FileStore
from batch_collector.storage.backends import SESSION_STORE, resolve_store
from batch_collector.storage.persistence import PersistenceAdapter, decode_batch

__all__ = [
    "FileStore",
    "InMemoryStore",
    "KeyValueStore",
    "PersistenceAdapter",
    "SESSION_STORE",
    "decode_batch",
    "resolve_store",
]
