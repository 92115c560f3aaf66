from .base import KeyValueStore, StoreError, StoreUnavailableError
from .memory import MemoryStore
from .mongo_kv import MongoKVStore
from .rest_kv import RestKVStore

__all__ = [
    "KeyValueStore",
    "StoreError",
    "StoreUnavailableError",
    "MemoryStore",
    "MongoKVStore",
    "RestKVStore",
]
