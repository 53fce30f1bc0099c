from .store import JsonFileStore, KeyValueStore, MemoryStore, StorageError

__all__ = [
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "StorageError",
]
