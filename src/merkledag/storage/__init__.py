# Object store implementations

from .base import KVStore, ReadableKVStore
from .factory import store_from_settings
from .filesystem import FileStore
from .memory import MemoryStore

__all__ = ["KVStore", "ReadableKVStore", "FileStore", "MemoryStore", "store_from_settings"]
