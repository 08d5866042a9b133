"""
In-memory object store.
"""
from __future__ import annotations

import threading
from typing import Dict, Iterator

from ..errors import ObjectNotFoundError
from .base import ReadableKVStore

__all__ = ["MemoryStore"]


class MemoryStore(ReadableKVStore):
    """
    Dict-backed store keyed by digest bytes.

    Safe for concurrent callers. Keeps a count of accepted puts so callers
    can verify that deduplicated objects were never rewritten.
    """

    def __init__(self) -> None:
        self._objects: Dict[bytes, bytes] = {}
        self._lock = threading.Lock()
        self.puts = 0

    def has(self, key: bytes) -> bool:
        with self._lock:
            return key in self._objects

    def put(self, key: bytes, value: bytes) -> None:
        with self._lock:
            if key in self._objects:
                return
            self._objects[key] = bytes(value)
            self.puts += 1

    def get(self, key: bytes) -> bytes:
        with self._lock:
            if key not in self._objects:
                raise ObjectNotFoundError(key)
            return self._objects[key]

    def keys(self) -> Iterator[bytes]:
        with self._lock:
            return iter(list(self._objects))

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._objects

    def __len__(self) -> int:
        with self._lock:
            return len(self._objects)

    def clear(self) -> None:
        """Drop all stored objects (test utility)."""
        with self._lock:
            self._objects.clear()
            self.puts = 0
