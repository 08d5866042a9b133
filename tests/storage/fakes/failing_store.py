"""
Fake store that fails on demand.

Subclasses MemoryStore so stored objects stay inspectable after a failure.
"""
from __future__ import annotations

from typing import Literal

from merkledag.errors import StorageError
from merkledag.storage.memory import MemoryStore

__all__ = ["FailingStore"]


class FailingStore(MemoryStore):
    """
    MemoryStore that raises StorageError on a chosen operation.

    The operation succeeds `after` times, then every further call raises the
    same `error` instance so tests can check it propagated unchanged.
    """

    def __init__(self, *, fail_on: Literal["has", "put"] = "put", after: int = 0) -> None:
        super().__init__()
        self.fail_on = fail_on
        self.after = after
        self.calls = 0
        self.error = StorageError(f"injected {fail_on} failure")

    def has(self, key: bytes) -> bool:
        if self.fail_on == "has":
            self._maybe_fail()
        return super().has(key)

    def put(self, key: bytes, value: bytes) -> None:
        if self.fail_on == "put":
            self._maybe_fail()
        super().put(key, value)

    def _maybe_fail(self) -> None:
        self.calls += 1
        if self.calls > self.after:
            raise self.error
