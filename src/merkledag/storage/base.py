"""
Storage interfaces for merkledag.

The builder only needs an existence check and a write. These protocols define
that boundary so stores can be swapped (memory, filesystem, remote) and faked
in tests.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

__all__ = ["KVStore", "ReadableKVStore"]


@runtime_checkable
class KVStore(Protocol):
    """Append-only key-value store keyed by object digest."""

    def has(self, key: bytes) -> bool:
        """
        Check whether a value is stored under key.

        Raises:
            StorageError: If the check cannot be performed
        """
        ...

    def put(self, key: bytes, value: bytes) -> None:
        """
        Store value under key.

        Callers only put keys that are not yet present; implementations may
        treat a repeated put of the same key as a no-op.

        Raises:
            StorageError: If the write fails
        """
        ...


@runtime_checkable
class ReadableKVStore(KVStore, Protocol):
    """Store that can also return stored values (for inspection tooling)."""

    def get(self, key: bytes) -> bytes:
        """
        Return the value stored under key.

        Raises:
            ObjectNotFoundError: If key is not present
            StorageError: If the read fails
        """
        ...
