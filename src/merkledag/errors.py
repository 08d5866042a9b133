"""
Merkle DAG error classes.

Provides a small taxonomy of errors raised while encoding a tree into the
object store. The builder never recovers from any of these locally; they
propagate to the caller of add() unchanged.
"""
from __future__ import annotations


class DagError(Exception):
    """Base class for all merkledag errors."""
    pass


class InvalidNodeKindError(DagError):
    """
    A tree node's declared kind does not match its capabilities.

    Raised when:
    - a node reports FILE but cannot be read as a file
    - a node reports DIRECTORY but cannot iterate children
    - a node reports a kind the builder does not know
    """

    def __init__(self, message: str, name: str | None = None, kind: object = None):
        super().__init__(message)
        self.name = name
        self.kind = kind


class StorageError(DagError):
    """
    Existence check or write against the key-value store failed.

    Store implementations raise this (chaining the underlying cause);
    the builder lets it bubble up without retrying.
    """
    pass


class ObjectNotFoundError(StorageError):
    """Requested key is not present in the store."""

    def __init__(self, key: bytes):
        super().__init__(f"object not found: {key.hex()}")
        self.key = key


class SerializationError(DagError):
    """
    Canonical encoding or decoding of an object failed.

    Raised when:
    - an in-memory object holds values the wire format cannot represent
    - stored bytes are not a valid encoded object
    """
    pass


__all__ = [
    "DagError",
    "InvalidNodeKindError",
    "StorageError",
    "ObjectNotFoundError",
    "SerializationError",
]
