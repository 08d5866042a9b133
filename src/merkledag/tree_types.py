"""
Tree source types consumed by the builder.

A tree node declares its kind and exposes the capability matching that kind:
file nodes can be read, directory nodes can iterate their children. The
builder checks the declared kind against the capability instead of
downcasting, so any object satisfying these protocols can be ingested.
"""
from __future__ import annotations

from enum import Enum
from typing import Iterator, Protocol, runtime_checkable

__all__ = ["NodeKind", "Node", "FileNode", "DirNode"]


class NodeKind(str, Enum):
    """Kinds of tree nodes."""
    FILE = "file"
    DIRECTORY = "directory"


@runtime_checkable
class Node(Protocol):
    """Common surface of every tree node."""

    @property
    def kind(self) -> NodeKind:
        ...

    @property
    def name(self) -> str:
        ...

    @property
    def size(self) -> int:
        """Logical size in bytes (for directories, the sum over their contents)."""
        ...


@runtime_checkable
class FileNode(Node, Protocol):
    """A node whose content can be read as bytes."""

    def read_bytes(self) -> bytes:
        """
        Return the file's full content.

        Raises:
            OSError: If the content cannot be read
        """
        ...


@runtime_checkable
class DirNode(Node, Protocol):
    """A node that contains other nodes."""

    def iter_children(self) -> Iterator[Node]:
        """
        Iterate children in a stable order.

        Each call starts a fresh iteration; for a given directory instance
        the order is the same every time.
        """
        ...
