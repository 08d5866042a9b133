"""
In-memory tree nodes.

Useful for building trees programmatically (and in tests) without touching
the filesystem. Directory children are iterated in insertion order.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List

from ..tree_types import Node, NodeKind

__all__ = ["MemoryFile", "MemoryDir"]


@dataclass(frozen=True)
class MemoryFile:
    """File node holding its content in memory."""
    name: str
    content: bytes = b""

    @property
    def kind(self) -> NodeKind:
        return NodeKind.FILE

    @property
    def size(self) -> int:
        return len(self.content)

    def read_bytes(self) -> bytes:
        return self.content


@dataclass(frozen=True)
class MemoryDir:
    """Directory node over an ordered list of child nodes."""
    name: str
    children: List[Node] = field(default_factory=list)

    @property
    def kind(self) -> NodeKind:
        return NodeKind.DIRECTORY

    @property
    def size(self) -> int:
        return sum(child.size for child in self.children)

    def iter_children(self) -> Iterator[Node]:
        return iter(list(self.children))
