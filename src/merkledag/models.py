"""
Data models for the Merkle DAG.

A DagObject is the only unit persisted in the store. Blobs carry raw chunk
bytes and no links; composite objects (multi-chunk files and directories)
carry an ordered list of links plus one type tag per link in `data`.
"""
from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field

# Maximum chunk length before a file is split into multiple blobs
DEFAULT_CHUNK_SIZE = 256 * 1024

# Every tag is exactly this many bytes so `data` can be split back per link
TAG_WIDTH = 4


class LinkTag(bytes, Enum):
    """Per-link type tags stored in a composite object's data."""
    BLOB = b"blob"   # raw chunk of a multi-chunk file
    LINK = b"link"   # file entry of a directory
    TREE = b"tree"   # subdirectory entry of a directory


class Link(BaseModel):
    """Pointer from a composite object to another stored object."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Entry name; empty for raw chunk links")
    hash: bytes = Field(..., description="Digest of the target object")
    size: int = Field(..., ge=0, description="Chunk length or child's logical size")


class DagObject(BaseModel):
    """
    Immutable content-addressed object.

    Invariants:
    - links order is significant and part of the object's identity
    - for composite objects, len(data) == TAG_WIDTH * len(links)
    """
    model_config = ConfigDict(frozen=True)

    links: List[Link] = Field(default_factory=list, description="Ordered child links")
    data: bytes = Field(default=b"", description="Chunk bytes (blob) or link tags (composite)")

    @property
    def is_blob(self) -> bool:
        return not self.links

    @classmethod
    def blob(cls, data: bytes) -> DagObject:
        return cls(links=[], data=data)

    @classmethod
    def composite(cls, entries: List[tuple[LinkTag, Link]]) -> DagObject:
        """Build a composite object from (tag, link) pairs, preserving order."""
        return cls(
            links=[link for _, link in entries],
            data=b"".join(tag.value for tag, _ in entries),
        )


__all__ = ["DEFAULT_CHUNK_SIZE", "TAG_WIDTH", "LinkTag", "Link", "DagObject"]
