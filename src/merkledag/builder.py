"""
Merkle DAG builder.

Walks a file or directory tree bottom-up, turns it into hash-addressed
objects, writes each distinct object to the store once, and returns the
digest of the root object.

Encoding rules:
- A file no larger than the chunk size becomes a single blob; the blob's
  digest is the file's root.
- A larger file is cut into consecutive chunk-size windows, each written as
  a blob, plus one composite object linking them in offset order (unnamed
  links, tag "blob").
- A directory becomes a composite "tree" object with one named link per
  child in iteration order (tag "link" for files, "tree" for directories),
  sized by the child's logical size.

Every object goes through write_object(), which is the only place digests
are computed and the only place the store is written.
"""
from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from pydantic import ValidationError

from .codec import encode_object
from .errors import InvalidNodeKindError, SerializationError
from .hashing import HashFactory, compute_digest
from .models import DEFAULT_CHUNK_SIZE, DagObject, Link, LinkTag
from .settings import Settings
from .storage.base import KVStore
from .tree_types import DirNode, FileNode, Node, NodeKind

__all__ = ["BuildStats", "DagBuilder", "add", "split_chunks", "write_object"]

logger = logging.getLogger(__name__)


@dataclass
class BuildStats:
    """Counters collected while building a DAG."""

    files: int = 0
    directories: int = 0
    chunks: int = 0  # Blobs produced from file content
    objects_written: int = 0  # Objects newly put into the store
    objects_deduplicated: int = 0  # Objects already present, not rewritten
    bytes_written: int = 0  # Encoded bytes of newly written objects

    @property
    def objects_total(self) -> int:
        return self.objects_written + self.objects_deduplicated

    @property
    def dedup_ratio(self) -> float:
        if self.objects_total == 0:
            return 0.0
        return self.objects_deduplicated / self.objects_total


def split_chunks(data: bytes, chunk_size: int) -> Iterator[bytes]:
    """
    Yield consecutive, non-overlapping windows of at most chunk_size bytes.

    Windows come out in byte-offset order; only the last may be shorter.
    Empty data yields nothing.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    for offset in range(0, len(data), chunk_size):
        yield data[offset:offset + chunk_size]


def write_object(
    store: KVStore,
    obj: DagObject,
    hash_factory: HashFactory = hashlib.sha256,
    *,
    stats: Optional[BuildStats] = None,
) -> bytes:
    """
    Encode an object, digest it, and store it unless already present.

    Idempotent: writing an identical object again performs no put and
    returns the same digest.

    Args:
        store: Destination key-value store
        obj: Object to persist
        hash_factory: Creates a fresh hasher for this object's digest
        stats: Optional counters to update

    Returns:
        Digest of the canonical encoding (the object's store key)

    Raises:
        SerializationError: If the object cannot be encoded
        StorageError: If the store check or write fails
    """
    encoded = encode_object(obj)
    digest = compute_digest(encoded, hash_factory)

    if store.has(digest):
        logger.debug(f"Object {digest.hex()} already stored")
        if stats is not None:
            stats.objects_deduplicated += 1
        return digest

    store.put(digest, encoded)
    logger.debug(f"Stored object {digest.hex()} ({len(encoded)} bytes, {len(obj.links)} links)")
    if stats is not None:
        stats.objects_written += 1
        stats.bytes_written += len(encoded)
    return digest


class DagBuilder:
    """
    Encodes trees into a key-value store.

    The builder holds no per-tree state apart from its statistics, so one
    instance can add many trees into the same store; identical content
    across those trees is stored once.
    """

    def __init__(
        self,
        store: KVStore,
        *,
        hash_factory: HashFactory = hashlib.sha256,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.store = store
        self.hash_factory = hash_factory
        self.chunk_size = chunk_size
        self.stats = BuildStats()

    @classmethod
    def from_settings(cls, store: KVStore, settings: Settings) -> DagBuilder:
        return cls(store, hash_factory=settings.hash_factory, chunk_size=settings.chunk_size)

    def add(self, node: Node) -> bytes:
        """
        Encode a file or directory tree and return its root digest.

        Args:
            node: Root of the tree

        Returns:
            Digest of the root object

        Raises:
            InvalidNodeKindError: If any node's kind does not match its capabilities
            SerializationError: If an object cannot be encoded
            StorageError: If the store fails
        """
        root, _ = self._encode_node(node)
        logger.info(
            f"Added {node.name or '<root>'} as {root.hex()} "
            f"({self.stats.objects_written} new, {self.stats.objects_deduplicated} deduplicated)"
        )
        return root

    def _encode_node(self, node: Node) -> Tuple[bytes, LinkTag]:
        kind = _classify(node)
        if kind is NodeKind.FILE:
            return self._encode_file(node), LinkTag.LINK
        return self._encode_dir(node), LinkTag.TREE

    def _encode_file(self, node: FileNode) -> bytes:
        content = node.read_bytes()
        self.stats.files += 1

        if len(content) <= self.chunk_size:
            self.stats.chunks += 1
            return self._write(DagObject.blob(content))

        entries: List[Tuple[LinkTag, Link]] = []
        for chunk in split_chunks(content, self.chunk_size):
            self.stats.chunks += 1
            chunk_digest = self._write(DagObject.blob(chunk))
            entries.append((LinkTag.BLOB, _make_link("", chunk_digest, len(chunk))))
        logger.debug(f"Split {node.name} ({len(content)} bytes) into {len(entries)} chunks")
        return self._write(DagObject.composite(entries))

    def _encode_dir(self, node: DirNode) -> bytes:
        self.stats.directories += 1

        entries: List[Tuple[LinkTag, Link]] = []
        for child in node.iter_children():
            child_digest, tag = self._encode_node(child)
            entries.append((tag, _make_link(child.name, child_digest, child.size)))
        return self._write(DagObject.composite(entries))

    def _write(self, obj: DagObject) -> bytes:
        return write_object(self.store, obj, self.hash_factory, stats=self.stats)


def add(
    store: KVStore,
    node: Node,
    *,
    hash_factory: HashFactory = hashlib.sha256,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> bytes:
    """
    Encode a tree into store and return the root digest.

    Convenience wrapper around DagBuilder for one-off adds.
    """
    return DagBuilder(store, hash_factory=hash_factory, chunk_size=chunk_size).add(node)


def _classify(node: object) -> NodeKind:
    """Return the node's declared kind after checking it has the matching capability."""
    name = getattr(node, "name", None)
    declared = getattr(node, "kind", None)
    try:
        kind = NodeKind(declared)
    except ValueError:
        raise InvalidNodeKindError(
            f"Node {name!r} has unknown kind {declared!r}", name=name, kind=declared
        ) from None

    if kind is NodeKind.FILE and not isinstance(node, FileNode):
        raise InvalidNodeKindError(
            f"Node {name!r} declares kind 'file' but cannot be read as a file",
            name=name, kind=kind,
        )
    if kind is NodeKind.DIRECTORY and not isinstance(node, DirNode):
        raise InvalidNodeKindError(
            f"Node {name!r} declares kind 'directory' but cannot list children",
            name=name, kind=kind,
        )
    return kind


def _make_link(name: str, digest: bytes, size: int) -> Link:
    try:
        return Link(name=name, hash=digest, size=size)
    except ValidationError as e:
        raise SerializationError(f"Invalid link for entry {name!r}: {e}") from e
