"""merkledag - content-addressed Merkle DAG builder for file trees."""

from .builder import BuildStats, DagBuilder, add, split_chunks, write_object
from .errors import (
    DagError,
    InvalidNodeKindError,
    ObjectNotFoundError,
    SerializationError,
    StorageError,
)
from .models import DEFAULT_CHUNK_SIZE, DagObject, Link, LinkTag
from .tree_types import DirNode, FileNode, Node, NodeKind

__version__ = "0.1.0"

__all__ = [
    "add",
    "BuildStats",
    "DagBuilder",
    "split_chunks",
    "write_object",
    "DagError",
    "InvalidNodeKindError",
    "ObjectNotFoundError",
    "SerializationError",
    "StorageError",
    "DEFAULT_CHUNK_SIZE",
    "DagObject",
    "Link",
    "LinkTag",
    "DirNode",
    "FileNode",
    "Node",
    "NodeKind",
]
