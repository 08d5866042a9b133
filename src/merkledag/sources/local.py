"""
Filesystem-backed tree nodes.

Directory children are sorted by name so repeated walks of the same directory
always link entries in the same order. Symlinks are skipped unless
follow_symlinks is set; a followed symlink back to an ancestor directory is
skipped as a cycle. Special files (sockets, FIFOs, devices) are always skipped.
"""
from __future__ import annotations

import logging
from functools import cached_property
from pathlib import Path
from typing import FrozenSet, Iterator, List, Tuple, Union

from ..tree_types import NodeKind

__all__ = ["LocalFile", "LocalDir", "open_path"]

logger = logging.getLogger(__name__)


class LocalFile:
    """Regular file on disk."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"LocalFile({str(self.path)!r})"

    @property
    def kind(self) -> NodeKind:
        return NodeKind.FILE

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def size(self) -> int:
        return self.path.stat().st_size

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()


class LocalDir:
    """
    Directory on disk.

    The directory is listed once, on first use; size and iter_children()
    both work from that listing and share the same child instances.
    """

    def __init__(self, path: Path | str, *, follow_symlinks: bool = False,
                 ancestors: FrozenSet[Tuple[int, int]] = frozenset()) -> None:
        """
        Args:
            path: Directory to wrap
            follow_symlinks: Traverse symlinked files and directories
            ancestors: (st_dev, st_ino) of the directories above this one
        """
        self.path = Path(path)
        self.follow_symlinks = follow_symlinks
        self.ancestors = ancestors

    def __repr__(self) -> str:
        return f"LocalDir({str(self.path)!r})"

    @property
    def kind(self) -> NodeKind:
        return NodeKind.DIRECTORY

    @property
    def name(self) -> str:
        return self.path.name

    @cached_property
    def size(self) -> int:
        """Total size of all files below this directory."""
        return sum(child.size for child in self._children)

    def iter_children(self) -> Iterator[Union[LocalFile, LocalDir]]:
        return iter(self._children)

    @cached_property
    def _children(self) -> List[Union[LocalFile, LocalDir]]:
        lineage = self.ancestors | {_inode(self.path)}
        children: List[Union[LocalFile, LocalDir]] = []
        for child in sorted(self.path.iterdir(), key=lambda p: p.name):
            if child.is_symlink() and not self.follow_symlinks:
                logger.debug(f"Skipping symlink {child}")
                continue
            if child.is_file():
                children.append(LocalFile(child))
            elif child.is_dir():
                if _inode(child) in lineage:
                    logger.debug(f"Skipping directory cycle at {child}")
                    continue
                children.append(LocalDir(child, follow_symlinks=self.follow_symlinks, ancestors=lineage))
            else:
                logger.debug(f"Skipping special file {child}")
        return children


def _inode(path: Path) -> Tuple[int, int]:
    st = path.stat()
    return st.st_dev, st.st_ino


def open_path(path: Path | str, *, follow_symlinks: bool = False) -> Union[LocalFile, LocalDir]:
    """
    Wrap a filesystem path in the matching tree node.

    Args:
        path: File or directory to wrap
        follow_symlinks: Whether symlinks below a directory are traversed

    Returns:
        LocalFile or LocalDir

    Raises:
        FileNotFoundError: If path does not exist
        ValueError: If path is neither a regular file nor a directory
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Path not found: {path}")

    # Give the root a meaningful name even for "." style paths
    path = path.resolve()
    if path.is_file():
        return LocalFile(path)
    if path.is_dir():
        return LocalDir(path, follow_symlinks=follow_symlinks)
    raise ValueError(f"Unsupported file type: {path}")
