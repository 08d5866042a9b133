# Tree source implementations

from .local import LocalDir, LocalFile, open_path
from .memory import MemoryDir, MemoryFile

__all__ = ["LocalDir", "LocalFile", "open_path", "MemoryDir", "MemoryFile"]
