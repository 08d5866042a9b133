"""
Filesystem object store.

Objects live under `<root>/objects/<first 2 hex chars>/<remaining hex chars>`.
Writes are atomic (temp file + rename) so a crashed put never leaves a
truncated object behind. Values can optionally be zstd-compressed on disk;
reads detect compressed values by the zstd frame magic, so a store written
with and without compression stays readable.
"""
from __future__ import annotations

import logging
import os
import tempfile
import threading
from pathlib import Path

import zstandard as zstd

from ..errors import ObjectNotFoundError, StorageError
from .base import ReadableKVStore

__all__ = ["FileStore"]

logger = logging.getLogger(__name__)

OBJECTS_DIR = "objects"
ZSTD_MAGIC = b"\x28\xb5\x2f\xfd"


class FileStore(ReadableKVStore):
    """
    Directory-backed store with sharded object paths.

    Any OSError raised by the filesystem is re-raised as StorageError with
    the original error chained.
    """

    def __init__(self, root: Path | str, *, compress: bool = False, zstd_level: int = 3) -> None:
        """
        Initialize store rooted at `root` (created on first write).

        Args:
            root: Store directory
            compress: zstd-compress values written by this instance
            zstd_level: Compression level used when compress is set
        """
        self.root = Path(root)
        self.compress = compress
        self.zstd_level = zstd_level
        # zstd compressor objects are not safe to share across threads
        self._local = threading.local()
        logger.debug(f"File store at {self.root} (compress={compress}, level={zstd_level})")

    def path_for(self, key: bytes) -> Path:
        """Filesystem path holding the value for key."""
        if not key:
            raise ValueError("key must not be empty")
        hex_key = key.hex()
        return self.root / OBJECTS_DIR / hex_key[:2] / hex_key[2:]

    def has(self, key: bytes) -> bool:
        try:
            os.stat(self.path_for(key))
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f"Failed to check {key.hex()}: {e}") from e
        return True

    def put(self, key: bytes, value: bytes) -> None:
        target = self.path_for(key)
        payload = self._compressor().compress(value) if self.compress else value

        temp_path = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(prefix=".tmp.", dir=target.parent)
            with os.fdopen(fd, "wb") as out:
                out.write(payload)
                out.flush()
                os.fsync(out.fileno())
            os.replace(temp_path, target)
            temp_path = None
        except OSError as e:
            raise StorageError(f"Failed to write {key.hex()}: {e}") from e
        finally:
            if temp_path is not None:
                try:
                    os.unlink(temp_path)
                except OSError:
                    pass

    def get(self, key: bytes) -> bytes:
        try:
            payload = self.path_for(key).read_bytes()
        except FileNotFoundError:
            raise ObjectNotFoundError(key) from None
        except OSError as e:
            raise StorageError(f"Failed to read {key.hex()}: {e}") from e

        if payload.startswith(ZSTD_MAGIC):
            try:
                return zstd.ZstdDecompressor().decompress(payload)
            except zstd.ZstdError as e:
                raise StorageError(f"Corrupt compressed object {key.hex()}: {e}") from e
        return payload

    def __len__(self) -> int:
        objects_root = self.root / OBJECTS_DIR
        if not objects_root.is_dir():
            return 0
        return sum(
            1
            for shard in objects_root.iterdir() if shard.is_dir()
            for entry in shard.iterdir() if not entry.name.startswith(".tmp.")
        )

    def _compressor(self) -> zstd.ZstdCompressor:
        compressor = getattr(self._local, "compressor", None)
        if compressor is None:
            compressor = zstd.ZstdCompressor(level=self.zstd_level, write_content_size=True)
            self._local.compressor = compressor
        return compressor
