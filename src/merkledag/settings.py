"""
Settings and configuration for merkledag.

Centralizes configuration values and provides validation with fail-fast behavior.
Loads settings from environment variables when the CLI starts.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

from .hashing import HashFactory, hash_factory_for
from .models import DEFAULT_CHUNK_SIZE

__all__ = ["Settings", "create_settings_from_env"]


@dataclass(frozen=True)
class Settings:
    """
    Configuration settings for building and storing DAGs.

    Builder Settings:
        chunk_size: Maximum blob size in bytes; larger files are split
        hash_algorithm: hashlib algorithm name used for object digests
        follow_symlinks: Traverse symlinks when reading local directories

    Store Settings:
        store_dir: Root directory of the filesystem object store
        compress: zstd-compress objects written to disk
        zstd_level: zstd compression level (1-22)
    """
    # Store settings
    store_dir: str = ".merkledag"
    compress: bool = False
    zstd_level: int = 3

    # Builder settings
    chunk_size: int = DEFAULT_CHUNK_SIZE
    hash_algorithm: str = "sha256"
    follow_symlinks: bool = False

    def __post_init__(self):
        """Validate settings on construction."""
        if not self.store_dir:
            raise ValueError("store_dir is required")

        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")

        if not 1 <= self.zstd_level <= 22:
            raise ValueError(f"zstd_level must be between 1 and 22, got {self.zstd_level}")

        # Raises ValueError for unknown or variable-length algorithms
        hash_factory_for(self.hash_algorithm)

    @property
    def hash_factory(self) -> HashFactory:
        return hash_factory_for(self.hash_algorithm)


def create_settings_from_env() -> Settings:
    """
    Load settings from environment variables.

    Environment Variables:
        - MERKLEDAG_STORE_DIR (default: .merkledag)
        - MERKLEDAG_COMPRESS (default: false)
        - MERKLEDAG_ZSTD_LEVEL (default: 3)
        - MERKLEDAG_CHUNK_SIZE (default: 262144)
        - MERKLEDAG_HASH (default: sha256)
        - MERKLEDAG_FOLLOW_SYMLINKS (default: false)

    Returns:
        Settings object with validated configuration

    Raises:
        ValueError: If configuration is invalid

    Note:
        Creates a fresh Settings instance every time (no caching).
    """
    def str_to_bool(value: str) -> bool:
        return value.lower() in ('true', '1', 'yes', 'on')

    def get_int(key: str, default: int) -> int:
        value = os.getenv(key)
        if not value:
            return default
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"{key} must be an integer, got {value!r}") from None

    return Settings(
        store_dir=os.getenv("MERKLEDAG_STORE_DIR") or ".merkledag",
        compress=str_to_bool(os.getenv("MERKLEDAG_COMPRESS", "false")),
        zstd_level=get_int("MERKLEDAG_ZSTD_LEVEL", 3),
        chunk_size=get_int("MERKLEDAG_CHUNK_SIZE", DEFAULT_CHUNK_SIZE),
        hash_algorithm=os.getenv("MERKLEDAG_HASH") or "sha256",
        follow_symlinks=str_to_bool(os.getenv("MERKLEDAG_FOLLOW_SYMLINKS", "false")),
    )
