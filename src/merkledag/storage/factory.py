"""
Store factory driven by settings.
"""
from __future__ import annotations

from ..settings import Settings
from .filesystem import FileStore


def store_from_settings(settings: Settings) -> FileStore:
    """
    Create the filesystem store configured by settings.

    Args:
        settings: Configuration with store_dir and compression options

    Returns:
        FileStore rooted at settings.store_dir
    """
    return FileStore(
        settings.store_dir,
        compress=settings.compress,
        zstd_level=settings.zstd_level,
    )
