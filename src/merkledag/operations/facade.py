"""
Operations Facade - Application service layer.

Provides a clean interface between the CLI and the builder, centralizing
command orchestration and configuration while keeping CLI commands thin
and testable.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..builder import BuildStats, DagBuilder
from ..codec import decode_object, object_tags
from ..models import DagObject, LinkTag
from ..settings import Settings
from ..sources import open_path
from ..storage.base import ReadableKVStore

__all__ = ["Operations", "OpsConfig", "AddResult", "ShowResult"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OpsConfig:
    """
    Configuration for Operations facade.

    Centralizes output policy so CLI commands don't carry their own flags
    around.
    """
    verbose: bool = False         # Include build statistics in add output


@dataclass(frozen=True)
class AddResult:
    """Outcome of adding a path to the store."""
    source: str
    root: bytes
    stats: BuildStats = field(default_factory=BuildStats)


@dataclass(frozen=True)
class ShowResult:
    """A single decoded object and its per-link tags."""
    digest: bytes
    obj: DagObject
    tags: List[LinkTag]
    encoded_size: int


class Operations:
    """
    Application service facade for CLI operations.

    Stateless except for injected config, settings and store. Exceptions
    bubble up for central exit-code mapping in run_and_exit().
    """

    def __init__(self, config: OpsConfig, *, settings: Optional[Settings] = None,
                 store: Optional[ReadableKVStore] = None):
        """
        Initialize Operations facade.

        Args:
            config: Output configuration
            settings: Optional settings (if None, loaded from environment)
            store: Object store (if None, created from settings)
        """
        self.cfg = config

        if settings is None:
            from ..settings import create_settings_from_env
            settings = create_settings_from_env()
        self.settings = settings

        if store is None:
            from ..storage.factory import store_from_settings
            store = store_from_settings(settings)
        self.store = store

    def add(self, path: str) -> AddResult:
        """
        Encode a local file or directory into the store.

        Args:
            path: File or directory to add

        Returns:
            AddResult with the root digest and build statistics
        """
        node = open_path(path, follow_symlinks=self.settings.follow_symlinks)
        builder = DagBuilder.from_settings(self.store, self.settings)
        try:
            root = builder.add(node)
        except Exception as e:
            logger.error(f"Failed to add {path}: {e}")
            raise
        return AddResult(source=path, root=root, stats=builder.stats)

    def report_add(self, result: AddResult) -> None:
        """Print an add outcome, with statistics when the config is verbose."""
        from .printers import print_add_summary
        print_add_summary(result, verbose=self.cfg.verbose)

    def show(self, digest_hex: str) -> ShowResult:
        """
        Load and decode one stored object.

        Args:
            digest_hex: Object digest as a hex string

        Returns:
            ShowResult with the decoded object and its link tags

        Raises:
            ValueError: If digest_hex is not valid hex
            ObjectNotFoundError: If no object is stored under the digest
            SerializationError: If the stored bytes cannot be decoded
        """
        try:
            digest = bytes.fromhex(digest_hex.strip())
        except ValueError:
            raise ValueError(f"Invalid digest: {digest_hex!r} is not hex") from None
        if not digest:
            raise ValueError("Invalid digest: empty")

        raw = self.store.get(digest)
        obj = decode_object(raw)
        return ShowResult(digest=digest, obj=obj, tags=object_tags(obj), encoded_size=len(raw))
