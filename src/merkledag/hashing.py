"""
Hash primitive plumbing.

The builder never shares hash state between digests: it takes a zero-argument
factory (e.g. hashlib.sha256) and creates a fresh hasher for every object.
"""
from __future__ import annotations

import hashlib
from functools import partial
from typing import Callable, Protocol

__all__ = ["Hasher", "HashFactory", "compute_digest", "hash_factory_for"]


class Hasher(Protocol):
    """Minimal hashlib-style accumulator."""

    def update(self, data: bytes, /) -> None:
        ...

    def digest(self) -> bytes:
        ...


HashFactory = Callable[[], Hasher]


def compute_digest(data: bytes, hash_factory: HashFactory = hashlib.sha256) -> bytes:
    """Digest `data` with a hasher created just for this call."""
    hasher = hash_factory()
    hasher.update(data)
    return hasher.digest()


def hash_factory_for(algorithm: str) -> HashFactory:
    """
    Resolve a hashlib algorithm name to a hash factory.

    Args:
        algorithm: Name accepted by hashlib.new (e.g. "sha256", "blake2b")

    Returns:
        Zero-argument callable producing a fresh hasher

    Raises:
        ValueError: If the algorithm is unknown or has no fixed digest size
    """
    name = algorithm.lower()
    if name not in hashlib.algorithms_available:
        raise ValueError(f"Unknown hash algorithm: {algorithm}")
    if name.startswith("shake_"):
        raise ValueError(f"Variable-length hash algorithm not supported: {algorithm}")
    return partial(hashlib.new, name)
