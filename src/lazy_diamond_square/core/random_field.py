"""
Random Field Module

Maps (seed, coordinate, level) to a reproducible displacement. Every
call hashes its own inputs, so results never depend on call order.
"""

from __future__ import annotations

import hashlib
import secrets
import struct
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Union

SEED_MASK = 0xFFFFFFFFFFFFFFFF

SeedLike = Union[int, str, bytes, None]


def normalize_seed(seed: SeedLike) -> int:
    """
    Turn a user supplied seed into a 64-bit unsigned integer.

    Strings and bytes are hashed; integers are reduced modulo 2^64.
    None draws a fresh random seed.
    """
    if seed is None:
        return secrets.randbits(64)
    if isinstance(seed, bool):
        raise TypeError("seed must be an int, str or bytes, got bool")
    if isinstance(seed, int):
        return seed & SEED_MASK
    if isinstance(seed, str):
        seed = seed.encode("utf-8")
    if isinstance(seed, bytes):
        digest = hashlib.blake2b(seed, digest_size=8).digest()
        return int.from_bytes(digest, "little")
    raise TypeError(f"seed must be an int, str or bytes, got {type(seed).__name__}")


class RandomField(ABC):
    """
    Abstract source of per-cell displacement.

    Implementations must be pure: identical arguments always give the
    identical float, independent of prior calls.
    """

    @abstractmethod
    def offset(self, seed: int, x: int, y: int, level: int) -> float:
        """Normalized displacement for a cell, nominally in [-0.5, 0.5)."""
        pass


class HashRandomField(RandomField):
    """
    Default field: BLAKE2b over the packed (seed, x, y, level) tuple.

    The 8-byte digest is read as an unsigned integer and scaled to
    [-0.5, 0.5).
    """

    _PACK = struct.Struct("<QqqH")
    _SCALE = 1.0 / 2**64

    def __init__(self, salt: bytes = b""):
        # blake2b accepts at most 16 bytes of salt
        self.salt = salt[:16]

    def offset(self, seed: int, x: int, y: int, level: int) -> float:
        payload = self._PACK.pack(seed & SEED_MASK, x, y, level)
        digest = hashlib.blake2b(payload, digest_size=8, salt=self.salt).digest()
        return int.from_bytes(digest, "little") * self._SCALE - 0.5

    def __repr__(self) -> str:
        return f"HashRandomField(salt={self.salt!r})"


@dataclass(frozen=True)
class ConstantField(RandomField):
    """Degenerate field returning the same value everywhere (0.0 = pure averaging)."""
    value: float = 0.0

    def offset(self, seed: int, x: int, y: int, level: int) -> float:
        return self.value


def default_field(field: Optional[RandomField] = None) -> RandomField:
    """Return `field`, or the shared default hash field."""
    return field if field is not None else _DEFAULT_FIELD


_DEFAULT_FIELD = HashRandomField()
