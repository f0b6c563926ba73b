"""Randomness sources for random modification creation.

The library never owns a process-wide random generator. Every operation that
needs randomness takes a ``RandomSource`` argument; harnesses pass a seeded
instance to make a campaign reproducible.
"""

from __future__ import annotations

import random
from typing import Protocol, runtime_checkable

from modvar.core.config import get_settings


@runtime_checkable
class RandomSource(Protocol):
    """Minimal randomness capability consumed by the catalog."""

    def next_uint(self, bound: int) -> int:
        """Return an integer in ``[0, bound)``."""
        ...

    def fill_random_bytes(self, buf: bytearray) -> None:
        """Overwrite every byte of ``buf`` with random data."""
        ...


class SeededRandom:
    """``RandomSource`` backed by ``random.Random``.

    Not suitable for anything security related; it exists to make fuzzing
    campaigns and tests reproducible.
    """

    def __init__(self, seed: int | None = None) -> None:
        if seed is None:
            seed = get_settings().random_seed
        self.seed = seed
        self._rng = random.Random(seed)

    def next_uint(self, bound: int) -> int:
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        return self._rng.randrange(bound)

    def fill_random_bytes(self, buf: bytearray) -> None:
        buf[:] = self._rng.randbytes(len(buf))

    def reseed(self, seed: int) -> None:
        self.seed = seed
        self._rng.seed(seed)

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self.seed})"


# ── Helpers ──────────────────────────────────────────────────────────────────


def next_bool(rng: RandomSource) -> bool:
    return rng.next_uint(2) == 1


def random_bytes(rng: RandomSource, length: int) -> bytes:
    """Return ``length`` random bytes drawn from ``rng``."""
    buf = bytearray(max(0, length))
    if buf:
        rng.fill_random_bytes(buf)
    return bytes(buf)


def signed_offset(rng: RandomSource, bound: int) -> int:
    """Return a value in ``(-bound, bound)``, sign chosen by a coin flip."""
    offset = rng.next_uint(max(1, bound))
    return -offset if next_bool(rng) else offset
