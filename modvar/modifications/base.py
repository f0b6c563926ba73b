"""Shared building blocks for modification families."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel

from modvar.core.hexbytes import bytes_to_hex
from modvar.core.randomness import RandomSource, signed_offset

logger = logging.getLogger("modvar.modifications")

# Bound for random offsets applied to positions and counts by neighbor operators
MAX_POSITION_MODIFIER = 32
# Exclusive upper bound for a single random byte / character
MAX_BYTE_VALUE = 256


class VariableModification(BaseModel):
    """A parameter record for one transformation.

    Instances are immutable; equality and hashing go by variant and
    parameters. Each data kind derives a family base class exposing
    ``modify`` and ``modified_copy`` on top of a single dispatch table.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    kind: str

    def __str__(self) -> str:
        params = ", ".join(
            f"{name}={format_value(getattr(self, name))}"
            for name in type(self).model_fields
            if name != "kind"
        )
        return f"{type(self).__name__}{{{params}}}"


# ── Helpers ──────────────────────────────────────────────────────────────────


def trunc_rem(dividend: int, divisor: int) -> int:
    """Remainder with the sign of the dividend (C-style ``%``)."""
    remainder = abs(dividend) % divisor
    return -remainder if dividend < 0 else remainder


def perturb_position(rng: RandomSource, position: int) -> int:
    """Shift ``position`` by a random offset, keeping the result at least 1."""
    moved = position + signed_offset(rng, MAX_POSITION_MODIFIER)
    return 1 if moved <= 0 else moved


def escape_string(value: str) -> str:
    return value.encode("unicode_escape").decode("ascii")


def format_value(value: Any) -> str:
    if isinstance(value, bytes):
        return bytes_to_hex(value)
    if isinstance(value, str):
        return escape_string(value)
    return str(value)


def log_modification(modification: VariableModification, result: Any) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    if result is None:
        logger.debug("Using %s, new value is unset", modification, extra={"modification": modification.kind})
    else:
        logger.debug(
            "Using %s, new value: %s",
            modification,
            format_value(result),
            extra={"modification": modification.kind},
        )
