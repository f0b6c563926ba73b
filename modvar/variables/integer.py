"""Integer mutation cells: single byte, 32-bit, 64-bit and arbitrary precision."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field, field_validator

from modvar.catalog import integer as catalog
from modvar.core.randomness import RandomSource
from modvar.modifications.integer import (
    BYTE_BITS,
    INTEGER_BITS,
    LONG_BITS,
    IntegerModification,
    IntegerModificationBase,
    bit_length,
)
from modvar.variables.base import ModifiableVariable


def to_fixed_bytes(value: int, size: int, bits: int) -> bytes:
    """Big-endian encoding of the low ``size`` bytes of a ``bits`` wide value.

    Bytes above ``size`` are dropped; sizes wider than the value are padded
    with zeros, not sign extended.
    """
    if size < 1:
        raise ValueError(f"size must be at least 1, got {size}")
    width = min(size, bits // 8)
    return (value & ((1 << (8 * width)) - 1)).to_bytes(size, "big")


def to_unbounded_bytes(value: int, size: int | None = None) -> bytes:
    """Minimal big-endian two's complement encoding without a leading zero sign byte.

    With ``size`` the result is left padded with zeros to a multiple of ``size``.
    """
    if size is not None and size < 1:
        raise ValueError(f"size must be at least 1, got {size}")
    if value == 0:
        return bytes(size or 1)
    raw = value.to_bytes(bit_length(value, None) // 8 + 1, "big", signed=True)
    if len(raw) > 1 and raw[0] == 0:
        raw = raw[1:]
    if size is not None and len(raw) % size:
        raw = bytes(size - len(raw) % size) + raw
    return raw


class ModifiableInteger(ModifiableVariable):
    """Signed 32-bit cell. Arithmetic wraps at the width."""

    bits: ClassVar[int | None] = INTEGER_BITS

    original_value: int | None = None
    modifications: list[IntegerModification] = Field(default_factory=list)
    assert_equals: int | None = None

    @field_validator("original_value", "assert_equals")
    @classmethod
    def _fits_width(cls, v: int | None) -> int | None:
        if v is None or cls.bits is None:
            return v
        low, high = -(1 << (cls.bits - 1)), (1 << (cls.bits - 1)) - 1
        if not low <= v <= high:
            raise ValueError(f"{v} does not fit a signed {cls.bits}-bit integer")
        return v

    def _apply(self, modification: IntegerModificationBase, value: int | None) -> int | None:
        return modification.modify(value, self.bits)

    def _random_modification(self, rng: RandomSource) -> IntegerModificationBase:
        return catalog.create_random_modification(rng, self.bits)

    def get_byte_array(self, size: int | None = None) -> bytes | None:
        """Big-endian encoding of the current value, ``size`` bytes long (the width by default)."""
        value = self.value
        if value is None:
            return None
        return to_fixed_bytes(value, self.bits // 8 if size is None else size, self.bits)


class ModifiableLong(ModifiableInteger):
    """Signed 64-bit cell."""

    bits: ClassVar[int | None] = LONG_BITS


class ModifiableByte(ModifiableInteger):
    """Signed single byte cell (-128..127)."""

    bits: ClassVar[int | None] = BYTE_BITS


class ModifiableBigInteger(ModifiableInteger):
    """Arbitrary precision cell. Nothing wraps; shifts grow or shrink the value."""

    bits: ClassVar[int | None] = None

    def get_byte_array(self, size: int | None = None) -> bytes | None:
        value = self.value
        if value is None:
            return None
        return to_unbounded_bytes(value, size)
