"""Integer modification catalog for single byte, 32-bit, 64-bit and arbitrary precision variables."""

from __future__ import annotations

from enum import Enum
from typing import Callable

from modvar.catalog.explicit_values import get_explicit_values
from modvar.core.config import Settings, get_settings
from modvar.core.randomness import RandomSource
from modvar.modifications.integer import (
    BYTE_BITS,
    INTEGER_BITS,
    LONG_BITS,
    IntegerAddModification,
    IntegerAppendValueModification,
    IntegerExplicitValueFromFileModification,
    IntegerExplicitValueModification,
    IntegerInsertValueModification,
    IntegerModificationBase,
    IntegerMultiplyModification,
    IntegerPrependValueModification,
    IntegerShiftLeftModification,
    IntegerShiftRightModification,
    IntegerSubtractModification,
    IntegerSwapEndianModification,
    IntegerXorModification,
)


class ModificationType(str, Enum):
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    XOR = "xor"
    SWAP_ENDIAN = "swap_endian"
    EXPLICIT = "explicit"
    SHIFT_LEFT = "shift_left"
    SHIFT_RIGHT = "shift_right"
    EXPLICIT_FROM_FILE = "explicit_from_file"
    APPEND = "append"
    INSERT = "insert"
    PREPEND = "prepend"


# ── Named constructors ───────────────────────────────────────────────────────


def add(summand: int) -> IntegerAddModification:
    return IntegerAddModification(summand=summand)


def sub(subtrahend: int) -> IntegerSubtractModification:
    return IntegerSubtractModification(subtrahend=subtrahend)


def multiply(factor: int) -> IntegerMultiplyModification:
    return IntegerMultiplyModification(factor=factor)


def xor(value: int) -> IntegerXorModification:
    return IntegerXorModification(xor=value)


def shift_left(shift: int) -> IntegerShiftLeftModification:
    return IntegerShiftLeftModification(shift=shift)


def shift_right(shift: int) -> IntegerShiftRightModification:
    return IntegerShiftRightModification(shift=shift)


def swap_endian() -> IntegerSwapEndianModification:
    return IntegerSwapEndianModification()


def explicit_value(value: int) -> IntegerExplicitValueModification:
    return IntegerExplicitValueModification(explicit_value=value)


def explicit_value_from_file(index: int, bits: int | None = INTEGER_BITS) -> IntegerExplicitValueFromFileModification:
    """Explicit value from the vector section matching the width.

    ``byte`` for 8 bits, ``integer`` for 32, ``long`` for 64 and
    ``big_integer`` for arbitrary precision.
    """
    vectors = get_explicit_values()
    values = {
        BYTE_BITS: vectors.byte,
        INTEGER_BITS: vectors.integer,
        LONG_BITS: vectors.long,
        None: vectors.big_integer,
    }[bits]
    position = index % len(values)
    return IntegerExplicitValueFromFileModification(index=position, explicit_value=values[position])


def append_value(value: int) -> IntegerAppendValueModification:
    return IntegerAppendValueModification(append_value=value)


def prepend_value(value: int) -> IntegerPrependValueModification:
    return IntegerPrependValueModification(prepend_value=value)


def insert_value(value: int, start_position: int) -> IntegerInsertValueModification:
    return IntegerInsertValueModification(insert_value=value, start_position=start_position)


# ── Random creation ──────────────────────────────────────────────────────────

_BYTE_TYPES = (
    ModificationType.ADD,
    ModificationType.SUBTRACT,
    ModificationType.XOR,
    ModificationType.EXPLICIT,
    ModificationType.EXPLICIT_FROM_FILE,
)
_UNBOUNDED_TYPES = tuple(t for t in ModificationType if t is not ModificationType.SWAP_ENDIAN)


def modification_types(bits: int | None = INTEGER_BITS) -> tuple[ModificationType, ...]:
    """Variants random creation draws from at a width."""
    if bits == BYTE_BITS:
        return _BYTE_TYPES
    if bits is None:
        return _UNBOUNDED_TYPES
    return tuple(ModificationType)


def _modification_value(rng: RandomSource, bits: int | None, settings: Settings) -> int:
    if bits == BYTE_BITS:
        return rng.next_uint(settings.byte_max_modification_value)
    if bits is None:
        return rng.next_uint(settings.big_integer_max_modification_value)
    return rng.next_uint(settings.integer_max_modification_value)


def _shift_value(rng: RandomSource, bits: int | None, settings: Settings) -> int:
    if bits is None:
        return rng.next_uint(settings.big_integer_max_shift_value)
    return rng.next_uint(min(settings.integer_max_shift_value, bits))


def _insert_position(rng: RandomSource, bits: int | None, settings: Settings) -> int:
    if bits is None:
        return rng.next_uint(settings.big_integer_max_insert_position)
    return rng.next_uint(min(settings.integer_max_insert_position, bits))


def _file_index(rng: RandomSource, bits: int | None, settings: Settings) -> int:
    if bits == BYTE_BITS:
        return rng.next_uint(settings.byte_max_file_entries)
    return rng.next_uint(settings.integer_max_file_entries)


def _random_add(rng: RandomSource, bits: int | None, settings: Settings) -> IntegerModificationBase:
    return add(_modification_value(rng, bits, settings))


def _random_subtract(rng: RandomSource, bits: int | None, settings: Settings) -> IntegerModificationBase:
    return sub(_modification_value(rng, bits, settings))


def _random_multiply(rng: RandomSource, bits: int | None, settings: Settings) -> IntegerModificationBase:
    return multiply(rng.next_uint(settings.integer_max_multiply_value))


def _random_xor(rng: RandomSource, bits: int | None, settings: Settings) -> IntegerModificationBase:
    return xor(_modification_value(rng, bits, settings))


def _random_swap_endian(rng: RandomSource, bits: int | None, settings: Settings) -> IntegerModificationBase:
    return swap_endian()


def _random_explicit(rng: RandomSource, bits: int | None, settings: Settings) -> IntegerModificationBase:
    return explicit_value(_modification_value(rng, bits, settings))


def _random_shift_left(rng: RandomSource, bits: int | None, settings: Settings) -> IntegerModificationBase:
    return shift_left(_shift_value(rng, bits, settings))


def _random_shift_right(rng: RandomSource, bits: int | None, settings: Settings) -> IntegerModificationBase:
    return shift_right(_shift_value(rng, bits, settings))


def _random_from_file(rng: RandomSource, bits: int | None, settings: Settings) -> IntegerModificationBase:
    return explicit_value_from_file(_file_index(rng, bits, settings), bits)


def _random_append(rng: RandomSource, bits: int | None, settings: Settings) -> IntegerModificationBase:
    return append_value(rng.next_uint(settings.integer_max_insert_value))


def _random_insert(rng: RandomSource, bits: int | None, settings: Settings) -> IntegerModificationBase:
    value = rng.next_uint(settings.integer_max_insert_value)
    return insert_value(value, _insert_position(rng, bits, settings))


def _random_prepend(rng: RandomSource, bits: int | None, settings: Settings) -> IntegerModificationBase:
    return prepend_value(rng.next_uint(settings.integer_max_insert_value))


_CREATORS: dict[ModificationType, Callable[[RandomSource, int | None, Settings], IntegerModificationBase]] = {
    ModificationType.ADD: _random_add,
    ModificationType.SUBTRACT: _random_subtract,
    ModificationType.MULTIPLY: _random_multiply,
    ModificationType.XOR: _random_xor,
    ModificationType.SWAP_ENDIAN: _random_swap_endian,
    ModificationType.EXPLICIT: _random_explicit,
    ModificationType.SHIFT_LEFT: _random_shift_left,
    ModificationType.SHIFT_RIGHT: _random_shift_right,
    ModificationType.EXPLICIT_FROM_FILE: _random_from_file,
    ModificationType.APPEND: _random_append,
    ModificationType.INSERT: _random_insert,
    ModificationType.PREPEND: _random_prepend,
}


def create_random_modification(rng: RandomSource, bits: int | None = INTEGER_BITS) -> IntegerModificationBase:
    """Pick a random variant for a cell of width ``bits`` (``None``: arbitrary precision).

    Single bytes only draw add, subtract, xor and explicit values; arbitrary
    precision never draws swap endian. Shift amounts and insert positions stay
    below a fixed width.
    """
    settings = get_settings()
    types = modification_types(bits)
    mod_type = types[rng.next_uint(len(types))]
    return _CREATORS[mod_type](rng, bits, settings)
