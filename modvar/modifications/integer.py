"""Integer modifications for signed 8-, 32- and 64-bit and arbitrary precision values.

Modifications are width agnostic parameter records; the variable supplies the
width when applying them. At a fixed width arithmetic wraps using two's
complement, shift counts are reduced modulo the width, and every result is
brought back into the signed range of the width. Overflow is an expected
outcome here: the point is to see how a target reacts to wrapped values.
With ``bits=None`` values are unbounded and nothing wraps.

What happens when there is no original value depends on the operation *and*
the width (see ``_ABSENT_POLICY`` below); each combination is pinned by tests.
"""

from __future__ import annotations

from typing import Annotated, Callable, Literal, Union

from pydantic import Field

from modvar.core.errors import MissingOriginalValueError
from modvar.core.randomness import RandomSource, next_bool, signed_offset
from modvar.modifications.base import (
    MAX_BYTE_VALUE,
    VariableModification,
    log_modification,
    perturb_position,
    trunc_rem,
)

INTEGER_BITS = 32
LONG_BITS = 64
BYTE_BITS = 8
SUPPORTED_WIDTHS = (BYTE_BITS, INTEGER_BITS, LONG_BITS, None)

MAX_SHIFT_MODIFIER = 32


class IntegerModificationBase(VariableModification):
    """Common interface of the integer family."""

    def modify(self, value: int | None, bits: int | None = INTEGER_BITS) -> int | None:
        return modify_integer(self, value, bits)

    def modified_copy(self, rng: RandomSource) -> IntegerModificationBase:
        return integer_neighbor(self, rng)


class IntegerAddModification(IntegerModificationBase):
    kind: Literal["integer_add"] = "integer_add"
    summand: int


class IntegerSubtractModification(IntegerModificationBase):
    kind: Literal["integer_subtract"] = "integer_subtract"
    subtrahend: int


class IntegerMultiplyModification(IntegerModificationBase):
    kind: Literal["integer_multiply"] = "integer_multiply"
    factor: int


class IntegerXorModification(IntegerModificationBase):
    kind: Literal["integer_xor"] = "integer_xor"
    xor: int


class IntegerShiftLeftModification(IntegerModificationBase):
    kind: Literal["integer_shift_left"] = "integer_shift_left"
    shift: int


class IntegerShiftRightModification(IntegerModificationBase):
    """Arithmetic (sign preserving) right shift."""

    kind: Literal["integer_shift_right"] = "integer_shift_right"
    shift: int


class IntegerSwapEndianModification(IntegerModificationBase):
    kind: Literal["integer_swap_endian"] = "integer_swap_endian"


class IntegerExplicitValueModification(IntegerModificationBase):
    kind: Literal["integer_explicit_value"] = "integer_explicit_value"
    explicit_value: int


class IntegerExplicitValueFromFileModification(IntegerModificationBase):
    kind: Literal["integer_explicit_value_from_file"] = "integer_explicit_value_from_file"
    index: int
    explicit_value: int


class IntegerAppendValueModification(IntegerModificationBase):
    """Append the bits of ``append_value`` below the input's bits."""

    kind: Literal["integer_append_value"] = "integer_append_value"
    append_value: int


class IntegerPrependValueModification(IntegerModificationBase):
    """Place the bits of ``prepend_value`` above the input's highest set bit."""

    kind: Literal["integer_prepend_value"] = "integer_prepend_value"
    prepend_value: int


class IntegerInsertValueModification(IntegerModificationBase):
    """Insert the bits of ``insert_value`` at a bit offset of the input."""

    kind: Literal["integer_insert_value"] = "integer_insert_value"
    insert_value: int
    start_position: int


IntegerModification = Annotated[
    Union[
        IntegerAddModification,
        IntegerSubtractModification,
        IntegerMultiplyModification,
        IntegerXorModification,
        IntegerShiftLeftModification,
        IntegerShiftRightModification,
        IntegerSwapEndianModification,
        IntegerExplicitValueModification,
        IntegerExplicitValueFromFileModification,
        IntegerAppendValueModification,
        IntegerPrependValueModification,
        IntegerInsertValueModification,
    ],
    Field(discriminator="kind"),
]


# ── Width arithmetic ─────────────────────────────────────────────────────────
#
# ``bits`` is 8, 32 or 64 for fixed-width cells and ``None`` for arbitrary
# precision, where nothing wraps and shift counts are used as given.


def to_signed(value: int, bits: int) -> int:
    """Wrap ``value`` into the signed two's complement range of ``bits``."""
    value &= (1 << bits) - 1
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _fit(value: int, bits: int | None) -> int:
    return value if bits is None else to_signed(value, bits)


def bit_length(value: int, bits: int | None) -> int:
    """Position of the highest set bit + 1.

    Fixed widths view ``value`` as unsigned. Arbitrary precision counts the
    minimal two's complement form without its sign bit, so ``-1`` has length 0.
    """
    if bits is None:
        return (~value if value < 0 else value).bit_length()
    return (value & ((1 << bits) - 1)).bit_length()


def _shift(value: int, shift: int) -> int:
    return value << shift if shift >= 0 else value >> -shift


def shift_left(value: int, shift: int, bits: int | None) -> int:
    if bits is None:
        return _shift(value, shift)
    return to_signed(value << (shift % bits), bits)


def shift_right(value: int, shift: int, bits: int | None) -> int:
    if bits is None:
        return _shift(value, -shift)
    return to_signed(value, bits) >> (shift % bits)


def swap_endian(value: int, bits: int | None) -> int:
    """Reverse the byte order (of the minimal encoding for arbitrary precision)."""
    size = bit_length(value, None) // 8 + 1 if bits is None else bits // 8
    raw = _fit(value, bits).to_bytes(size, "big", signed=True)
    return int.from_bytes(raw[::-1], "big", signed=True)


def insert_position(start_position: int, bits: int) -> int:
    """Bit offset for insert: remainder by width, negatives moved up by width - 1."""
    position = trunc_rem(start_position, bits)
    if start_position < 0:
        position += bits - 1
    return position


def unbounded_insert_position(start_position: int, length: int) -> int:
    """Bit offset for insert into a value of ``length`` bits; the end is a valid slot."""
    position = trunc_rem(start_position, length + 1)
    if start_position < 0:
        position += length
    return position


def insert_bits(value: int, insert_value: int, start_position: int, bits: int | None) -> int:
    length = bit_length(insert_value, bits)
    if bits is None:
        position = unbounded_insert_position(start_position, bit_length(value, None))
    else:
        position = insert_position(start_position, bits)
    low_mask = (1 << position) - 1
    high = shift_left(shift_right(value, position, bits), length, bits) | _fit(insert_value, bits)
    return _fit(shift_left(high, position, bits) | (low_mask & value), bits)


# ── Algorithms ───────────────────────────────────────────────────────────────


def _add(mod: IntegerAddModification, value: int, bits: int | None) -> int:
    return _fit(value + mod.summand, bits)


def _subtract(mod: IntegerSubtractModification, value: int, bits: int | None) -> int:
    return _fit(value - mod.subtrahend, bits)


def _multiply(mod: IntegerMultiplyModification, value: int, bits: int | None) -> int:
    return _fit(value * mod.factor, bits)


def _xor(mod: IntegerXorModification, value: int, bits: int | None) -> int:
    return _fit(value ^ mod.xor, bits)


def _shift_left(mod: IntegerShiftLeftModification, value: int, bits: int | None) -> int:
    return shift_left(value, mod.shift, bits)


def _shift_right(mod: IntegerShiftRightModification, value: int, bits: int | None) -> int:
    return shift_right(value, mod.shift, bits)


def _swap_endian(mod: IntegerSwapEndianModification, value: int, bits: int | None) -> int:
    return swap_endian(value, bits)


def _explicit(
    mod: IntegerExplicitValueModification | IntegerExplicitValueFromFileModification,
    value: int,
    bits: int | None,
) -> int:
    return _fit(mod.explicit_value, bits)


def _append(mod: IntegerAppendValueModification, value: int, bits: int | None) -> int:
    length = bit_length(mod.append_value, bits)
    return _fit(shift_left(value, length, bits) | _fit(mod.append_value, bits), bits)


def _prepend(mod: IntegerPrependValueModification, value: int, bits: int | None) -> int:
    length = bit_length(value, bits)
    return _fit(shift_left(mod.prepend_value, length, bits) | _fit(value, bits), bits)


def _insert(mod: IntegerInsertValueModification, value: int, bits: int | None) -> int:
    return insert_bits(value, mod.insert_value, mod.start_position, bits)


_HANDLERS: dict[type, Callable[..., int]] = {
    IntegerAddModification: _add,
    IntegerSubtractModification: _subtract,
    IntegerMultiplyModification: _multiply,
    IntegerXorModification: _xor,
    IntegerShiftLeftModification: _shift_left,
    IntegerShiftRightModification: _shift_right,
    IntegerSwapEndianModification: _swap_endian,
    IntegerExplicitValueModification: _explicit,
    IntegerExplicitValueFromFileModification: _explicit,
    IntegerAppendValueModification: _append,
    IntegerPrependValueModification: _prepend,
    IntegerInsertValueModification: _insert,
}


# ── Unset originals ──────────────────────────────────────────────────────────
#
# UNSET keeps the result unset, ZERO runs the operation on 0, REFUSE raises
# MissingOriginalValueError.

_UNSET = "unset"
_ZERO = "zero"
_REFUSE = "refuse"


def _policy(byte: str, integer: str, long: str, unbounded: str) -> dict[int | None, str]:
    return dict(zip(SUPPORTED_WIDTHS, (byte, integer, long, unbounded)))


_ABSENT_POLICY: dict[type, dict[int | None, str]] = {
    # 8-bit, 32-bit, 64-bit, arbitrary precision
    IntegerAddModification: _policy(_UNSET, _ZERO, _ZERO, _ZERO),
    IntegerSubtractModification: _policy(_ZERO, _ZERO, _UNSET, _ZERO),
    IntegerMultiplyModification: _policy(_UNSET, _UNSET, _ZERO, _ZERO),
    IntegerXorModification: _policy(_ZERO, _ZERO, _ZERO, _ZERO),
    IntegerShiftLeftModification: _policy(_UNSET, _UNSET, _UNSET, _ZERO),
    IntegerShiftRightModification: _policy(_UNSET, _UNSET, _ZERO, _UNSET),
    IntegerSwapEndianModification: _policy(_UNSET, _UNSET, _UNSET, _UNSET),
    IntegerExplicitValueModification: _policy(_ZERO, _ZERO, _REFUSE, _ZERO),
    IntegerExplicitValueFromFileModification: _policy(_ZERO, _ZERO, _REFUSE, _ZERO),
    IntegerAppendValueModification: _policy(_ZERO, _ZERO, _ZERO, _ZERO),
    IntegerPrependValueModification: _policy(_ZERO, _ZERO, _ZERO, _ZERO),
    IntegerInsertValueModification: _policy(_ZERO, _ZERO, _ZERO, _ZERO),
}


def modify_integer(
    modification: IntegerModificationBase, value: int | None, bits: int | None = INTEGER_BITS
) -> int | None:
    """Apply one integer modification to ``value`` at the given width.

    Raises:
        MissingOriginalValueError: if the operation refuses an unset value at this width.
        ValueError: for a width other than 8, 32, 64 or ``None``.
    """
    if bits not in SUPPORTED_WIDTHS:
        raise ValueError(f"unsupported integer width: {bits}")
    if value is None:
        policy = _ABSENT_POLICY[type(modification)][bits]
        if policy == _REFUSE:
            raise MissingOriginalValueError(
                f"{type(modification).__name__} replaces an existing {bits}-bit value, "
                "but the original value is unset"
            )
        value = 0 if policy == _ZERO else None
    result = None if value is None else _HANDLERS[type(modification)](modification, value, bits)
    log_modification(modification, result)
    return result


# ── Random neighbors ─────────────────────────────────────────────────────────


def _nudge(rng: RandomSource, value: int) -> int:
    offset = rng.next_uint(MAX_BYTE_VALUE)
    return value + offset if next_bool(rng) else value - offset


def _neighbor_add(mod: IntegerAddModification, rng: RandomSource):
    return IntegerAddModification(summand=mod.summand + rng.next_uint(MAX_BYTE_VALUE))


def _neighbor_subtract(mod: IntegerSubtractModification, rng: RandomSource):
    return IntegerSubtractModification(subtrahend=mod.subtrahend + rng.next_uint(MAX_BYTE_VALUE))


def _neighbor_multiply(mod: IntegerMultiplyModification, rng: RandomSource):
    return IntegerMultiplyModification(factor=mod.factor + rng.next_uint(MAX_BYTE_VALUE))


def _neighbor_xor(mod: IntegerXorModification, rng: RandomSource):
    return IntegerXorModification(xor=_nudge(rng, mod.xor))


def _shifted(rng: RandomSource, shift: int) -> int:
    shift += signed_offset(rng, MAX_SHIFT_MODIFIER)
    if shift < 0:
        return MAX_SHIFT_MODIFIER - 1
    if shift > MAX_SHIFT_MODIFIER - 1:
        return 0
    return shift


def _neighbor_shift_left(mod: IntegerShiftLeftModification, rng: RandomSource):
    return IntegerShiftLeftModification(shift=_shifted(rng, mod.shift))


def _neighbor_shift_right(mod: IntegerShiftRightModification, rng: RandomSource):
    return IntegerShiftRightModification(shift=_shifted(rng, mod.shift))


def _neighbor_swap_endian(mod: IntegerSwapEndianModification, rng: RandomSource):
    return IntegerSwapEndianModification()


def _neighbor_explicit(mod: IntegerExplicitValueModification, rng: RandomSource):
    return IntegerExplicitValueModification(explicit_value=_nudge(rng, mod.explicit_value))


def _neighbor_from_file(mod: IntegerExplicitValueFromFileModification, rng: RandomSource):
    return mod


def _neighbor_append(mod: IntegerAppendValueModification, rng: RandomSource):
    return IntegerAppendValueModification(append_value=mod.append_value + rng.next_uint(MAX_BYTE_VALUE))


def _neighbor_prepend(mod: IntegerPrependValueModification, rng: RandomSource):
    return IntegerPrependValueModification(prepend_value=mod.prepend_value + rng.next_uint(MAX_BYTE_VALUE))


def _neighbor_insert(mod: IntegerInsertValueModification, rng: RandomSource):
    if next_bool(rng):
        return mod.model_copy(update={"insert_value": mod.insert_value + rng.next_uint(MAX_BYTE_VALUE)})
    return mod.model_copy(update={"start_position": perturb_position(rng, mod.start_position)})


_NEIGHBORS: dict[type, Callable[..., IntegerModificationBase]] = {
    IntegerAddModification: _neighbor_add,
    IntegerSubtractModification: _neighbor_subtract,
    IntegerMultiplyModification: _neighbor_multiply,
    IntegerXorModification: _neighbor_xor,
    IntegerShiftLeftModification: _neighbor_shift_left,
    IntegerShiftRightModification: _neighbor_shift_right,
    IntegerSwapEndianModification: _neighbor_swap_endian,
    IntegerExplicitValueModification: _neighbor_explicit,
    IntegerExplicitValueFromFileModification: _neighbor_from_file,
    IntegerAppendValueModification: _neighbor_append,
    IntegerPrependValueModification: _neighbor_prepend,
    IntegerInsertValueModification: _neighbor_insert,
}


def integer_neighbor(modification: IntegerModificationBase, rng: RandomSource) -> IntegerModificationBase:
    """Return a modification of the same kind with slightly perturbed parameters."""
    return _NEIGHBORS[type(modification)](modification, rng)
