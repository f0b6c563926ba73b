"""Shortcut constructors returning a fresh cell that carries one modification.

Handy in harness code and tests where the original value is filled in later::

    record.length = modifiable.add(5)
    record.payload = modifiable.xor(b"\\xff", 0)

The cell kind follows the argument type (``bytes`` -> byte array, ``str`` ->
string, ``int`` -> 32-bit integer, ``bool`` -> boolean). Use the ``*_long``,
``*_byte`` and ``*_big_integer`` variants for the other integer widths.
"""

from __future__ import annotations

from functools import singledispatch
from typing import Any

from modvar.catalog import boolean as boolean_catalog
from modvar.catalog import byte_array as byte_array_catalog
from modvar.catalog import integer as integer_catalog
from modvar.catalog import string as string_catalog
from modvar.modifications.base import VariableModification
from modvar.variables.base import ModifiableVariable
from modvar.variables.boolean import ModifiableBoolean
from modvar.variables.byte_array import ModifiableByteArray
from modvar.variables.integer import ModifiableBigInteger, ModifiableByte, ModifiableInteger, ModifiableLong
from modvar.variables.string import ModifiableString


def _with(variable: ModifiableVariable, modification: VariableModification) -> Any:
    variable.set_modifications([modification])
    return variable


def _unsupported(name: str, value: Any) -> TypeError:
    return TypeError(f"{name}() does not support {type(value).__name__}")


# ── Type dispatched ──────────────────────────────────────────────────────────


@singledispatch
def prepend(value: Any) -> ModifiableVariable:
    raise _unsupported("prepend", value)


@prepend.register
def _(value: bytes) -> ModifiableByteArray:
    return _with(ModifiableByteArray(), byte_array_catalog.prepend_value(value))


@prepend.register
def _(value: str) -> ModifiableString:
    return _with(ModifiableString(), string_catalog.prepend_value(value))


@singledispatch
def append(value: Any) -> ModifiableVariable:
    raise _unsupported("append", value)


@append.register
def _(value: bytes) -> ModifiableByteArray:
    return _with(ModifiableByteArray(), byte_array_catalog.append_value(value))


@append.register
def _(value: str) -> ModifiableString:
    return _with(ModifiableString(), string_catalog.append_value(value))


@singledispatch
def explicit(value: Any) -> ModifiableVariable:
    raise _unsupported("explicit", value)


@explicit.register
def _(value: bytes) -> ModifiableByteArray:
    return _with(ModifiableByteArray(), byte_array_catalog.explicit_value(value))


@explicit.register
def _(value: int) -> ModifiableInteger:
    return _with(ModifiableInteger(), integer_catalog.explicit_value(value))


@explicit.register
def _(value: bool) -> ModifiableBoolean:
    return _with(ModifiableBoolean(), boolean_catalog.explicit_value(value))


@explicit.register
def _(value: str) -> ModifiableString:
    return _with(ModifiableString(), string_catalog.explicit_value(value))


@singledispatch
def insert(value: Any, position: int) -> ModifiableVariable:
    raise _unsupported("insert", value)


@insert.register
def _(value: bytes, position: int) -> ModifiableByteArray:
    return _with(ModifiableByteArray(), byte_array_catalog.insert_value(value, position))


@insert.register
def _(value: str, position: int) -> ModifiableString:
    return _with(ModifiableString(), string_catalog.insert_value(value, position))


@singledispatch
def xor(value: Any, *args: int) -> ModifiableVariable:
    raise _unsupported("xor", value)


@xor.register
def _(value: bytes, position: int) -> ModifiableByteArray:
    return _with(ModifiableByteArray(), byte_array_catalog.xor(value, position))


@xor.register
def _(value: int) -> ModifiableInteger:
    return _with(ModifiableInteger(), integer_catalog.xor(value))


# ── Byte arrays ──────────────────────────────────────────────────────────────


def delete(start_position: int, count: int) -> ModifiableByteArray:
    return _with(ModifiableByteArray(), byte_array_catalog.delete(start_position, count))


def shuffle(indices: list[int] | tuple[int, ...]) -> ModifiableByteArray:
    return _with(ModifiableByteArray(), byte_array_catalog.shuffle(indices))


def duplicate() -> ModifiableByteArray:
    return _with(ModifiableByteArray(), byte_array_catalog.duplicate())


# ── Booleans ─────────────────────────────────────────────────────────────────


def toggle() -> ModifiableBoolean:
    return _with(ModifiableBoolean(), boolean_catalog.toggle())


# ── 32-bit integers ──────────────────────────────────────────────────────────


def add(summand: int) -> ModifiableInteger:
    return _with(ModifiableInteger(), integer_catalog.add(summand))


def sub(subtrahend: int) -> ModifiableInteger:
    return _with(ModifiableInteger(), integer_catalog.sub(subtrahend))


def multiply(factor: int) -> ModifiableInteger:
    return _with(ModifiableInteger(), integer_catalog.multiply(factor))


def shift_left(shift: int) -> ModifiableInteger:
    return _with(ModifiableInteger(), integer_catalog.shift_left(shift))


def shift_right(shift: int) -> ModifiableInteger:
    return _with(ModifiableInteger(), integer_catalog.shift_right(shift))


def swap_endian_integer() -> ModifiableInteger:
    return _with(ModifiableInteger(), integer_catalog.swap_endian())


# ── 64-bit integers ──────────────────────────────────────────────────────────


def explicit_long(value: int) -> ModifiableLong:
    return _with(ModifiableLong(), integer_catalog.explicit_value(value))


def xor_long(value: int) -> ModifiableLong:
    return _with(ModifiableLong(), integer_catalog.xor(value))


def add_long(summand: int) -> ModifiableLong:
    return _with(ModifiableLong(), integer_catalog.add(summand))


def sub_long(subtrahend: int) -> ModifiableLong:
    return _with(ModifiableLong(), integer_catalog.sub(subtrahend))


def multiply_long(factor: int) -> ModifiableLong:
    return _with(ModifiableLong(), integer_catalog.multiply(factor))


def shift_left_long(shift: int) -> ModifiableLong:
    return _with(ModifiableLong(), integer_catalog.shift_left(shift))


def shift_right_long(shift: int) -> ModifiableLong:
    return _with(ModifiableLong(), integer_catalog.shift_right(shift))


def swap_endian_long() -> ModifiableLong:
    return _with(ModifiableLong(), integer_catalog.swap_endian())


# ── Single bytes ─────────────────────────────────────────────────────────────


def explicit_byte(value: int) -> ModifiableByte:
    return _with(ModifiableByte(), integer_catalog.explicit_value(value))


def add_byte(summand: int) -> ModifiableByte:
    return _with(ModifiableByte(), integer_catalog.add(summand))


def sub_byte(subtrahend: int) -> ModifiableByte:
    return _with(ModifiableByte(), integer_catalog.sub(subtrahend))


def xor_byte(value: int) -> ModifiableByte:
    return _with(ModifiableByte(), integer_catalog.xor(value))


# ── Arbitrary precision integers ─────────────────────────────────────────────


def explicit_big_integer(value: int) -> ModifiableBigInteger:
    return _with(ModifiableBigInteger(), integer_catalog.explicit_value(value))


def add_big_integer(summand: int) -> ModifiableBigInteger:
    return _with(ModifiableBigInteger(), integer_catalog.add(summand))


def sub_big_integer(subtrahend: int) -> ModifiableBigInteger:
    return _with(ModifiableBigInteger(), integer_catalog.sub(subtrahend))


def multiply_big_integer(factor: int) -> ModifiableBigInteger:
    return _with(ModifiableBigInteger(), integer_catalog.multiply(factor))


def xor_big_integer(value: int) -> ModifiableBigInteger:
    return _with(ModifiableBigInteger(), integer_catalog.xor(value))


def shift_left_big_integer(shift: int) -> ModifiableBigInteger:
    return _with(ModifiableBigInteger(), integer_catalog.shift_left(shift))


def shift_right_big_integer(shift: int) -> ModifiableBigInteger:
    return _with(ModifiableBigInteger(), integer_catalog.shift_right(shift))
