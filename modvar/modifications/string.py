"""Text modifications.

Positions follow the byte array rules (wrap-around insert, bounds checked
delete) applied to code points.
"""

from __future__ import annotations

from typing import Annotated, Callable, Literal, Union

from pydantic import Field

from modvar.core.randomness import RandomSource, next_bool, signed_offset
from modvar.modifications.base import (
    MAX_BYTE_VALUE,
    MAX_POSITION_MODIFIER,
    VariableModification,
    log_modification,
    perturb_position,
)


class StringModificationBase(VariableModification):
    """Common interface of the string family."""

    def modify(self, value: str | None) -> str | None:
        return modify_string(self, value)

    def modified_copy(self, rng: RandomSource) -> StringModificationBase:
        return string_neighbor(self, rng)


class StringAppendValueModification(StringModificationBase):
    kind: Literal["string_append_value"] = "string_append_value"
    append_value: str


class StringPrependValueModification(StringModificationBase):
    kind: Literal["string_prepend_value"] = "string_prepend_value"
    prepend_value: str


class StringInsertValueModification(StringModificationBase):
    kind: Literal["string_insert_value"] = "string_insert_value"
    insert_value: str
    start_position: int


class StringDeleteModification(StringModificationBase):
    kind: Literal["string_delete"] = "string_delete"
    start_position: int
    count: int


class StringExplicitValueModification(StringModificationBase):
    kind: Literal["string_explicit_value"] = "string_explicit_value"
    explicit_value: str


class StringExplicitValueFromFileModification(StringModificationBase):
    kind: Literal["string_explicit_value_from_file"] = "string_explicit_value_from_file"
    index: int
    explicit_value: str


StringModification = Annotated[
    Union[
        StringAppendValueModification,
        StringPrependValueModification,
        StringInsertValueModification,
        StringDeleteModification,
        StringExplicitValueModification,
        StringExplicitValueFromFileModification,
    ],
    Field(discriminator="kind"),
]


# ── Algorithms ───────────────────────────────────────────────────────────────


def insert_text(value: str, insert_value: str, start_position: int) -> str:
    position = start_position
    if position < 0:
        position += len(value)
    position %= len(value) + 1
    return value[:position] + insert_value + value[position:]


def _append(mod: StringAppendValueModification, value: str | None) -> str | None:
    return (value or "") + mod.append_value


def _prepend(mod: StringPrependValueModification, value: str | None) -> str | None:
    return mod.prepend_value + (value or "")


def _insert(mod: StringInsertValueModification, value: str | None) -> str | None:
    return insert_text(value or "", mod.insert_value, mod.start_position)


def _delete(mod: StringDeleteModification, value: str | None) -> str | None:
    if value is None:
        return None
    count = max(0, mod.count)
    start = mod.start_position
    if start < 0:
        start += len(value)
    if start < 0 or count == 0 or start + count > len(value):
        return value
    return value[:start] + value[start + count:]


def _explicit(
    mod: StringExplicitValueModification | StringExplicitValueFromFileModification,
    value: str | None,
) -> str | None:
    return mod.explicit_value


_HANDLERS: dict[type, Callable[..., str | None]] = {
    StringAppendValueModification: _append,
    StringPrependValueModification: _prepend,
    StringInsertValueModification: _insert,
    StringDeleteModification: _delete,
    StringExplicitValueModification: _explicit,
    StringExplicitValueFromFileModification: _explicit,
}


def modify_string(modification: StringModificationBase, value: str | None) -> str | None:
    """Apply one string modification to ``value``."""
    result = _HANDLERS[type(modification)](modification, value)
    log_modification(modification, result)
    return result


# ── Random neighbors ─────────────────────────────────────────────────────────


def replace_random_char(rng: RandomSource, text: str) -> str:
    if not text:
        return text
    index = rng.next_uint(len(text))
    return text[:index] + chr(rng.next_uint(MAX_BYTE_VALUE)) + text[index + 1:]


def _neighbor_append(mod: StringAppendValueModification, rng: RandomSource):
    return StringAppendValueModification(append_value=replace_random_char(rng, mod.append_value))


def _neighbor_prepend(mod: StringPrependValueModification, rng: RandomSource):
    return StringPrependValueModification(prepend_value=replace_random_char(rng, mod.prepend_value))


def _neighbor_insert(mod: StringInsertValueModification, rng: RandomSource):
    if mod.insert_value and next_bool(rng):
        return mod.model_copy(update={"insert_value": replace_random_char(rng, mod.insert_value)})
    return mod.model_copy(update={"start_position": perturb_position(rng, mod.start_position)})


def _neighbor_delete(mod: StringDeleteModification, rng: RandomSource):
    if next_bool(rng):
        count = mod.count + signed_offset(rng, MAX_POSITION_MODIFIER)
        return mod.model_copy(update={"count": max(1, count)})
    start = mod.start_position + signed_offset(rng, MAX_POSITION_MODIFIER)
    return mod.model_copy(update={"start_position": max(0, start)})


def _neighbor_explicit(mod: StringExplicitValueModification, rng: RandomSource):
    return StringExplicitValueModification(explicit_value=replace_random_char(rng, mod.explicit_value))


def _neighbor_from_file(mod: StringExplicitValueFromFileModification, rng: RandomSource):
    return mod


_NEIGHBORS: dict[type, Callable[..., StringModificationBase]] = {
    StringAppendValueModification: _neighbor_append,
    StringPrependValueModification: _neighbor_prepend,
    StringInsertValueModification: _neighbor_insert,
    StringDeleteModification: _neighbor_delete,
    StringExplicitValueModification: _neighbor_explicit,
    StringExplicitValueFromFileModification: _neighbor_from_file,
}


def string_neighbor(modification: StringModificationBase, rng: RandomSource) -> StringModificationBase:
    """Return a modification of the same kind with slightly perturbed parameters."""
    return _NEIGHBORS[type(modification)](modification, rng)
