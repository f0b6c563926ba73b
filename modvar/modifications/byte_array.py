"""Byte array modifications.

Every operation takes an immutable ``bytes`` input and returns a new value.
Malformed parameters (positions outside the buffer, non-positive counts,
oversized keys) leave the input untouched instead of raising, so a long
randomized campaign never aborts on a single bad modification.
"""

from __future__ import annotations

from typing import Annotated, Callable, Literal, Union

from pydantic import Field

from modvar.core.hexbytes import HexBytes
from modvar.core.randomness import RandomSource, next_bool, signed_offset
from modvar.modifications.base import (
    MAX_BYTE_VALUE,
    MAX_POSITION_MODIFIER,
    VariableModification,
    log_modification,
    perturb_position,
)


class ByteArrayModificationBase(VariableModification):
    """Common interface of the byte array family."""

    def modify(self, value: bytes | None) -> bytes | None:
        return modify_byte_array(self, value)

    def modified_copy(self, rng: RandomSource) -> ByteArrayModificationBase:
        return byte_array_neighbor(self, rng)


class ByteArrayAppendValueModification(ByteArrayModificationBase):
    kind: Literal["byte_array_append_value"] = "byte_array_append_value"
    bytes_to_append: HexBytes


class ByteArrayPrependValueModification(ByteArrayModificationBase):
    kind: Literal["byte_array_prepend_value"] = "byte_array_prepend_value"
    bytes_to_prepend: HexBytes


class ByteArrayInsertValueModification(ByteArrayModificationBase):
    kind: Literal["byte_array_insert_value"] = "byte_array_insert_value"
    bytes_to_insert: HexBytes
    start_position: int


class ByteArrayDeleteModification(ByteArrayModificationBase):
    kind: Literal["byte_array_delete"] = "byte_array_delete"
    start_position: int
    count: int


class ByteArrayXorModification(ByteArrayModificationBase):
    kind: Literal["byte_array_xor"] = "byte_array_xor"
    xor: HexBytes
    start_position: int


class ByteArrayShuffleModification(ByteArrayModificationBase):
    """Swap pairs of positions; ``shuffle`` is read two indices at a time."""

    kind: Literal["byte_array_shuffle"] = "byte_array_shuffle"
    shuffle: tuple[int, ...]


class ByteArrayDuplicateModification(ByteArrayModificationBase):
    kind: Literal["byte_array_duplicate"] = "byte_array_duplicate"


class ByteArrayPayloadModification(ByteArrayModificationBase):
    """Compose ``prepend_payload + payload + append_payload``.

    Without ``insert`` the composed payload replaces the input; with it the
    payload is spliced in at ``insert_position`` using the insert rule.
    """

    kind: Literal["byte_array_payload"] = "byte_array_payload"
    prepend_payload: HexBytes = b""
    payload: HexBytes = b""
    append_payload: HexBytes = b""
    insert: bool = False
    insert_position: int = 0

    @property
    def complete_payload(self) -> bytes:
        return self.prepend_payload + self.payload + self.append_payload


class ByteArrayExplicitValueModification(ByteArrayModificationBase):
    kind: Literal["byte_array_explicit_value"] = "byte_array_explicit_value"
    explicit_value: HexBytes


class ByteArrayExplicitValueFromFileModification(ByteArrayModificationBase):
    """Explicit value taken from entry ``index`` of the vector catalog."""

    kind: Literal["byte_array_explicit_value_from_file"] = "byte_array_explicit_value_from_file"
    index: int
    explicit_value: HexBytes


ByteArrayModification = Annotated[
    Union[
        ByteArrayAppendValueModification,
        ByteArrayPrependValueModification,
        ByteArrayInsertValueModification,
        ByteArrayDeleteModification,
        ByteArrayXorModification,
        ByteArrayShuffleModification,
        ByteArrayDuplicateModification,
        ByteArrayPayloadModification,
        ByteArrayExplicitValueModification,
        ByteArrayExplicitValueFromFileModification,
    ],
    Field(discriminator="kind"),
]


# ── Algorithms ───────────────────────────────────────────────────────────────


def insert_bytes(value: bytes, bytes_to_insert: bytes, start_position: int) -> bytes:
    """Splice ``bytes_to_insert`` into ``value`` with wrap-around indexing.

    The position wraps modulo ``len(value) + 1`` so inserting exactly at the
    end is reachable; negative positions count from the end first.
    """
    position = start_position
    if position < 0:
        position += len(value)
    position %= len(value) + 1
    return value[:position] + bytes_to_insert + value[position:]


def _append(mod: ByteArrayAppendValueModification, value: bytes | None) -> bytes | None:
    return (value or b"") + mod.bytes_to_append


def _prepend(mod: ByteArrayPrependValueModification, value: bytes | None) -> bytes | None:
    return mod.bytes_to_prepend + (value or b"")


def _insert(mod: ByteArrayInsertValueModification, value: bytes | None) -> bytes | None:
    return insert_bytes(value or b"", mod.bytes_to_insert, mod.start_position)


def _delete(mod: ByteArrayDeleteModification, value: bytes | None) -> bytes | None:
    if value is None:
        return None
    start = mod.start_position
    if start < 0:
        start += len(value)
    if start < 0 or mod.count <= 0 or start + mod.count > len(value):
        return value
    return value[:start] + value[start + mod.count:]


def _xor(mod: ByteArrayXorModification, value: bytes | None) -> bytes | None:
    value = value or b""
    start = mod.start_position
    if start < 0:
        start += len(value)
    end = start + len(mod.xor)
    if start < 0 or end > len(value):
        return value
    result = bytearray(value)
    for i, key_byte in enumerate(mod.xor):
        result[start + i] ^= key_byte
    return bytes(result)


def _shuffle(mod: ByteArrayShuffleModification, value: bytes | None) -> bytes | None:
    if not value:
        return value
    size = len(value)
    result = bytearray(value)
    # zip over a single iterator walks the indices pairwise, dropping a trailing one
    indices = iter(mod.shuffle)
    for first, second in zip(indices, indices):
        p1, p2 = first % size, second % size
        result[p1], result[p2] = result[p2], result[p1]
    return bytes(result)


def _duplicate(mod: ByteArrayDuplicateModification, value: bytes | None) -> bytes | None:
    value = value or b""
    return value + value


def _payload(mod: ByteArrayPayloadModification, value: bytes | None) -> bytes | None:
    if not mod.insert:
        return mod.complete_payload
    return insert_bytes(value or b"", mod.complete_payload, mod.insert_position)


def _explicit(
    mod: ByteArrayExplicitValueModification | ByteArrayExplicitValueFromFileModification,
    value: bytes | None,
) -> bytes | None:
    return mod.explicit_value


_HANDLERS: dict[type, Callable[..., bytes | None]] = {
    ByteArrayAppendValueModification: _append,
    ByteArrayPrependValueModification: _prepend,
    ByteArrayInsertValueModification: _insert,
    ByteArrayDeleteModification: _delete,
    ByteArrayXorModification: _xor,
    ByteArrayShuffleModification: _shuffle,
    ByteArrayDuplicateModification: _duplicate,
    ByteArrayPayloadModification: _payload,
    ByteArrayExplicitValueModification: _explicit,
    ByteArrayExplicitValueFromFileModification: _explicit,
}


def modify_byte_array(modification: ByteArrayModificationBase, value: bytes | None) -> bytes | None:
    """Apply one byte array modification to ``value``."""
    result = _HANDLERS[type(modification)](modification, value)
    log_modification(modification, result)
    return result


# ── Random neighbors ─────────────────────────────────────────────────────────


def _replace_random_byte(rng: RandomSource, data: bytes) -> bytes:
    if not data:
        return data
    changed = bytearray(data)
    index = rng.next_uint(len(data))
    changed[index] = rng.next_uint(MAX_BYTE_VALUE)
    return bytes(changed)


def _neighbor_append(mod: ByteArrayAppendValueModification, rng: RandomSource):
    return ByteArrayAppendValueModification(
        bytes_to_append=_replace_random_byte(rng, mod.bytes_to_append)
    )


def _neighbor_prepend(mod: ByteArrayPrependValueModification, rng: RandomSource):
    return ByteArrayPrependValueModification(
        bytes_to_prepend=_replace_random_byte(rng, mod.bytes_to_prepend)
    )


def _neighbor_insert(mod: ByteArrayInsertValueModification, rng: RandomSource):
    if mod.bytes_to_insert and next_bool(rng):
        return mod.model_copy(
            update={"bytes_to_insert": _replace_random_byte(rng, mod.bytes_to_insert)}
        )
    return mod.model_copy(update={"start_position": perturb_position(rng, mod.start_position)})


def _neighbor_delete(mod: ByteArrayDeleteModification, rng: RandomSource):
    if next_bool(rng):
        count = mod.count + signed_offset(rng, MAX_POSITION_MODIFIER)
        return mod.model_copy(update={"count": max(1, count)})
    start = mod.start_position + signed_offset(rng, MAX_POSITION_MODIFIER)
    return mod.model_copy(update={"start_position": max(0, start)})


def _neighbor_xor(mod: ByteArrayXorModification, rng: RandomSource):
    if mod.xor and next_bool(rng):
        return mod.model_copy(update={"xor": _replace_random_byte(rng, mod.xor)})
    return mod.model_copy(update={"start_position": perturb_position(rng, mod.start_position)})


def _neighbor_shuffle(mod: ByteArrayShuffleModification, rng: RandomSource):
    if not mod.shuffle:
        return mod
    shuffle = list(mod.shuffle)
    index = rng.next_uint(len(shuffle))
    shuffle[index] = rng.next_uint(MAX_BYTE_VALUE)
    return ByteArrayShuffleModification(shuffle=tuple(shuffle))


def _neighbor_duplicate(mod: ByteArrayDuplicateModification, rng: RandomSource):
    return ByteArrayDuplicateModification()


def _neighbor_payload(mod: ByteArrayPayloadModification, rng: RandomSource):
    return mod.model_copy()


def _neighbor_explicit(mod: ByteArrayExplicitValueModification, rng: RandomSource):
    return ByteArrayExplicitValueModification(
        explicit_value=_replace_random_byte(rng, mod.explicit_value)
    )


def _neighbor_from_file(mod: ByteArrayExplicitValueFromFileModification, rng: RandomSource):
    return mod


_NEIGHBORS: dict[type, Callable[..., ByteArrayModificationBase]] = {
    ByteArrayAppendValueModification: _neighbor_append,
    ByteArrayPrependValueModification: _neighbor_prepend,
    ByteArrayInsertValueModification: _neighbor_insert,
    ByteArrayDeleteModification: _neighbor_delete,
    ByteArrayXorModification: _neighbor_xor,
    ByteArrayShuffleModification: _neighbor_shuffle,
    ByteArrayDuplicateModification: _neighbor_duplicate,
    ByteArrayPayloadModification: _neighbor_payload,
    ByteArrayExplicitValueModification: _neighbor_explicit,
    ByteArrayExplicitValueFromFileModification: _neighbor_from_file,
}


def byte_array_neighbor(modification: ByteArrayModificationBase, rng: RandomSource) -> ByteArrayModificationBase:
    """Return a modification of the same kind with slightly perturbed parameters."""
    return _NEIGHBORS[type(modification)](modification, rng)
