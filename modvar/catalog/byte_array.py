"""Byte array modification catalog.

Named constructors for every byte array variant plus random creation sized
to the shape of an original value.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable

from modvar.catalog.explicit_values import get_explicit_values
from modvar.core.config import Settings, get_settings
from modvar.core.randomness import RandomSource, random_bytes
from modvar.modifications.byte_array import (
    ByteArrayAppendValueModification,
    ByteArrayDeleteModification,
    ByteArrayDuplicateModification,
    ByteArrayExplicitValueFromFileModification,
    ByteArrayExplicitValueModification,
    ByteArrayInsertValueModification,
    ByteArrayModificationBase,
    ByteArrayPayloadModification,
    ByteArrayPrependValueModification,
    ByteArrayShuffleModification,
    ByteArrayXorModification,
)


class ModificationType(str, Enum):
    """Variants reachable through random creation."""

    XOR = "xor"
    APPEND = "append"
    INSERT = "insert"
    PREPEND = "prepend"
    DELETE = "delete"
    EXPLICIT = "explicit"
    DUPLICATE = "duplicate"
    EXPLICIT_FROM_FILE = "explicit_from_file"
    SHUFFLE = "shuffle"


# Position-indexed variants are undefined on an empty buffer
_POSITIONAL = frozenset({
    ModificationType.XOR,
    ModificationType.INSERT,
    ModificationType.DELETE,
    ModificationType.SHUFFLE,
})


# ── Named constructors ───────────────────────────────────────────────────────


def xor(key: bytes | str, start_position: int) -> ByteArrayXorModification:
    return ByteArrayXorModification(xor=key, start_position=start_position)


def shuffle(indices: list[int] | tuple[int, ...]) -> ByteArrayShuffleModification:
    return ByteArrayShuffleModification(shuffle=tuple(indices))


def append_value(bytes_to_append: bytes | str) -> ByteArrayAppendValueModification:
    return ByteArrayAppendValueModification(bytes_to_append=bytes_to_append)


def prepend_value(bytes_to_prepend: bytes | str) -> ByteArrayPrependValueModification:
    return ByteArrayPrependValueModification(bytes_to_prepend=bytes_to_prepend)


def insert_value(bytes_to_insert: bytes | str, start_position: int) -> ByteArrayInsertValueModification:
    return ByteArrayInsertValueModification(bytes_to_insert=bytes_to_insert, start_position=start_position)


def delete(start_position: int, count: int) -> ByteArrayDeleteModification:
    return ByteArrayDeleteModification(start_position=start_position, count=count)


def duplicate() -> ByteArrayDuplicateModification:
    return ByteArrayDuplicateModification()


def payload(
    prepend_payload: bytes | str = b"",
    payload: bytes | str = b"",
    append_payload: bytes | str = b"",
    insert: bool = False,
    insert_position: int = 0,
) -> ByteArrayPayloadModification:
    return ByteArrayPayloadModification(
        prepend_payload=prepend_payload,
        payload=payload,
        append_payload=append_payload,
        insert=insert,
        insert_position=insert_position,
    )


def explicit_value(value: bytes | str) -> ByteArrayExplicitValueModification:
    return ByteArrayExplicitValueModification(explicit_value=value)


def explicit_value_from_file(index: int) -> ByteArrayExplicitValueFromFileModification:
    """Explicit value taken from the vector file, wrapping ``index`` around its length."""
    vectors = get_explicit_values().byte_array
    position = index % len(vectors)
    return ByteArrayExplicitValueFromFileModification(index=position, explicit_value=vectors[position])


# ── Random creation ──────────────────────────────────────────────────────────


def _modification_length(rng: RandomSource, settings: Settings) -> int:
    return rng.next_uint(max(1, settings.byte_array_max_length - 1)) + 1


def _random_xor(rng: RandomSource, length: int, settings: Settings) -> ByteArrayModificationBase:
    key_length = min(_modification_length(rng, settings), length)
    key = random_bytes(rng, key_length)
    return xor(key, rng.next_uint(length - key_length + 1))


def _random_append(rng: RandomSource, length: int, settings: Settings) -> ByteArrayModificationBase:
    return append_value(random_bytes(rng, _modification_length(rng, settings)))


def _random_insert(rng: RandomSource, length: int, settings: Settings) -> ByteArrayModificationBase:
    data = random_bytes(rng, _modification_length(rng, settings))
    return insert_value(data, rng.next_uint(length + 1))


def _random_prepend(rng: RandomSource, length: int, settings: Settings) -> ByteArrayModificationBase:
    return prepend_value(random_bytes(rng, _modification_length(rng, settings)))


def _random_delete(rng: RandomSource, length: int, settings: Settings) -> ByteArrayModificationBase:
    start = rng.next_uint(max(1, length - 1))
    count = rng.next_uint(length - start) + 1
    return delete(start, count)


def _random_explicit(rng: RandomSource, length: int, settings: Settings) -> ByteArrayModificationBase:
    return explicit_value(random_bytes(rng, _modification_length(rng, settings)))


def _random_duplicate(rng: RandomSource, length: int, settings: Settings) -> ByteArrayModificationBase:
    return duplicate()


def _random_from_file(rng: RandomSource, length: int, settings: Settings) -> ByteArrayModificationBase:
    return explicit_value_from_file(rng.next_uint(settings.byte_array_max_file_entries))


def _random_shuffle(rng: RandomSource, length: int, settings: Settings) -> ByteArrayModificationBase:
    size = rng.next_uint(settings.byte_array_max_length)
    return shuffle([rng.next_uint(length) for _ in range(size)])


_CREATORS: dict[ModificationType, Callable[[RandomSource, int, Settings], ByteArrayModificationBase]] = {
    ModificationType.XOR: _random_xor,
    ModificationType.APPEND: _random_append,
    ModificationType.INSERT: _random_insert,
    ModificationType.PREPEND: _random_prepend,
    ModificationType.DELETE: _random_delete,
    ModificationType.EXPLICIT: _random_explicit,
    ModificationType.DUPLICATE: _random_duplicate,
    ModificationType.EXPLICIT_FROM_FILE: _random_from_file,
    ModificationType.SHUFFLE: _random_shuffle,
}


def create_random_modification(original: bytes | None, rng: RandomSource) -> ByteArrayModificationBase:
    """Pick a random variant with parameters in bounds for ``original``.

    An absent original is assumed to be ``byte_array_length_estimation`` bytes
    long; an empty original only gets append-style variants.
    """
    settings = get_settings()
    types = list(ModificationType)
    mod_type = types[rng.next_uint(len(types))]
    length = settings.byte_array_length_estimation if original is None else len(original)
    if length == 0 and mod_type in _POSITIONAL:
        mod_type = ModificationType.APPEND
    return _CREATORS[mod_type](rng, length, settings)
