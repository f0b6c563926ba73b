"""String modification catalog."""

from __future__ import annotations

from enum import Enum
from typing import Callable

from modvar.catalog.explicit_values import get_explicit_values
from modvar.core.config import Settings, get_settings
from modvar.core.randomness import RandomSource, random_bytes
from modvar.modifications.string import (
    StringAppendValueModification,
    StringDeleteModification,
    StringExplicitValueFromFileModification,
    StringExplicitValueModification,
    StringInsertValueModification,
    StringModificationBase,
    StringPrependValueModification,
)


class ModificationType(str, Enum):
    APPEND = "append"
    PREPEND = "prepend"
    INSERT = "insert"
    DELETE = "delete"
    EXPLICIT = "explicit"
    EXPLICIT_FROM_FILE = "explicit_from_file"


_POSITIONAL = frozenset({ModificationType.INSERT, ModificationType.DELETE})


# ── Named constructors ───────────────────────────────────────────────────────


def append_value(value: str) -> StringAppendValueModification:
    return StringAppendValueModification(append_value=value)


def prepend_value(value: str) -> StringPrependValueModification:
    return StringPrependValueModification(prepend_value=value)


def insert_value(value: str, start_position: int) -> StringInsertValueModification:
    return StringInsertValueModification(insert_value=value, start_position=start_position)


def delete(start_position: int, count: int) -> StringDeleteModification:
    return StringDeleteModification(start_position=start_position, count=count)


def explicit_value(value: str) -> StringExplicitValueModification:
    return StringExplicitValueModification(explicit_value=value)


def explicit_value_from_file(index: int) -> StringExplicitValueFromFileModification:
    vectors = get_explicit_values().string
    position = index % len(vectors)
    return StringExplicitValueFromFileModification(index=position, explicit_value=vectors[position])


# ── Random creation ──────────────────────────────────────────────────────────


def random_text(rng: RandomSource, length: int) -> str:
    """Random text of ``length`` characters in the latin-1 range."""
    return random_bytes(rng, length).decode("latin-1")


def _insert_length(rng: RandomSource, settings: Settings) -> int:
    return max(1, rng.next_uint(settings.string_max_length))


def _random_append(rng: RandomSource, length: int, settings: Settings) -> StringModificationBase:
    return append_value(random_text(rng, _insert_length(rng, settings)))


def _random_prepend(rng: RandomSource, length: int, settings: Settings) -> StringModificationBase:
    return prepend_value(random_text(rng, _insert_length(rng, settings)))


def _random_insert(rng: RandomSource, length: int, settings: Settings) -> StringModificationBase:
    text = random_text(rng, _insert_length(rng, settings))
    return insert_value(text, rng.next_uint(length + 1))


def _random_delete(rng: RandomSource, length: int, settings: Settings) -> StringModificationBase:
    start = rng.next_uint(max(1, length - 1))
    count = rng.next_uint(max(1, length - start)) + 1
    return delete(start, count)


def _random_explicit(rng: RandomSource, length: int, settings: Settings) -> StringModificationBase:
    return explicit_value(random_text(rng, rng.next_uint(settings.string_max_length)))


def _random_from_file(rng: RandomSource, length: int, settings: Settings) -> StringModificationBase:
    return explicit_value_from_file(rng.next_uint(settings.string_max_length))


_CREATORS: dict[ModificationType, Callable[[RandomSource, int, Settings], StringModificationBase]] = {
    ModificationType.APPEND: _random_append,
    ModificationType.PREPEND: _random_prepend,
    ModificationType.INSERT: _random_insert,
    ModificationType.DELETE: _random_delete,
    ModificationType.EXPLICIT: _random_explicit,
    ModificationType.EXPLICIT_FROM_FILE: _random_from_file,
}


def create_random_modification(original: str | None, rng: RandomSource) -> StringModificationBase:
    """Pick a random variant; an empty original only gets append-style variants."""
    settings = get_settings()
    types = list(ModificationType)
    mod_type = types[rng.next_uint(len(types))]
    length = settings.string_length_estimation if original is None else len(original)
    if length == 0 and mod_type in _POSITIONAL:
        mod_type = ModificationType.APPEND
    return _CREATORS[mod_type](rng, length, settings)
