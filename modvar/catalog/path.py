"""Path modification catalog."""

from __future__ import annotations

from enum import Enum
from typing import Callable

from modvar.catalog.explicit_values import get_explicit_values
from modvar.catalog.string import random_text
from modvar.core.config import Settings, get_settings
from modvar.core.randomness import RandomSource
from modvar.modifications.path import (
    PathAppendValueModification,
    PathDeleteModification,
    PathExplicitValueFromFileModification,
    PathExplicitValueModification,
    PathInsertDirectorySeparatorModification,
    PathInsertDirectoryTraversalModification,
    PathInsertValueModification,
    PathModificationBase,
    PathPrependValueModification,
    PathToggleRootModification,
    split_path,
)


class ModificationType(str, Enum):
    APPEND = "append"
    PREPEND = "prepend"
    INSERT = "insert"
    INSERT_DIRECTORY_TRAVERSAL = "insert_directory_traversal"
    INSERT_DIRECTORY_SEPARATOR = "insert_directory_separator"
    TOGGLE_ROOT = "toggle_root"
    DELETE = "delete"


_NEEDS_PARTS = frozenset({ModificationType.INSERT, ModificationType.DELETE})


# ── Named constructors ───────────────────────────────────────────────────────


def append_value(value: str) -> PathAppendValueModification:
    return PathAppendValueModification(append_value=value)


def prepend_value(value: str) -> PathPrependValueModification:
    return PathPrependValueModification(prepend_value=value)


def insert_value(value: str, start_position: int) -> PathInsertValueModification:
    return PathInsertValueModification(insert_value=value, start_position=start_position)


def delete(start_position: int, count: int) -> PathDeleteModification:
    return PathDeleteModification(start_position=start_position, count=count)


def explicit_value(value: str) -> PathExplicitValueModification:
    return PathExplicitValueModification(explicit_value=value)


def explicit_value_from_file(index: int) -> PathExplicitValueFromFileModification:
    vectors = get_explicit_values().path
    position = index % len(vectors)
    return PathExplicitValueFromFileModification(index=position, explicit_value=vectors[position])


def insert_directory_traversal(count: int, start_position: int) -> PathInsertDirectoryTraversalModification:
    return PathInsertDirectoryTraversalModification(count=count, start_position=start_position)


def insert_directory_separator(count: int, start_position: int) -> PathInsertDirectorySeparatorModification:
    return PathInsertDirectorySeparatorModification(count=count, start_position=start_position)


def toggle_root() -> PathToggleRootModification:
    return PathToggleRootModification()


# ── Random creation ──────────────────────────────────────────────────────────


def count_path_parts(value: str) -> int:
    """Number of named parts; the empty part before a leading ``/`` is not counted."""
    parts = split_path(value)
    if parts and parts[0] == "":
        return len(parts) - 1
    return len(parts)


def _insert_text(rng: RandomSource, settings: Settings) -> str:
    return random_text(rng, max(1, rng.next_uint(settings.path_max_insert_length)))


def _position(rng: RandomSource, parts: int) -> int:
    return rng.next_uint(max(1, parts))


def _random_append(rng: RandomSource, parts: int, settings: Settings) -> PathModificationBase:
    return append_value(_insert_text(rng, settings))


def _random_prepend(rng: RandomSource, parts: int, settings: Settings) -> PathModificationBase:
    return prepend_value(_insert_text(rng, settings))


def _random_insert(rng: RandomSource, parts: int, settings: Settings) -> PathModificationBase:
    text = _insert_text(rng, settings)
    return insert_value(text, _position(rng, parts))


def _random_traversal(rng: RandomSource, parts: int, settings: Settings) -> PathModificationBase:
    count = rng.next_uint(settings.path_max_directory_traversal)
    return insert_directory_traversal(count, _position(rng, parts))


def _random_separator(rng: RandomSource, parts: int, settings: Settings) -> PathModificationBase:
    count = rng.next_uint(settings.path_max_directory_separator)
    return insert_directory_separator(count, _position(rng, parts))


def _random_toggle_root(rng: RandomSource, parts: int, settings: Settings) -> PathModificationBase:
    return toggle_root()


def _random_delete(rng: RandomSource, parts: int, settings: Settings) -> PathModificationBase:
    start = rng.next_uint(max(1, parts - 1))
    count = rng.next_uint(max(1, parts - start)) + 1
    return delete(start, count)


_CREATORS: dict[ModificationType, Callable[[RandomSource, int, Settings], PathModificationBase]] = {
    ModificationType.APPEND: _random_append,
    ModificationType.PREPEND: _random_prepend,
    ModificationType.INSERT: _random_insert,
    ModificationType.INSERT_DIRECTORY_TRAVERSAL: _random_traversal,
    ModificationType.INSERT_DIRECTORY_SEPARATOR: _random_separator,
    ModificationType.TOGGLE_ROOT: _random_toggle_root,
    ModificationType.DELETE: _random_delete,
}


def create_random_modification(original: str | None, rng: RandomSource) -> PathModificationBase:
    """Pick a random path variant sized to the number of parts of ``original``.

    A path without named parts (``""`` or only separators) gets an append
    instead of an insert or delete.
    """
    settings = get_settings()
    types = list(ModificationType)
    mod_type = types[rng.next_uint(len(types))]
    parts = settings.path_parts_estimation if original is None else count_path_parts(original)
    if parts == 0 and mod_type in _NEEDS_PARTS:
        mod_type = ModificationType.APPEND
    return _CREATORS[mod_type](rng, parts, settings)
