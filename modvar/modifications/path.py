"""Path modifications.

A path is split on ``/`` into parts (trailing empty parts dropped). A leading
empty part marks an absolute path; the first part of an absolute path can
never be replaced, so positions are computed over the remaining parts. A
trailing ``/`` on the input survives insert and delete.

Absolute and relative paths use different position formulas:

    insert, absolute   trunc_rem(pos, n) [+ n - 1 if pos < 0] + 1
    insert, relative   trunc_rem(pos, n + 1) [+ n if pos < 0]
    delete, absolute   trunc_rem(pos, n - 1) [+ n - 2 if pos < 0] + 1
    delete, relative   trunc_rem(pos, n) [+ n - 1 if pos < 0]

where ``n`` counts the parts including the leading empty one.
"""

from __future__ import annotations

from typing import Annotated, Callable, Literal, Union

from pydantic import Field

from modvar.core.randomness import RandomSource, next_bool, signed_offset
from modvar.modifications.base import (
    MAX_POSITION_MODIFIER,
    VariableModification,
    log_modification,
    perturb_position,
    trunc_rem,
)
from modvar.modifications.string import (
    StringAppendValueModification,
    StringDeleteModification,
    StringExplicitValueFromFileModification,
    StringExplicitValueModification,
    StringInsertValueModification,
    StringModificationBase,
    StringPrependValueModification,
    modify_string,
    replace_random_char,
    string_neighbor,
)

SEPARATOR = "/"


class PathModificationBase(VariableModification):
    """Common interface of the path family."""

    def modify(self, value: str | None) -> str | None:
        return modify_path(self, value)

    def modified_copy(self, rng: RandomSource) -> PathModificationBase:
        return path_neighbor(self, rng)


class PathAppendValueModification(PathModificationBase):
    kind: Literal["path_append_value"] = "path_append_value"
    append_value: str


class PathPrependValueModification(PathModificationBase):
    kind: Literal["path_prepend_value"] = "path_prepend_value"
    prepend_value: str


class PathInsertValueModification(PathModificationBase):
    kind: Literal["path_insert_value"] = "path_insert_value"
    insert_value: str
    start_position: int


class PathDeleteModification(PathModificationBase):
    kind: Literal["path_delete"] = "path_delete"
    start_position: int
    count: int


class PathExplicitValueModification(PathModificationBase):
    kind: Literal["path_explicit_value"] = "path_explicit_value"
    explicit_value: str


class PathExplicitValueFromFileModification(PathModificationBase):
    kind: Literal["path_explicit_value_from_file"] = "path_explicit_value_from_file"
    index: int
    explicit_value: str


class PathInsertDirectoryTraversalModification(PathModificationBase):
    """Insert ``count`` ``..`` parts as a single path part."""

    kind: Literal["path_insert_directory_traversal"] = "path_insert_directory_traversal"
    count: int
    start_position: int

    @property
    def insert_value(self) -> str:
        return directory_traversal(self.count)


class PathInsertDirectorySeparatorModification(PathModificationBase):
    """Insert a run of ``count`` separators as a single path part."""

    kind: Literal["path_insert_directory_separator"] = "path_insert_directory_separator"
    count: int
    start_position: int

    @property
    def insert_value(self) -> str:
        return directory_separators(self.count)


class PathToggleRootModification(PathModificationBase):
    kind: Literal["path_toggle_root"] = "path_toggle_root"


# A path cell also accepts plain string modifications.
PathModification = Annotated[
    Union[
        PathAppendValueModification,
        PathPrependValueModification,
        PathInsertValueModification,
        PathDeleteModification,
        PathExplicitValueModification,
        PathExplicitValueFromFileModification,
        PathInsertDirectoryTraversalModification,
        PathInsertDirectorySeparatorModification,
        PathToggleRootModification,
        StringAppendValueModification,
        StringPrependValueModification,
        StringInsertValueModification,
        StringDeleteModification,
        StringExplicitValueModification,
        StringExplicitValueFromFileModification,
    ],
    Field(discriminator="kind"),
]


# ── Path arithmetic ──────────────────────────────────────────────────────────


def directory_traversal(count: int) -> str:
    if count <= 0:
        return ""
    return SEPARATOR.join([".."] * count)


def directory_separators(count: int) -> str:
    return SEPARATOR * max(0, count)


def split_path(value: str) -> list[str]:
    parts = value.split(SEPARATOR)
    while parts and parts[-1] == "":
        parts.pop()
    return parts


def insert_position(start_position: int, absolute: bool, part_count: int) -> int:
    if absolute:
        position = trunc_rem(start_position, part_count)
        if start_position < 0:
            position += part_count - 1
        return position + 1
    position = trunc_rem(start_position, part_count + 1)
    if start_position < 0:
        position += part_count
    return position


def part_position(start_position: int, absolute: bool, part_count: int) -> int:
    if absolute:
        position = trunc_rem(start_position, part_count - 1)
        if start_position < 0:
            position += part_count - 2
        return position + 1
    position = trunc_rem(start_position, part_count)
    if start_position < 0:
        position += part_count - 1
    return position


def insert_path_part(value: str | None, insert_value: str, start_position: int) -> str | None:
    """Insert ``insert_value`` as a whole part of the path ``value``."""
    if value is None:
        return None
    if not value:
        return insert_value
    parts = split_path(value)
    if not parts:
        # only separators
        return SEPARATOR + insert_value + SEPARATOR
    absolute = parts[0] == ""
    position = insert_position(start_position, absolute, len(parts))
    if position == len(parts):
        parts[-1] = parts[-1] + SEPARATOR + insert_value
    else:
        parts[position] = insert_value + SEPARATOR + parts[position]
    if value.endswith(SEPARATOR):
        parts[-1] += SEPARATOR
    return SEPARATOR.join(parts)


def delete_path_parts(value: str | None, start_position: int, count: int) -> str | None:
    if value is None:
        return None
    if not value:
        return value
    parts = split_path(value)
    if not parts:
        return value if count == 0 else ""
    absolute = parts[0] == ""
    start = part_position(start_position, absolute, len(parts))
    end = min(start + count, len(parts))
    result = parts[:start] + parts[max(start, end):]
    if value.endswith(SEPARATOR) and result:
        result[-1] += SEPARATOR
    return SEPARATOR.join(result)


# ── Algorithms ───────────────────────────────────────────────────────────────


def _append(mod: PathAppendValueModification, value: str | None) -> str | None:
    if value is None:
        return None
    if value.endswith(SEPARATOR):
        return value + mod.append_value + SEPARATOR
    return value + SEPARATOR + mod.append_value


def _prepend(mod: PathPrependValueModification, value: str | None) -> str | None:
    if value is None:
        return None
    if value.startswith(SEPARATOR):
        return SEPARATOR + mod.prepend_value + value
    return mod.prepend_value + SEPARATOR + value


def _insert(
    mod: PathInsertValueModification
    | PathInsertDirectoryTraversalModification
    | PathInsertDirectorySeparatorModification,
    value: str | None,
) -> str | None:
    return insert_path_part(value, mod.insert_value, mod.start_position)


def _delete(mod: PathDeleteModification, value: str | None) -> str | None:
    return delete_path_parts(value, mod.start_position, mod.count)


def _explicit(
    mod: PathExplicitValueModification | PathExplicitValueFromFileModification,
    value: str | None,
) -> str | None:
    return mod.explicit_value


def _toggle_root(mod: PathToggleRootModification, value: str | None) -> str | None:
    if value is None:
        return None
    if value.startswith(SEPARATOR):
        return value[1:]
    return SEPARATOR + value


_HANDLERS: dict[type, Callable[..., str | None]] = {
    PathAppendValueModification: _append,
    PathPrependValueModification: _prepend,
    PathInsertValueModification: _insert,
    PathDeleteModification: _delete,
    PathExplicitValueModification: _explicit,
    PathExplicitValueFromFileModification: _explicit,
    PathInsertDirectoryTraversalModification: _insert,
    PathInsertDirectorySeparatorModification: _insert,
    PathToggleRootModification: _toggle_root,
}


def modify_path(
    modification: PathModificationBase | StringModificationBase, value: str | None
) -> str | None:
    """Apply one path (or plain string) modification to ``value``."""
    if isinstance(modification, StringModificationBase):
        return modify_string(modification, value)
    result = _HANDLERS[type(modification)](modification, value)
    log_modification(modification, result)
    return result


# ── Random neighbors ─────────────────────────────────────────────────────────


def _neighbor_append(mod: PathAppendValueModification, rng: RandomSource):
    return PathAppendValueModification(append_value=replace_random_char(rng, mod.append_value))


def _neighbor_prepend(mod: PathPrependValueModification, rng: RandomSource):
    return PathPrependValueModification(prepend_value=replace_random_char(rng, mod.prepend_value))


def _neighbor_insert(mod: PathInsertValueModification, rng: RandomSource):
    if mod.insert_value and next_bool(rng):
        return mod.model_copy(update={"insert_value": replace_random_char(rng, mod.insert_value)})
    return mod.model_copy(update={"start_position": perturb_position(rng, mod.start_position)})


def _neighbor_delete(mod: PathDeleteModification, rng: RandomSource):
    if next_bool(rng):
        count = mod.count + signed_offset(rng, MAX_POSITION_MODIFIER)
        return mod.model_copy(update={"count": max(1, count)})
    start = mod.start_position + signed_offset(rng, MAX_POSITION_MODIFIER)
    return mod.model_copy(update={"start_position": max(0, start)})


def _neighbor_explicit(mod: PathExplicitValueModification, rng: RandomSource):
    return PathExplicitValueModification(explicit_value=replace_random_char(rng, mod.explicit_value))


def _neighbor_from_file(mod: PathExplicitValueFromFileModification, rng: RandomSource):
    return mod


def _neighbor_counted(
    mod: PathInsertDirectoryTraversalModification | PathInsertDirectorySeparatorModification,
    rng: RandomSource,
):
    if next_bool(rng):
        count = mod.count + signed_offset(rng, MAX_POSITION_MODIFIER)
        return mod.model_copy(update={"count": max(1, count)})
    return mod.model_copy(update={"start_position": perturb_position(rng, mod.start_position)})


def _neighbor_toggle_root(mod: PathToggleRootModification, rng: RandomSource):
    return PathToggleRootModification()


_NEIGHBORS: dict[type, Callable[..., PathModificationBase]] = {
    PathAppendValueModification: _neighbor_append,
    PathPrependValueModification: _neighbor_prepend,
    PathInsertValueModification: _neighbor_insert,
    PathDeleteModification: _neighbor_delete,
    PathExplicitValueModification: _neighbor_explicit,
    PathExplicitValueFromFileModification: _neighbor_from_file,
    PathInsertDirectoryTraversalModification: _neighbor_counted,
    PathInsertDirectorySeparatorModification: _neighbor_counted,
    PathToggleRootModification: _neighbor_toggle_root,
}


def path_neighbor(
    modification: PathModificationBase | StringModificationBase, rng: RandomSource
) -> PathModificationBase | StringModificationBase:
    """Return a modification of the same kind with slightly perturbed parameters."""
    if isinstance(modification, StringModificationBase):
        return string_neighbor(modification, rng)
    return _NEIGHBORS[type(modification)](modification, rng)
