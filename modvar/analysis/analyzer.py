"""Object graph walker that finds every reachable modifiable variable.

Starting from a root holder, the analyzer collects the cells in the holder's
declared variable slots, then recurses through its declared holder slots
(single holder, list or tuple of holders) to arbitrary depth without
recursing on the Python stack.

Guarantees:
  - Order is stable: declaration order of slots (base classes first), then
    element order inside lists/tuples.
  - Each distinct cell is reported once, even if it is reachable through
    several paths.
  - Cycles terminate: every owner is visited at most once per call. The
    visited set lives only for the duration of that call.
  - Inspected objects are never mutated.
"""

from __future__ import annotations

import logging
from typing import Any

from modvar.analysis.holder import (
    HoldsModifiableVariables,
    ModifiableVariableField,
    ModifiableVariableListHolder,
    collect_declared,
)
from modvar.analysis.properties import (
    PropertyFormat,
    PropertyType,
    VariableProperty,
    declared_variable_properties,
)
from modvar.core.randomness import RandomSource
from modvar.variables.base import ModifiableVariable

logger = logging.getLogger(__name__)


def is_modifiable_variable_holder(obj: Any) -> bool:
    """True if ``obj`` implements the holder contract and declares at least one cell slot."""
    return isinstance(obj, HoldsModifiableVariables) and bool(obj.modifiable_variable_fields())


def get_all_modifiable_variable_fields(obj: Any) -> list[str]:
    """Declared cell slots of ``obj`` itself (no recursion)."""
    if not isinstance(obj, HoldsModifiableVariables):
        return []
    return list(obj.modifiable_variable_fields())


def get_random_modifiable_variable_field(obj: Any, rng: RandomSource) -> str:
    fields = get_all_modifiable_variable_fields(obj)
    if not fields:
        raise ValueError(f"{type(obj).__name__} declares no modifiable variables")
    return fields[rng.next_uint(len(fields))]


# ── Recursive traversal ──────────────────────────────────────────────────────


class _Traversal:
    """State of one analyzer call.

    Owners wait on an explicit stack, so chain depth is bounded by memory
    rather than the interpreter's recursion limit. Children are pushed in
    reverse, which pops them in declaration order (depth first, pre-order).
    """

    def __init__(self) -> None:
        self.visited_owners: set[int] = set()
        self.seen_cells: set[int] = set()
        self.holders: list[ModifiableVariableListHolder] = []

    def run(self, root: Any) -> None:
        pending: list[Any] = [root]
        while pending:
            obj = pending.pop()
            if id(obj) in self.visited_owners:
                continue
            self.visited_owners.add(id(obj))
            self._collect_cells(obj)
            pending.extend(reversed(self._nested_holders(obj)))

    def _collect_cells(self, obj: Any) -> None:
        names: list[str] = []
        for name in obj.modifiable_variable_fields():
            cell = getattr(obj, name, None)
            if cell is None:
                continue
            if not isinstance(cell, ModifiableVariable):
                logger.warning(
                    "Slot %s.%s holds %s, not a modifiable variable; skipping",
                    type(obj).__name__,
                    name,
                    type(cell).__name__,
                    extra={"holder": type(obj).__name__, "field": name},
                )
                continue
            if id(cell) in self.seen_cells:
                continue
            self.seen_cells.add(id(cell))
            names.append(name)
        if names:
            self.holders.append(ModifiableVariableListHolder(obj, tuple(names)))

    def _nested_holders(self, owner: Any) -> list[Any]:
        children: list[Any] = []
        for name in owner.nested_holder_fields():
            slot = getattr(owner, name, None)
            if slot is None:
                continue
            if isinstance(slot, (list, tuple)):
                labelled = [(f"{name}[{index}]", element) for index, element in enumerate(slot)]
            else:
                labelled = [(name, slot)]
            for label, element in labelled:
                if element is None or not isinstance(element, HoldsModifiableVariables):
                    logger.warning(
                        "Skipping %s in holder slot %s.%s",
                        "null element" if element is None else type(element).__name__,
                        type(owner).__name__,
                        label,
                        extra={"holder": type(owner).__name__, "field": label},
                    )
                    continue
                children.append(element)
        return children


def get_all_modifiable_variable_holders_recursively(root: Any) -> list[ModifiableVariableListHolder]:
    """Every holder reachable from ``root`` that owns at least one new cell."""
    if not isinstance(root, HoldsModifiableVariables):
        return []
    traversal = _Traversal()
    traversal.run(root)
    return traversal.holders


def get_all_modifiable_variable_fields_recursively(root: Any) -> list[ModifiableVariableField]:
    """One ``ModifiableVariableField`` per distinct cell reachable from ``root``."""
    return [
        field
        for holder in get_all_modifiable_variable_holders_recursively(root)
        for field in holder.get_fields()
    ]


# ── Property annotations ─────────────────────────────────────────────────────


def get_annotated_fields(cls: type) -> list[str]:
    return list(declared_variable_properties(cls))


def is_annotated(cls: type, name: str) -> bool:
    return name in declared_variable_properties(cls)


def get_annotation(cls: type, name: str) -> VariableProperty | None:
    return declared_variable_properties(cls).get(name)


def group_fields_by_type(cls: type) -> dict[PropertyType, list[str]]:
    groups: dict[PropertyType, list[str]] = {}
    for name, prop in declared_variable_properties(cls).items():
        groups.setdefault(prop.type, []).append(name)
    return groups


def group_fields_by_format(cls: type) -> dict[PropertyFormat, list[str]]:
    groups: dict[PropertyFormat, list[str]] = {}
    for name, prop in declared_variable_properties(cls).items():
        groups.setdefault(prop.format, []).append(name)
    return groups


def get_fields_by_type(cls: type, property_type: PropertyType) -> list[str]:
    return group_fields_by_type(cls).get(property_type, [])


def get_fields_by_format(cls: type, property_format: PropertyFormat) -> list[str]:
    return group_fields_by_format(cls).get(property_format, [])


def get_unannotated_modifiable_variables(cls: type) -> list[str]:
    """Declared cell slots of ``cls`` without a ``VariableProperty``."""
    annotated = declared_variable_properties(cls)
    return [name for name in collect_declared(cls, "modifiable_fields") if name not in annotated]
