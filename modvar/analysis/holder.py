"""Holder contract for objects that own modifiable variables.

A holder declares its slots explicitly instead of being inspected: slots that
hold a cell, and slots that may hold nested holders (a single holder or a
list/tuple of holders). The analyzer only walks what is declared.

Usage:
    class Record(ModifiableVariableHolder):
        modifiable_fields = ("content_type", "length")
        holder_fields = ("messages",)

        def __init__(self):
            self.content_type = ModifiableByteArray(original_value=b"\\x16")
            self.length = ModifiableInteger(original_value=0)
            self.messages = []

Subclasses extend the declarations of their bases; base slots come first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Protocol, runtime_checkable

from modvar.analysis.properties import VariableProperty
from modvar.core.errors import UnsupportedOperationError
from modvar.core.hexbytes import bytes_to_hex
from modvar.core.randomness import RandomSource
from modvar.variables.base import ModifiableVariable

if TYPE_CHECKING:
    from modvar.analysis.validation import ValidationResult

logger = logging.getLogger(__name__)


@runtime_checkable
class HoldsModifiableVariables(Protocol):
    """Anything the analyzer can walk."""

    def modifiable_variable_fields(self) -> tuple[str, ...]:
        """Names of slots holding a ``ModifiableVariable`` (or ``None``)."""
        ...

    def nested_holder_fields(self) -> tuple[str, ...]:
        """Names of slots holding a nested holder or a list/tuple of holders."""
        ...


def collect_declared(cls: type, attr: str) -> tuple[str, ...]:
    """Concatenate a tuple declaration across the MRO, base classes first."""
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        for name in klass.__dict__.get(attr, ()):
            if name not in names:
                names.append(name)
    return tuple(names)


# ── Records ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ModifiableVariableField:
    """A non-owning (owner, slot name) pair pointing at one cell."""

    owner: Any
    name: str

    def get(self) -> ModifiableVariable | None:
        return getattr(self.owner, self.name, None)

    def set(self, variable: ModifiableVariable | None) -> None:
        setattr(self.owner, self.name, variable)

    def __repr__(self) -> str:
        return f"ModifiableVariableField({type(self.owner).__name__}.{self.name})"


@dataclass(frozen=True)
class ModifiableVariableListHolder:
    """One holder together with the cell slots found on it."""

    owner: Any
    fields: tuple[str, ...]

    def get_fields(self) -> list[ModifiableVariableField]:
        return [ModifiableVariableField(self.owner, name) for name in self.fields]


# ── Base class ───────────────────────────────────────────────────────────────


class ModifiableVariableHolder:
    """Base class implementing ``HoldsModifiableVariables`` from class declarations."""

    modifiable_fields: ClassVar[tuple[str, ...]] = ()
    holder_fields: ClassVar[tuple[str, ...]] = ()
    variable_properties: ClassVar[dict[str, VariableProperty]] = {}

    def modifiable_variable_fields(self) -> tuple[str, ...]:
        return collect_declared(type(self), "modifiable_fields")

    def nested_holder_fields(self) -> tuple[str, ...]:
        return collect_declared(type(self), "holder_fields")

    def get_all_modifiable_variable_fields(self) -> list[str]:
        return list(self.modifiable_variable_fields())

    def get_random_modifiable_variable_field(self, rng: RandomSource) -> str:
        fields = self.get_all_modifiable_variable_fields()
        if not fields:
            raise ValueError(f"{type(self).__name__} declares no modifiable variables")
        return fields[rng.next_uint(len(fields))]

    def get_all_modifiable_variable_holders(self) -> list[ModifiableVariableHolder]:
        """Holders to pick from for random modification; containers may override."""
        return [self]

    def get_random_modifiable_variable_holder(self, rng: RandomSource) -> ModifiableVariableHolder:
        holders = self.get_all_modifiable_variable_holders()
        return holders[rng.next_uint(len(holders))]

    def reset(self) -> None:
        """Prepare the holder for reuse.

        Cells carrying modifications lose their original value (it gets
        recomputed next time); cells without modifications are removed.
        """
        for name in self.modifiable_variable_fields():
            cell = getattr(self, name, None)
            if cell is None:
                continue
            if cell.modifications:
                try:
                    cell.set_original_value(None)
                except UnsupportedOperationError:
                    logger.debug("Keeping derived original of %s.%s", type(self).__name__, name)
            else:
                setattr(self, name, None)

    def validate_assertions(self) -> bool:
        """True when every cell assertion reachable from this holder holds."""
        from modvar.analysis.analyzer import get_all_modifiable_variable_fields_recursively

        for field in get_all_modifiable_variable_fields_recursively(self):
            cell = field.get()
            if cell.contains_assertion() and not cell.validate_assertions():
                owner = type(field.owner).__name__
                logger.info(
                    "Assertion failed for %s.%s",
                    owner,
                    field.name,
                    extra={"holder": owner, "field": field.name},
                )
                return False
        return True

    def validate_property_annotations(self) -> ValidationResult:
        from modvar.analysis.validation import validate_object

        return validate_object(self)

    def get_extended_string(self) -> str:
        """Indented dump of this holder's cells and of every nested holder.

        A holder met a second time prints as ``<cycle Name>``.
        """
        visited = {id(self)}
        out = [f"{type(self).__name__}{{\n"]
        # Entries are literal lines or (label, holder, depth) still to expand.
        pending: list[Any] = ["}\n", *reversed(self._extended_entries(1))]
        while pending:
            entry = pending.pop()
            if isinstance(entry, str):
                out.append(entry)
                continue
            label, holder, depth = entry
            indent = "\t" * depth
            if id(holder) in visited:
                out.append(f"{indent}{label}: <cycle {type(holder).__name__}>\n")
                continue
            visited.add(id(holder))
            out.append(f"{indent}{label}:{type(holder).__name__}{{\n")
            pending.append(f"{indent}}}\n")
            pending.extend(reversed(holder._extended_entries(depth + 1)))
        return "".join(out)

    def _extended_entries(self, depth: int) -> list[Any]:
        indent = "\t" * depth
        entries: list[Any] = []
        for name in self.modifiable_variable_fields():
            cell = getattr(self, name, None)
            entries.append(f"{indent}{name}: {'null' if cell is None else cell}\n")
        for name in self.nested_holder_fields():
            slot = getattr(self, name, None)
            if slot is None:
                entries.append(f"{indent}{name}: null\n")
                continue
            elements = list(slot) if isinstance(slot, (list, tuple)) else [slot]
            for index, element in enumerate(elements):
                label = f"{name}[{index}]" if isinstance(slot, (list, tuple)) else name
                if isinstance(element, ModifiableVariableHolder):
                    entries.append((label, element, depth))
                elif isinstance(element, bytes):
                    entries.append(f"{indent}{label}: {bytes_to_hex(element)}\n")
                else:
                    entries.append(f"{indent}{label}: {'null' if element is None else element}\n")
        return entries
