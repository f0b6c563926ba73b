"""Base mutation cell.

A ``ModifiableVariable`` keeps a pristine original value plus an ordered chain
of modifications. Reading ``value`` folds the chain over the original from
left to right; the original itself is never touched.

Cells are not thread safe. The expected usage is a single writer while a
harness sets up a test case, then read-mostly access while the message is
serialized.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any

from pydantic import BaseModel, Field

from modvar.core.randomness import RandomSource
from modvar.modifications.base import VariableModification, format_value


class ModifiableVariable(BaseModel):
    """Original value + modification chain + optional expected result."""

    model_config = {"validate_assignment": True}

    original_value: Any = None
    modifications: list[Any] = Field(default_factory=list)
    assert_equals: Any = None

    # ── Chain ────────────────────────────────────────────────────────────

    def _apply(self, modification: VariableModification, value: Any) -> Any:
        return modification.modify(value)

    @property
    def value(self) -> Any:
        result = self.get_original_value()
        for modification in self.modifications:
            result = self._apply(modification, result)
        return result

    def get_original_value(self) -> Any:
        return self.original_value

    def set_original_value(self, value: Any) -> None:
        self.original_value = value

    def set_modifications(self, modifications: list[VariableModification]) -> None:
        self.modifications = list(modifications)

    def add_modification(self, modification: VariableModification | None) -> None:
        """Append ``modification`` to the chain; ``None`` is ignored."""
        if modification is None:
            return
        self.modifications = [*self.modifications, modification]

    def clear_modifications(self) -> None:
        self.modifications = []

    # ── Inspection ───────────────────────────────────────────────────────

    def is_original_value_modified(self) -> bool:
        return self.value != self.get_original_value()

    def contains_assertion(self) -> bool:
        return self.assert_equals is not None

    def validate_assertions(self) -> bool:
        if self.assert_equals is None:
            return True
        return self.assert_equals == self.value

    # ── Random modification ──────────────────────────────────────────────

    @abstractmethod
    def _random_modification(self, rng: RandomSource) -> VariableModification:
        """Build a random modification suited to this cell's kind."""

    def create_random_modification(self, rng: RandomSource) -> VariableModification:
        """Replace the chain with one random modification shaped to the original.

        Returns the installed modification.
        """
        modification = self._random_modification(rng)
        self.set_modifications([modification])
        return modification

    def create_copy(self) -> ModifiableVariable:
        return self.model_copy(update={"modifications": [m.model_copy() for m in self.modifications]})

    def __str__(self) -> str:
        parts = [f"original_value={format_value(self.get_original_value())}"]
        if self.modifications:
            parts.append("modifications=[" + ", ".join(str(m) for m in self.modifications) + "]")
        if self.assert_equals is not None:
            parts.append(f"assert_equals={format_value(self.assert_equals)}")
        return f"{type(self).__name__}{{{', '.join(parts)}}}"
