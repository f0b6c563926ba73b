"""Text and path mutation cells."""

from __future__ import annotations

from pydantic import Field

from modvar.catalog import path as path_catalog
from modvar.catalog import string as string_catalog
from modvar.core.randomness import RandomSource
from modvar.modifications.base import VariableModification
from modvar.modifications.path import PathModification
from modvar.modifications.string import StringModification
from modvar.variables.base import ModifiableVariable


class ModifiableString(ModifiableVariable):
    original_value: str | None = None
    modifications: list[StringModification] = Field(default_factory=list)
    assert_equals: str | None = None

    def _random_modification(self, rng: RandomSource) -> VariableModification:
        return string_catalog.create_random_modification(self.get_original_value(), rng)

    def get_bytes(self, encoding: str = "utf-8") -> bytes | None:
        """Encoded form of the current value."""
        value = self.value
        return None if value is None else value.encode(encoding)


class ModifiablePath(ModifiableString):
    """A ``/`` separated path; accepts path and plain string modifications."""

    modifications: list[PathModification] = Field(default_factory=list)

    def _random_modification(self, rng: RandomSource) -> VariableModification:
        return path_catalog.create_random_modification(self.get_original_value(), rng)
