"""Boolean mutation cell."""

from __future__ import annotations

from pydantic import Field

from modvar.catalog import boolean as catalog
from modvar.core.randomness import RandomSource
from modvar.modifications.boolean import BooleanModification, BooleanModificationBase
from modvar.variables.base import ModifiableVariable


class ModifiableBoolean(ModifiableVariable):
    original_value: bool | None = None
    modifications: list[BooleanModification] = Field(default_factory=list)
    assert_equals: bool | None = None

    def _random_modification(self, rng: RandomSource) -> BooleanModificationBase:
        return catalog.create_random_modification(rng)
