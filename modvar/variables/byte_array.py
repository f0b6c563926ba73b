"""Byte array mutation cell."""

from __future__ import annotations

from pydantic import Field

from modvar.catalog import byte_array as catalog
from modvar.core.hexbytes import HexBytes
from modvar.core.randomness import RandomSource
from modvar.modifications.byte_array import ByteArrayModification, ByteArrayModificationBase
from modvar.variables.base import ModifiableVariable


class ModifiableByteArray(ModifiableVariable):
    original_value: HexBytes | None = None
    modifications: list[ByteArrayModification] = Field(default_factory=list)
    assert_equals: HexBytes | None = None

    def _random_modification(self, rng: RandomSource) -> ByteArrayModificationBase:
        return catalog.create_random_modification(self.get_original_value(), rng)
