"""Boolean modification catalog."""

from __future__ import annotations

from modvar.core.randomness import RandomSource
from modvar.modifications.boolean import (
    BooleanExplicitValueModification,
    BooleanModificationBase,
    BooleanToggleModification,
)


def toggle() -> BooleanToggleModification:
    return BooleanToggleModification()


def explicit_value(value: bool) -> BooleanExplicitValueModification:
    return BooleanExplicitValueModification(explicit_value=value)


def create_random_modification(rng: RandomSource) -> BooleanModificationBase:
    """Toggle, or force ``True`` / ``False`` with equal probability."""
    choice = rng.next_uint(3)
    if choice == 0:
        return toggle()
    return explicit_value(choice == 1)
