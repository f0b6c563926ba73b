"""Boolean modifications."""

from __future__ import annotations

from typing import Annotated, Callable, Literal, Union

from pydantic import Field

from modvar.core.randomness import RandomSource
from modvar.modifications.base import VariableModification, log_modification


class BooleanModificationBase(VariableModification):
    def modify(self, value: bool | None) -> bool | None:
        return modify_boolean(self, value)

    def modified_copy(self, rng: RandomSource) -> BooleanModificationBase:
        return boolean_neighbor(self, rng)


class BooleanToggleModification(BooleanModificationBase):
    kind: Literal["boolean_toggle"] = "boolean_toggle"


class BooleanExplicitValueModification(BooleanModificationBase):
    kind: Literal["boolean_explicit_value"] = "boolean_explicit_value"
    explicit_value: bool


BooleanModification = Annotated[
    Union[BooleanToggleModification, BooleanExplicitValueModification],
    Field(discriminator="kind"),
]


def _toggle(mod: BooleanToggleModification, value: bool | None) -> bool | None:
    return not value


def _explicit(mod: BooleanExplicitValueModification, value: bool | None) -> bool | None:
    return mod.explicit_value


_HANDLERS: dict[type, Callable[..., bool | None]] = {
    BooleanToggleModification: _toggle,
    BooleanExplicitValueModification: _explicit,
}


def modify_boolean(modification: BooleanModificationBase, value: bool | None) -> bool | None:
    result = _HANDLERS[type(modification)](modification, value)
    log_modification(modification, result)
    return result


def boolean_neighbor(modification: BooleanModificationBase, rng: RandomSource) -> BooleanModificationBase:
    if isinstance(modification, BooleanExplicitValueModification):
        return BooleanExplicitValueModification(explicit_value=not modification.explicit_value)
    return BooleanToggleModification()
