"""Mutation cells for every supported data kind."""

from modvar.variables.base import ModifiableVariable  # noqa: F401
from modvar.variables.boolean import ModifiableBoolean  # noqa: F401
from modvar.variables.byte_array import ModifiableByteArray  # noqa: F401
from modvar.variables.integer import (  # noqa: F401
    ModifiableBigInteger,
    ModifiableByte,
    ModifiableInteger,
    ModifiableLong,
)
from modvar.variables.length import ModifiableLengthField  # noqa: F401
from modvar.variables.string import ModifiablePath, ModifiableString  # noqa: F401

__all__ = [
    "ModifiableVariable",
    "ModifiableBigInteger",
    "ModifiableBoolean",
    "ModifiableByte",
    "ModifiableByteArray",
    "ModifiableInteger",
    "ModifiableLong",
    "ModifiableLengthField",
    "ModifiablePath",
    "ModifiableString",
]
