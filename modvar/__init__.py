"""modvar: modifiable variables for protocol fuzzing harnesses.

A modifiable variable keeps a pristine original value and an ordered chain of
modifications that produce a mutated value on demand. The analyzer finds every
modifiable variable reachable from a protocol message so a harness can pick
one and mutate it.
"""

from modvar.core.errors import (  # noqa: F401
    FileConfigurationError,
    MissingOriginalValueError,
    ModifiableVariableError,
    UnsupportedOperationError,
)
from modvar.core.randomness import RandomSource, SeededRandom  # noqa: F401
from modvar.variables import (  # noqa: F401
    ModifiableBigInteger,
    ModifiableBoolean,
    ModifiableByte,
    ModifiableByteArray,
    ModifiableInteger,
    ModifiableLengthField,
    ModifiableLong,
    ModifiablePath,
    ModifiableString,
    ModifiableVariable,
)

__version__ = "0.1.0"

__all__ = [
    "FileConfigurationError",
    "MissingOriginalValueError",
    "ModifiableVariableError",
    "UnsupportedOperationError",
    "RandomSource",
    "SeededRandom",
    "ModifiableBigInteger",
    "ModifiableBoolean",
    "ModifiableByte",
    "ModifiableByteArray",
    "ModifiableInteger",
    "ModifiableLengthField",
    "ModifiableLong",
    "ModifiablePath",
    "ModifiableString",
    "ModifiableVariable",
]
