"""Modification families (one discriminated union per data kind)."""

from modvar.modifications.base import VariableModification  # noqa: F401
from modvar.modifications.boolean import BooleanModification, BooleanModificationBase  # noqa: F401
from modvar.modifications.byte_array import ByteArrayModification, ByteArrayModificationBase  # noqa: F401
from modvar.modifications.integer import IntegerModification, IntegerModificationBase  # noqa: F401
from modvar.modifications.path import PathModification, PathModificationBase  # noqa: F401
from modvar.modifications.string import StringModification, StringModificationBase  # noqa: F401

__all__ = [
    "VariableModification",
    "BooleanModification",
    "BooleanModificationBase",
    "ByteArrayModification",
    "ByteArrayModificationBase",
    "IntegerModification",
    "IntegerModificationBase",
    "PathModification",
    "PathModificationBase",
    "StringModification",
    "StringModificationBase",
]
