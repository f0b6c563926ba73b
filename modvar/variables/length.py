"""Length field derived from a byte array cell."""

from __future__ import annotations

from typing import Any

from pydantic import field_validator

from modvar.core.errors import UnsupportedOperationError
from modvar.variables.byte_array import ModifiableByteArray
from modvar.variables.integer import ModifiableInteger


class ModifiableLengthField(ModifiableInteger):
    """32-bit cell whose original value is the length of ``ref``'s current value.

    Modifications on the length field apply on top of the derived length, so a
    harness can send a length that disagrees with the payload it describes.
    """

    ref: ModifiableByteArray

    @field_validator("original_value")
    @classmethod
    def _derived_only(cls, v: Any) -> Any:
        if v is not None:
            raise UnsupportedOperationError("Cannot set the original value of a ModifiableLengthField")
        return v

    def get_original_value(self) -> int | None:
        value = self.ref.value
        return None if value is None else len(value)

    def set_original_value(self, value: Any) -> None:
        raise UnsupportedOperationError("Cannot set the original value of a ModifiableLengthField")
