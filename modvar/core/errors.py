"""Exception hierarchy for modvar.

Transformation algorithms never raise on malformed parameters, they return
their input unchanged. The errors below cover the few operations that cannot
proceed meaningfully.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Stable error codes carried by every modvar exception."""

    MISSING_ORIGINAL_VALUE = "MISSING_ORIGINAL_VALUE"
    FILE_CONFIGURATION = "FILE_CONFIGURATION"
    UNSUPPORTED_OPERATION = "UNSUPPORTED_OPERATION"
    INVALID_VALUE = "INVALID_VALUE"


class ModifiableVariableError(Exception):
    """Base class for all modvar errors."""

    code: ErrorCode = ErrorCode.INVALID_VALUE

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"


class MissingOriginalValueError(ModifiableVariableError, ValueError):
    """A modification needs an original value but the variable has none."""

    code = ErrorCode.MISSING_ORIGINAL_VALUE


class FileConfigurationError(ModifiableVariableError):
    """The explicit value vector file is missing or malformed."""

    code = ErrorCode.FILE_CONFIGURATION


class UnsupportedOperationError(ModifiableVariableError, TypeError):
    """The operation is not available for this kind of variable."""

    code = ErrorCode.UNSUPPORTED_OPERATION
