"""Validation of cell values against their declared ``VariableProperty``."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from modvar.analysis.properties import VariableProperty, declared_variable_properties
from modvar.variables.base import ModifiableVariable
from modvar.variables.byte_array import ModifiableByteArray
from modvar.variables.string import ModifiableString


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: tuple[str, ...] = field(default_factory=tuple)
    field_name: str | None = None

    @classmethod
    def success(cls, field_name: str | None = None) -> ValidationResult:
        return cls(valid=True, field_name=field_name)

    @classmethod
    def failure(cls, errors: str | list[str], field_name: str | None = None) -> ValidationResult:
        if isinstance(errors, str):
            errors = [errors]
        return cls(valid=False, errors=tuple(errors), field_name=field_name)

    @classmethod
    def combine(cls, *results: ValidationResult) -> ValidationResult:
        errors = [error for result in results if not result.valid for error in result.errors]
        return cls(valid=all(result.valid for result in results), errors=tuple(errors))

    def formatted_errors(self) -> str:
        if not self.errors:
            return ""
        if self.field_name is not None:
            prefix = f"Validation failed for field '{self.field_name}': "
        else:
            prefix = "Validation failed: "
        if len(self.errors) == 1:
            return prefix + self.errors[0]
        return prefix + "\n" + "\n".join(f"  {i}. {error}" for i, error in enumerate(self.errors, 1))


def _check_length(kind: str, length: int, prop: VariableProperty, errors: list[str]) -> None:
    if prop.min_length is not None and length < prop.min_length:
        errors.append(f"{kind} length {length} is less than minimum required length {prop.min_length}")
    if prop.max_length is not None and length > prop.max_length:
        errors.append(f"{kind} length {length} exceeds maximum allowed length {prop.max_length}")


def validate_variable(
    variable: ModifiableVariable | None,
    prop: VariableProperty | None,
    field_name: str | None = None,
) -> ValidationResult:
    """Check the current value of ``variable`` against the length bounds of ``prop``.

    Byte arrays are measured in bytes, strings by their UTF-8 encoded length.
    Unset values and other variable kinds always pass.
    """
    if variable is None or prop is None:
        return ValidationResult.success(field_name)

    errors: list[str] = []
    value = variable.value
    if value is not None:
        if isinstance(variable, ModifiableByteArray):
            _check_length("Byte array", len(value), prop, errors)
        elif isinstance(variable, ModifiableString):
            _check_length("String byte", len(value.encode("utf-8")), prop, errors)

    if errors:
        return ValidationResult.failure(errors, field_name)
    return ValidationResult.success(field_name)


def validate_object(obj: Any) -> ValidationResult:
    """Validate every annotated cell slot of ``obj``."""
    if obj is None:
        return ValidationResult.success()
    results = []
    for name, prop in declared_variable_properties(type(obj)).items():
        value = getattr(obj, name, None)
        if isinstance(value, ModifiableVariable):
            results.append(validate_variable(value, prop, name))
    return ValidationResult.combine(*results)
