"""Holder contract, object graph analyzer and property validation."""

from modvar.analysis.analyzer import (  # noqa: F401
    get_all_modifiable_variable_fields,
    get_all_modifiable_variable_fields_recursively,
    get_all_modifiable_variable_holders_recursively,
    get_random_modifiable_variable_field,
    is_modifiable_variable_holder,
)
from modvar.analysis.holder import (  # noqa: F401
    HoldsModifiableVariables,
    ModifiableVariableField,
    ModifiableVariableHolder,
    ModifiableVariableListHolder,
)
from modvar.analysis.properties import PropertyFormat, PropertyType, VariableProperty  # noqa: F401
from modvar.analysis.validation import ValidationResult, validate_object, validate_variable  # noqa: F401

__all__ = [
    "get_all_modifiable_variable_fields",
    "get_all_modifiable_variable_fields_recursively",
    "get_all_modifiable_variable_holders_recursively",
    "get_random_modifiable_variable_field",
    "is_modifiable_variable_holder",
    "HoldsModifiableVariables",
    "ModifiableVariableField",
    "ModifiableVariableHolder",
    "ModifiableVariableListHolder",
    "PropertyFormat",
    "PropertyType",
    "VariableProperty",
    "ValidationResult",
    "validate_object",
    "validate_variable",
]
