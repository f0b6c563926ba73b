"""Tests for modvar.analysis.validation."""

from __future__ import annotations

from modvar.analysis.properties import PropertyType, VariableProperty
from modvar.analysis.validation import ValidationResult, validate_object, validate_variable
from modvar.catalog import byte_array as ba
from modvar.variables import ModifiableByteArray, ModifiableInteger, ModifiableString

BOUNDED = VariableProperty(type=PropertyType.COOKIE, min_length=2, max_length=4)


class TestValidationResult:
    def test_success(self):
        result = ValidationResult.success("f")
        assert result.valid
        assert result.errors == ()
        assert result.formatted_errors() == ""

    def test_single_error_with_field(self):
        result = ValidationResult.failure("too long", "session_id")
        assert not result.valid
        assert result.formatted_errors() == "Validation failed for field 'session_id': too long"

    def test_multiple_errors(self):
        result = ValidationResult.failure(["a", "b"])
        assert result.formatted_errors() == "Validation failed: \n  1. a\n  2. b"

    def test_combine(self):
        combined = ValidationResult.combine(
            ValidationResult.success("x"),
            ValidationResult.failure("a", "y"),
            ValidationResult.failure(["b", "c"], "z"),
        )
        assert not combined.valid
        assert combined.errors == ("a", "b", "c")
        assert combined.field_name is None

    def test_combine_nothing_is_valid(self):
        assert ValidationResult.combine().valid


class TestValidateVariable:
    def test_byte_array_within_bounds(self):
        assert validate_variable(ModifiableByteArray(original_value=b"abc"), BOUNDED).valid

    def test_byte_array_too_short(self):
        result = validate_variable(ModifiableByteArray(original_value=b"a"), BOUNDED, "cookie")
        assert result.errors == ("Byte array length 1 is less than minimum required length 2",)
        assert result.field_name == "cookie"

    def test_modified_value_is_checked(self):
        cell = ModifiableByteArray(original_value=b"abc", modifications=[ba.duplicate()])
        result = validate_variable(cell, BOUNDED)
        assert result.errors == ("Byte array length 6 exceeds maximum allowed length 4",)

    def test_string_measured_in_utf8_bytes(self):
        result = validate_variable(ModifiableString(original_value="ééé"), BOUNDED)
        assert result.errors == ("String byte length 6 exceeds maximum allowed length 4",)
        assert validate_variable(ModifiableString(original_value="é"), BOUNDED).valid

    def test_other_kinds_pass(self):
        assert validate_variable(ModifiableInteger(original_value=123456), BOUNDED).valid

    def test_missing_pieces_pass(self):
        assert validate_variable(None, BOUNDED).valid
        assert validate_variable(ModifiableByteArray(original_value=b""), None).valid
        assert validate_variable(ModifiableByteArray(), BOUNDED).valid


class TestValidateObject:
    def test_none(self):
        assert validate_object(None).valid

    def test_valid_holder(self, handshake):
        assert validate_object(handshake).valid

    def test_collects_every_failure(self, handshake):
        handshake.session_id.add_modification(ba.append_value(bytes(30)))
        result = validate_object(handshake)
        assert not result.valid
        assert result.errors == ("Byte array length 38 exceeds maximum allowed length 32",)

    def test_unannotated_object(self):
        assert validate_object(object()).valid
