"""Tests for modvar.variables: chain folding, assertions, copies and typed cells."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from modvar.catalog import boolean as bc
from modvar.catalog import byte_array as ba
from modvar.catalog import integer as ic
from modvar.catalog import path as pc
from modvar.catalog import string as sc
from modvar.core.errors import MissingOriginalValueError, UnsupportedOperationError
from modvar.modifications.byte_array import ByteArrayAppendValueModification
from modvar.variables import (
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


class TestBaseCell:
    def test_base_cell_is_abstract(self):
        with pytest.raises(TypeError, match="abstract"):
            ModifiableVariable()


class TestChain:
    def test_no_modifications_yields_original(self):
        assert ModifiableInteger(original_value=5).value == 5

    def test_unset_cell(self):
        cell = ModifiableByteArray()
        assert cell.value is None
        assert cell.get_original_value() is None

    def test_chain_folds_left_to_right(self):
        cell = ModifiableInteger(original_value=5)
        cell.add_modification(ic.add(3))
        cell.add_modification(ic.multiply(2))
        assert cell.value == 16

    def test_order_matters(self):
        cell = ModifiableInteger(original_value=5, modifications=[ic.multiply(2), ic.add(3)])
        assert cell.value == 13

    def test_original_value_untouched(self):
        cell = ModifiableByteArray(original_value=b"\x01\x02")
        cell.add_modification(ba.delete(0, 1))
        assert cell.value == b"\x02"
        assert cell.original_value == b"\x01\x02"

    def test_value_recomputed_on_each_read(self):
        cell = ModifiableInteger(original_value=1, modifications=[ic.add(1)])
        assert cell.value == 2
        cell.set_original_value(10)
        assert cell.value == 11

    def test_add_none_is_ignored(self):
        cell = ModifiableInteger(original_value=1)
        cell.add_modification(None)
        assert cell.modifications == []

    def test_set_and_clear_modifications(self):
        cell = ModifiableInteger(original_value=1)
        cell.set_modifications([ic.add(1), ic.add(2)])
        assert cell.value == 4
        cell.clear_modifications()
        assert cell.value == 1

    def test_wrong_family_rejected(self):
        cell = ModifiableByteArray(original_value=b"\x00")
        with pytest.raises(ValidationError):
            cell.add_modification(sc.append_value("x"))


class TestInspection:
    def test_is_original_value_modified(self):
        cell = ModifiableByteArray(original_value=b"\x01")
        cell.add_modification(ba.xor(b"\x00", 0))
        assert not cell.is_original_value_modified()
        cell.add_modification(ba.xor(b"\xff", 0))
        assert cell.is_original_value_modified()

    def test_assertions(self):
        cell = ModifiableInteger(original_value=1, modifications=[ic.add(1)])
        assert not cell.contains_assertion()
        assert cell.validate_assertions()
        cell.assert_equals = 2
        assert cell.contains_assertion()
        assert cell.validate_assertions()
        cell.assert_equals = 3
        assert not cell.validate_assertions()

    def test_str(self):
        cell = ModifiableInteger(original_value=5, modifications=[ic.add(1)], assert_equals=6)
        assert str(cell) == (
            "ModifiableInteger{original_value=5, "
            "modifications=[IntegerAddModification{summand=1}], assert_equals=6}"
        )

    def test_str_byte_array_hex(self):
        assert str(ModifiableByteArray(original_value=b"\x0a")) == "ModifiableByteArray{original_value=0A}"


class TestCopy:
    def test_copy_is_independent(self):
        cell = ModifiableInteger(original_value=1, modifications=[ic.add(1)])
        copy = cell.create_copy()
        copy.add_modification(ic.add(5))
        copy.set_original_value(100)
        assert cell.value == 2
        assert copy.value == 106

    def test_copy_equal_to_source(self):
        cell = ModifiableByteArray(original_value=b"\x01", modifications=[ba.duplicate()], assert_equals=b"\x01\x01")
        assert cell.create_copy() == cell


class TestSerialization:
    def test_byte_array_json_uses_hex(self):
        cell = ModifiableByteArray(original_value=b"\x01\xab", modifications=[ba.xor(b"\xff", 0)])
        assert cell.model_dump(mode="json") == {
            "original_value": "01AB",
            "modifications": [{"kind": "byte_array_xor", "xor": "FF", "start_position": 0}],
            "assert_equals": None,
        }

    def test_round_trip(self):
        cell = ModifiablePath(
            original_value="/etc",
            modifications=[pc.toggle_root(), sc.append_value("x")],
        )
        restored = ModifiablePath.model_validate_json(cell.model_dump_json())
        assert restored == cell
        assert restored.value == "etcx"

    def test_modifications_parsed_from_dicts(self):
        cell = ModifiableByteArray.model_validate(
            {"original_value": "0102", "modifications": [{"kind": "byte_array_append_value", "bytes_to_append": "03"}]}
        )
        assert isinstance(cell.modifications[0], ByteArrayAppendValueModification)
        assert cell.value == b"\x01\x02\x03"


class TestIntegerCells:
    def test_range_checked(self):
        with pytest.raises(ValidationError):
            ModifiableInteger(original_value=2**31)
        with pytest.raises(ValidationError):
            ModifiableInteger(assert_equals=-(2**31) - 1)

    def test_long_accepts_wider_values(self):
        assert ModifiableLong(original_value=2**31).value == 2**31
        with pytest.raises(ValidationError):
            ModifiableLong(original_value=2**63)

    def test_width_drives_wrapping(self):
        assert ModifiableInteger(original_value=2**31 - 1, modifications=[ic.add(1)]).value == -(2**31)
        assert ModifiableLong(original_value=2**31 - 1, modifications=[ic.add(1)]).value == 2**31

    def test_range_checked_on_assignment(self):
        cell = ModifiableInteger()
        with pytest.raises(ValidationError):
            cell.set_original_value(2**40)

    def test_get_byte_array(self):
        assert ModifiableInteger(original_value=-2).get_byte_array() == b"\xff\xff\xff\xfe"
        assert ModifiableInteger(original_value=258).get_byte_array(2) == b"\x01\x02"
        assert ModifiableLong(original_value=1).get_byte_array() == b"\x00" * 7 + b"\x01"
        assert ModifiableInteger().get_byte_array() is None

    def test_get_byte_array_keeps_low_bytes(self):
        assert ModifiableInteger(original_value=40000).get_byte_array(2) == b"\x9c\x40"
        assert ModifiableInteger(original_value=-2).get_byte_array(1) == b"\xfe"
        assert ModifiableLong(original_value=2**40 + 5).get_byte_array(3) == b"\x00\x00\x05"

    def test_get_byte_array_zero_pads_wider_sizes(self):
        assert ModifiableInteger(original_value=-2).get_byte_array(6) == b"\x00\x00\xff\xff\xff\xfe"

    def test_get_byte_array_after_wrapping_modification(self):
        cell = ModifiableInteger(original_value=65535, modifications=[ic.add(1)])
        assert cell.get_byte_array(2) == b"\x00\x00"

    @pytest.mark.parametrize("size", [0, -1])
    def test_get_byte_array_rejects_empty_sizes(self, size):
        with pytest.raises(ValueError, match="at least 1"):
            ModifiableInteger(original_value=1).get_byte_array(size)

    def test_long_explicit_without_original_raises(self):
        cell = ModifiableLong(modifications=[ic.explicit_value(1)])
        with pytest.raises(MissingOriginalValueError):
            _ = cell.value

    def test_integer_explicit_without_original(self):
        assert ModifiableInteger(modifications=[ic.explicit_value(1)]).value == 1


class TestByteCells:
    def test_range_checked(self):
        assert ModifiableByte(original_value=-128).value == -128
        with pytest.raises(ValidationError):
            ModifiableByte(original_value=128)

    def test_arithmetic_wraps_at_eight_bits(self):
        assert ModifiableByte(original_value=127, modifications=[ic.add(1)]).value == -128
        assert ModifiableByte(original_value=-128, modifications=[ic.sub(1)]).value == 127
        assert ModifiableByte(original_value=0x0F, modifications=[ic.xor(0xFF)]).value == -16

    def test_unset_original(self):
        assert ModifiableByte(modifications=[ic.add(5)]).value is None
        assert ModifiableByte(modifications=[ic.sub(5)]).value == -5
        assert ModifiableByte(modifications=[ic.xor(5)]).value == 5
        assert ModifiableByte(modifications=[ic.explicit_value(5)]).value == 5

    def test_get_byte_array(self):
        assert ModifiableByte(original_value=-1).get_byte_array() == b"\xff"
        assert ModifiableByte(original_value=1).get_byte_array(2) == b"\x00\x01"

    def test_random_modification_draws_byte_variants(self, scripted):
        rng = scripted([2, 100])
        mod = ModifiableByte(original_value=1).create_random_modification(rng)
        assert mod == ic.xor(100)
        assert rng.bounds == [5, 127]


class TestBigIntegerCells:
    def test_no_range_limit(self):
        cell = ModifiableBigInteger(original_value=2**200, modifications=[ic.add(1)])
        assert cell.value == 2**200 + 1

    def test_nothing_wraps(self):
        assert ModifiableBigInteger(original_value=2**63 - 1, modifications=[ic.add(1)]).value == 2**63
        assert ModifiableBigInteger(original_value=3, modifications=[ic.multiply(2**70)]).value == 3 * 2**70

    def test_shifts_use_the_count_as_given(self):
        assert ModifiableBigInteger(original_value=1, modifications=[ic.shift_left(100)]).value == 2**100
        assert ModifiableBigInteger(original_value=2**100, modifications=[ic.shift_right(98)]).value == 4
        assert ModifiableBigInteger(original_value=-(2**10), modifications=[ic.shift_right(3)]).value == -(2**7)

    def test_unset_original(self):
        assert ModifiableBigInteger(modifications=[ic.shift_left(4)]).value == 0
        assert ModifiableBigInteger(modifications=[ic.shift_right(4)]).value is None
        assert ModifiableBigInteger(modifications=[ic.sub(5)]).value == -5
        assert ModifiableBigInteger(modifications=[ic.explicit_value(2**80)]).value == 2**80

    def test_get_byte_array(self):
        assert ModifiableBigInteger(original_value=255).get_byte_array() == b"\xff"
        assert ModifiableBigInteger(original_value=0).get_byte_array() == b"\x00"
        assert ModifiableBigInteger(original_value=-1).get_byte_array() == b"\xff"
        assert ModifiableBigInteger().get_byte_array() is None

    def test_get_byte_array_pads_to_multiple_of_size(self):
        assert ModifiableBigInteger(original_value=0x0102).get_byte_array(4) == b"\x00\x00\x01\x02"
        assert ModifiableBigInteger(original_value=0x80).get_byte_array(2) == b"\x00\x80"
        assert ModifiableBigInteger(original_value=0).get_byte_array(3) == b"\x00\x00\x00"
        assert ModifiableBigInteger(original_value=0x010203).get_byte_array(2) == b"\x00\x01\x02\x03"

    def test_random_modification_never_swaps_endian(self, scripted):
        rng = scripted([4, 60])
        mod = ModifiableBigInteger(original_value=1).create_random_modification(rng)
        assert mod == ic.explicit_value(60)
        assert rng.bounds == [11, 320000]

    def test_random_shift_bounded_by_settings(self, scripted):
        rng = scripted([5, 45])
        mod = ModifiableBigInteger(original_value=1).create_random_modification(rng)
        assert mod == ic.shift_left(45)
        assert rng.bounds == [11, 50]


class TestOtherCells:
    def test_boolean(self):
        cell = ModifiableBoolean(original_value=True, modifications=[bc.toggle()])
        assert cell.value is False
        cell.add_modification(bc.explicit_value(True))
        assert cell.value is True

    def test_boolean_toggle_unset(self):
        assert ModifiableBoolean(modifications=[bc.toggle()]).value is True

    def test_string_get_bytes(self):
        cell = ModifiableString(original_value="é", modifications=[sc.append_value("!")])
        assert cell.get_bytes() == b"\xc3\xa9!"
        assert cell.get_bytes("latin-1") == b"\xe9!"
        assert ModifiableString().get_bytes() is None

    def test_path_accepts_both_families(self):
        cell = ModifiablePath(original_value="/etc/passwd")
        cell.add_modification(pc.insert_directory_traversal(1, 0))
        cell.add_modification(sc.append_value("\0"))
        assert cell.value == "/../etc/passwd\0"

    def test_string_rejects_path_modifications(self):
        with pytest.raises(ValidationError):
            ModifiableString(original_value="a", modifications=[pc.toggle_root()])


class TestLengthField:
    def test_tracks_referenced_value(self):
        payload = ModifiableByteArray(original_value=b"abc")
        length = ModifiableLengthField(ref=payload)
        assert length.value == 3
        payload.add_modification(ba.append_value(b"d"))
        assert length.value == 4

    def test_modifications_apply_on_top(self):
        length = ModifiableLengthField(ref=ModifiableByteArray(original_value=b"abc"))
        length.add_modification(ic.add(1))
        assert length.value == 4
        assert length.is_original_value_modified()

    def test_unset_reference(self):
        assert ModifiableLengthField(ref=ModifiableByteArray()).value is None

    def test_original_value_cannot_be_set(self):
        length = ModifiableLengthField(ref=ModifiableByteArray(original_value=b""))
        with pytest.raises(UnsupportedOperationError):
            length.set_original_value(5)

    def test_original_value_rejected_at_construction(self):
        with pytest.raises(UnsupportedOperationError):
            ModifiableLengthField(ref=ModifiableByteArray(), original_value=5)


class TestRandomModification:
    def test_replaces_chain_and_returns_modification(self, scripted):
        cell = ModifiableBoolean(original_value=False, modifications=[bc.toggle(), bc.toggle()])
        mod = cell.create_random_modification(scripted([1]))
        assert mod == bc.explicit_value(True)
        assert cell.modifications == [mod]
        assert cell.value is True

    def test_byte_array_shaped_to_original(self, scripted):
        cell = ModifiableByteArray(original_value=b"")
        # xor drawn, remapped to append on an empty buffer
        mod = cell.create_random_modification(scripted([0, 2]))
        assert mod == ba.append_value(b"\xab\xab\xab")
        assert cell.value == b"\xab\xab\xab"

    def test_long_uses_its_width(self, scripted):
        rng = scripted([6, 19])
        mod = ModifiableLong(original_value=1).create_random_modification(rng)
        assert mod == ic.shift_left(19)
        assert rng.bounds == [12, 20]

    def test_path_uses_path_catalog(self, scripted):
        mod = ModifiablePath(original_value="/a").create_random_modification(scripted([5]))
        assert mod == pc.toggle_root()
