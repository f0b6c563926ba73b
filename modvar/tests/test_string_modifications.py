"""Tests for modvar.modifications.string."""

from __future__ import annotations

import pytest
from pydantic import TypeAdapter

from modvar.catalog import string as sc
from modvar.modifications.string import StringDeleteModification, StringModification


class TestAppendPrepend:
    def test_append(self):
        assert sc.append_value("!").modify("hello") == "hello!"

    def test_prepend(self):
        assert sc.prepend_value(">").modify("hello") == ">hello"

    def test_absent_input_treated_as_empty(self):
        assert sc.append_value("x").modify(None) == "x"
        assert sc.prepend_value("x").modify(None) == "x"


class TestInsert:
    @pytest.mark.parametrize(
        "position, expected",
        [(0, "Xabc"), (2, "abXc"), (3, "abcX"), (10, "abXc"), (-1, "abXc")],
    )
    def test_positions(self, position, expected):
        assert sc.insert_value("X", position).modify("abc") == expected

    def test_insert_counts_code_points(self):
        assert sc.insert_value("-", 2).modify("héllo") == "hé-llo"

    def test_insert_into_absent_input(self):
        assert sc.insert_value("X", 7).modify(None) == "X"


class TestDelete:
    def test_delete_range(self):
        assert sc.delete(1, 2).modify("abcdef") == "adef"

    def test_negative_start(self):
        assert sc.delete(-2, 2).modify("abcdef") == "abcd"

    def test_out_of_range_is_a_no_op(self):
        assert sc.delete(5, 2).modify("abcdef") == "abcdef"

    def test_negative_count_is_a_no_op(self):
        assert sc.delete(0, -3).modify("abcdef") == "abcdef"

    def test_absent_input_stays_absent(self):
        assert sc.delete(0, 1).modify(None) is None


class TestExplicit:
    def test_explicit(self):
        assert sc.explicit_value("forced").modify("original") == "forced"
        assert sc.explicit_value("forced").modify(None) == "forced"

    def test_explicit_from_file(self):
        mod = sc.explicit_value_from_file(2)
        assert mod.explicit_value == "%s%s%s%s"
        assert mod.modify("anything") == "%s%s%s%s"


class TestModel:
    def test_union_selects_variant_by_kind(self):
        mod = TypeAdapter(StringModification).validate_python(
            {"kind": "string_delete", "start_position": 1, "count": 2}
        )
        assert mod == StringDeleteModification(start_position=1, count=2)

    def test_str_escapes_control_characters(self):
        assert str(sc.append_value("a\r\n")) == "StringAppendValueModification{append_value=a\\r\\n}"


class TestNeighbors:
    def test_append_neighbor_replaces_one_character(self, scripted):
        assert sc.append_value("ab").modified_copy(scripted([1, 0x41])) == sc.append_value("aA")

    def test_empty_explicit_neighbor(self, scripted):
        assert sc.explicit_value("").modified_copy(scripted()) == sc.explicit_value("")

    def test_delete_neighbor_moves_start_not_below_zero(self, scripted):
        neighbor = sc.delete(2, 1).modified_copy(scripted([0, 10, 1]))
        assert neighbor == sc.delete(0, 1)
