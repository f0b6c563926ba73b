"""Tests for modvar.core: errors, hex encoding, random sources and logging."""

from __future__ import annotations

import json
import logging

import pytest
from pydantic import BaseModel

from modvar.catalog import integer as ic
from modvar.core.config import get_settings
from modvar.core.errors import (
    ErrorCode,
    FileConfigurationError,
    MissingOriginalValueError,
    ModifiableVariableError,
    UnsupportedOperationError,
)
from modvar.core.hexbytes import HexBytes, bytes_to_hex, hex_to_bytes
from modvar.core.logging import DevFormatter, JSONFormatter, setup_logging
from modvar.core.randomness import (
    RandomSource,
    SeededRandom,
    next_bool,
    random_bytes,
    signed_offset,
)


# ── Errors ───────────────────────────────────────────────────────────────────


class TestErrors:
    def test_codes(self):
        assert MissingOriginalValueError("x").code is ErrorCode.MISSING_ORIGINAL_VALUE
        assert FileConfigurationError("x").code is ErrorCode.FILE_CONFIGURATION
        assert UnsupportedOperationError("x").code is ErrorCode.UNSUPPORTED_OPERATION

    def test_str_carries_code(self):
        err = FileConfigurationError("vector file missing")
        assert str(err) == "[FILE_CONFIGURATION] vector file missing"
        assert err.message == "vector file missing"

    def test_builtin_bases(self):
        assert isinstance(MissingOriginalValueError("x"), ValueError)
        assert isinstance(UnsupportedOperationError("x"), TypeError)

    def test_common_base(self):
        for cls in (MissingOriginalValueError, FileConfigurationError, UnsupportedOperationError):
            assert issubclass(cls, ModifiableVariableError)


# ── Hex ──────────────────────────────────────────────────────────────────────


class _Payload(BaseModel):
    data: HexBytes


class TestHex:
    def test_bytes_to_hex_upper_case(self):
        assert bytes_to_hex(b"\x0a\xff") == "0AFF"

    def test_bytes_to_hex_separator(self):
        assert bytes_to_hex(b"\x01\x02\x03", " ") == "01 02 03"

    def test_bytes_to_hex_none(self):
        assert bytes_to_hex(None) == "null"

    def test_hex_to_bytes_ignores_whitespace(self):
        assert hex_to_bytes(" 0a ff\n\t10 ") == b"\x0a\xff\x10"

    def test_hex_to_bytes_empty(self):
        assert hex_to_bytes("") == b""

    def test_hex_to_bytes_odd_length(self):
        with pytest.raises(ValueError, match="odd length"):
            hex_to_bytes("ABC")

    def test_hex_to_bytes_invalid_digit(self):
        with pytest.raises(ValueError):
            hex_to_bytes("ZZ")

    def test_model_accepts_hex_and_lists(self):
        assert _Payload(data="DE AD").data == b"\xde\xad"
        assert _Payload(data=[1, 2]).data == b"\x01\x02"
        assert _Payload(data=bytearray(b"\x07")).data == b"\x07"

    def test_model_json_dump(self):
        assert _Payload(data=b"\xde\xad").model_dump_json() == '{"data":"DEAD"}'

    def test_python_dump_keeps_bytes(self):
        assert _Payload(data=b"\x01").model_dump() == {"data": b"\x01"}


# ── Randomness ───────────────────────────────────────────────────────────────


class TestSeededRandom:
    def test_is_a_random_source(self):
        assert isinstance(SeededRandom(1), RandomSource)

    def test_same_seed_same_sequence(self):
        a, b = SeededRandom(42), SeededRandom(42)
        assert [a.next_uint(1000) for _ in range(20)] == [b.next_uint(1000) for _ in range(20)]

    def test_values_in_range(self):
        rng = SeededRandom(7)
        assert all(0 <= rng.next_uint(5) < 5 for _ in range(200))

    def test_non_positive_bound_rejected(self):
        with pytest.raises(ValueError):
            SeededRandom(1).next_uint(0)

    def test_fill_random_bytes(self):
        buf = bytearray(16)
        SeededRandom(3).fill_random_bytes(buf)
        assert len(buf) == 16

    def test_reseed_restarts_sequence(self):
        rng = SeededRandom(9)
        first = [rng.next_uint(100) for _ in range(5)]
        rng.reseed(9)
        assert [rng.next_uint(100) for _ in range(5)] == first

    def test_default_seed_from_settings(self, monkeypatch):
        monkeypatch.setenv("MODVAR_RANDOM_SEED", "77")
        get_settings.cache_clear()
        assert SeededRandom().seed == 77
        assert repr(SeededRandom()) == "SeededRandom(seed=77)"


class TestRandomHelpers:
    def test_next_bool(self, scripted):
        assert next_bool(scripted([1])) is True
        assert next_bool(scripted([0])) is False

    def test_random_bytes(self, scripted):
        assert random_bytes(scripted(fill_byte=0x11), 3) == b"\x11\x11\x11"

    def test_random_bytes_zero_length_draws_nothing(self, scripted):
        rng = scripted()
        assert random_bytes(rng, 0) == b""
        assert rng.bounds == []

    def test_signed_offset(self, scripted):
        assert signed_offset(scripted([5, 0]), 32) == 5
        assert signed_offset(scripted([5, 1]), 32) == -5


# ── Logging ──────────────────────────────────────────────────────────────────


def _record(msg: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord("modvar.test", logging.INFO, __file__, 10, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def _restore_logging():
    root = logging.getLogger()
    modifications = logging.getLogger("modvar.modifications")
    saved = (list(root.handlers), root.level, modifications.level)
    yield
    root.handlers[:] = saved[0]
    root.setLevel(saved[1])
    modifications.setLevel(saved[2])


class TestLogging:
    def test_json_formatter_includes_context(self):
        out = json.loads(JSONFormatter().format(_record(holder="Record", modification="integer_add")))
        assert out["message"] == "hello"
        assert out["level"] == "INFO"
        assert out["holder"] == "Record"
        assert out["modification"] == "integer_add"
        assert "field" not in out

    def test_dev_formatter_prefixes_field(self):
        out = DevFormatter().format(_record(field="session_id"))
        assert "[session_id] hello" in out
        assert "modvar.test" in out

    def test_dev_formatter_prefixes_holder_and_field(self):
        out = DevFormatter().format(_record(holder="ClientHello", field="session_id"))
        assert "[ClientHello.session_id] hello" in out

    def test_dev_formatter_prefixes_modification(self):
        out = DevFormatter().format(_record(modification="integer_add"))
        assert "[integer_add] hello" in out

    def test_applied_modification_carries_kind(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="modvar.modifications"):
            ic.add(1).modify(1)
        record = caplog.records[-1]
        assert record.modification == "integer_add"
        assert "new value: 2" in record.getMessage()

    @pytest.mark.usefixtures("_restore_logging")
    def test_setup_logging_development(self):
        setup_logging("development", "DEBUG")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, DevFormatter)
        assert logging.getLogger("modvar.modifications").level == logging.DEBUG

    @pytest.mark.usefixtures("_restore_logging")
    def test_setup_logging_production(self):
        setup_logging("production", "WARNING")
        root = logging.getLogger()
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
        assert root.level == logging.WARNING
        assert logging.getLogger("modvar.modifications").level == logging.WARNING
