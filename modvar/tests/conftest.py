"""Shared fixtures for the modvar test suite."""

from __future__ import annotations

from collections import deque
from typing import Iterable

import pytest

from modvar.analysis.holder import ModifiableVariableHolder
from modvar.analysis.properties import PropertyType, VariableProperty
from modvar.catalog.explicit_values import load_explicit_values
from modvar.core.config import get_settings
from modvar.variables import (
    ModifiableBoolean,
    ModifiableByteArray,
    ModifiableInteger,
    ModifiableString,
)


# ── Random sources ───────────────────────────────────────────────────────────


class ScriptedRandom:
    """``RandomSource`` returning a fixed script of values.

    ``next_uint`` pops the next scripted value (which must be below the
    requested bound); once the script is exhausted it returns 0.
    ``fill_random_bytes`` writes ``fill_byte``.
    """

    def __init__(self, values: Iterable[int] = (), fill_byte: int = 0xAB) -> None:
        self.values = deque(values)
        self.fill_byte = fill_byte
        self.bounds: list[int] = []

    def next_uint(self, bound: int) -> int:
        assert bound > 0, f"next_uint called with bound {bound}"
        self.bounds.append(bound)
        value = self.values.popleft() if self.values else 0
        assert 0 <= value < bound, f"scripted value {value} outside [0, {bound})"
        return value

    def fill_random_bytes(self, buf: bytearray) -> None:
        buf[:] = bytes([self.fill_byte]) * len(buf)


@pytest.fixture
def scripted():
    """Factory for scripted random sources."""
    return ScriptedRandom


# ── Settings / caches ────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    """Isolate each test from MODVAR_* variables and cached settings."""
    for key in ("MODVAR_APP_ENV", "MODVAR_EXPLICIT_VALUES_PATH", "MODVAR_RANDOM_SEED"):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    load_explicit_values.cache_clear()
    yield
    get_settings.cache_clear()
    load_explicit_values.cache_clear()


# ── Sample holders ───────────────────────────────────────────────────────────


class Extension(ModifiableVariableHolder):
    modifiable_fields = ("extension_type", "extension_bytes")

    def __init__(self, extension_type: int = 0, payload: bytes = b"") -> None:
        self.extension_type = ModifiableInteger(original_value=extension_type)
        self.extension_bytes = ModifiableByteArray(original_value=payload)


class HandshakeMessage(ModifiableVariableHolder):
    modifiable_fields = ("message_type", "length", "session_id")
    holder_fields = ("extensions",)
    variable_properties = {
        "length": VariableProperty(type=PropertyType.LENGTH),
        "session_id": VariableProperty(type=PropertyType.COOKIE, min_length=1, max_length=32),
    }

    def __init__(self) -> None:
        self.message_type = ModifiableInteger(original_value=1)
        self.length = ModifiableInteger(original_value=0)
        self.session_id = ModifiableByteArray(original_value=bytes(range(8)))
        self.extensions: list[Extension] = [Extension(0, b"\x00"), Extension(10, b"\x00\x17")]


class ClientHello(HandshakeMessage):
    modifiable_fields = ("server_name", "compression_enabled")

    def __init__(self) -> None:
        super().__init__()
        self.server_name = ModifiableString(original_value="example.org")
        self.compression_enabled = ModifiableBoolean(original_value=False)


class Record(ModifiableVariableHolder):
    modifiable_fields = ("content_type",)
    holder_fields = ("message",)

    def __init__(self, message=None) -> None:
        self.content_type = ModifiableByteArray(original_value=b"\x16")
        self.message = message


@pytest.fixture
def handshake() -> HandshakeMessage:
    return HandshakeMessage()


@pytest.fixture
def client_hello() -> ClientHello:
    return ClientHello()


@pytest.fixture
def holder_classes():
    """The sample holder classes, for tests that build their own graphs."""
    return {
        "Extension": Extension,
        "HandshakeMessage": HandshakeMessage,
        "ClientHello": ClientHello,
        "Record": Record,
    }
