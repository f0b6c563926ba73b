"""Hex encoding used when byte payloads are serialized.

Raw bytes are written as upper-case hex text. Reading is permissive: any
whitespace (spaces, tabs, newlines) inside the hex text is ignored, so values
can be pretty-printed across several lines in configuration files.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer


def bytes_to_hex(value: bytes | None, separator: str = "") -> str:
    if value is None:
        return "null"
    return value.hex(separator).upper() if separator else value.hex().upper()


def hex_to_bytes(text: str) -> bytes:
    """Decode hex text, ignoring all whitespace.

    Raises:
        ValueError: if the remaining characters are not valid hex.
    """
    compact = "".join(text.split())
    if len(compact) % 2:
        raise ValueError(f"hex string has odd length: {compact!r}")
    return bytes.fromhex(compact)


def _serialize_hex(value: bytes) -> str:
    return bytes_to_hex(value)


def _coerce_bytes(value: Any) -> Any:
    if isinstance(value, str):
        return hex_to_bytes(value)
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, (list, tuple)):
        return bytes(value)
    return value


HexBytes = Annotated[
    bytes,
    BeforeValidator(_coerce_bytes),
    PlainSerializer(_serialize_hex, return_type=str, when_used="json"),
]
