"""Explicit value vectors for the ``*_explicit_value_from_file`` modifications.

The vectors live in a YAML file with one list per data kind::

    byte_array:  ["00", "FF FF", ...]   # hex text
    integer:     [0, -1, 2147483647, ...]
    long:        [0, 9223372036854775807, ...]
    byte:        [0, -128, 127, ...]
    big_integer: [18446744073709551616, ...]
    string:      ["%s%s", ...]
    path:        ["../", ...]

The bundled file is used unless ``MODVAR_EXPLICIT_VALUES_PATH`` points
elsewhere. The file is read once per path and cached.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from modvar.core.config import get_settings
from modvar.core.errors import FileConfigurationError
from modvar.core.hexbytes import HexBytes

logger = logging.getLogger(__name__)

BUNDLED_VECTORS = Path(__file__).resolve().parent.parent / "resources" / "explicit_values.yaml"

_INT32 = (-(1 << 31), (1 << 31) - 1)
_INT64 = (-(1 << 63), (1 << 63) - 1)
_INT8 = (-(1 << 7), (1 << 7) - 1)


class ExplicitValueVectors(BaseModel):
    """Parsed vector file. Every section must hold at least one entry."""

    model_config = {"frozen": True, "extra": "ignore"}

    byte_array: tuple[HexBytes, ...]
    integer: tuple[int, ...]
    long: tuple[int, ...]
    byte: tuple[int, ...]
    big_integer: tuple[int, ...]
    string: tuple[str, ...]
    path: tuple[str, ...]

    @field_validator("byte_array", "integer", "long", "byte", "big_integer", "string", "path")
    @classmethod
    def _non_empty(cls, v: tuple) -> tuple:
        if not v:
            raise ValueError("section must contain at least one value")
        return v

    @field_validator("integer")
    @classmethod
    def _fits_int32(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        return _check_range(v, *_INT32)

    @field_validator("long")
    @classmethod
    def _fits_int64(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        return _check_range(v, *_INT64)

    @field_validator("byte")
    @classmethod
    def _fits_int8(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        return _check_range(v, *_INT8)


def _check_range(values: tuple[int, ...], low: int, high: int) -> tuple[int, ...]:
    for value in values:
        if not low <= value <= high:
            raise ValueError(f"{value} is outside [{low}, {high}]")
    return values


@lru_cache
def load_explicit_values(path: str = "") -> ExplicitValueVectors:
    """Load and validate a vector file (the bundled one for an empty path).

    Raises:
        FileConfigurationError: if the file is missing, unreadable or malformed.
    """
    source = Path(path) if path else BUNDLED_VECTORS
    try:
        with open(source, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise FileConfigurationError(f"Explicit value file {source} could not be read: {e}") from e
    except yaml.YAMLError as e:
        raise FileConfigurationError(f"Explicit value file {source} is not valid YAML: {e}") from e

    if not isinstance(data, dict):
        raise FileConfigurationError(f"Invalid explicit value file: expected mapping at {source}")

    try:
        vectors = ExplicitValueVectors.model_validate(data)
    except ValidationError as e:
        raise FileConfigurationError(f"Invalid explicit value file {source}: {e}") from e

    logger.debug(
        "Loaded explicit value vectors from %s (%d byte arrays, %d integers, %d longs, %d bytes, "
        "%d big integers, %d strings, %d paths)",
        source,
        len(vectors.byte_array),
        len(vectors.integer),
        len(vectors.long),
        len(vectors.byte),
        len(vectors.big_integer),
        len(vectors.string),
        len(vectors.path),
    )
    return vectors


def get_explicit_values() -> ExplicitValueVectors:
    """Return the vectors selected by the current settings."""
    return load_explicit_values(get_settings().explicit_values_path)
