"""Core configuration for the modvar library."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MODVAR_",
        case_sensitive=False,
    )

    # ── App ──────────────────────────────────────────────────────────────
    app_env: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"

    # ── Random source ────────────────────────────────────────────────────
    random_seed: int = 0

    # ── Byte array catalog ───────────────────────────────────────────────
    byte_array_max_length: int = Field(default=200, gt=0)
    byte_array_length_estimation: int = Field(default=50, gt=0)
    byte_array_max_file_entries: int = Field(default=1000, gt=0)

    # ── Integer catalog ──────────────────────────────────────────────────
    integer_max_modification_value: int = Field(default=32000, gt=0)
    integer_max_shift_value: int = Field(default=20, gt=0)
    integer_max_multiply_value: int = Field(default=256, gt=0)
    integer_max_insert_value: int = Field(default=256, gt=0)
    integer_max_insert_position: int = Field(default=32, gt=0)
    integer_max_file_entries: int = Field(default=200, gt=0)

    # ── Single byte / arbitrary precision catalog ────────────────────────
    byte_max_modification_value: int = Field(default=127, gt=0)
    byte_max_file_entries: int = Field(default=127, gt=0)
    big_integer_max_modification_value: int = Field(default=320000, gt=0)
    big_integer_max_shift_value: int = Field(default=50, gt=0)
    big_integer_max_insert_position: int = Field(default=50, gt=0)

    # ── String / path catalog ────────────────────────────────────────────
    string_max_length: int = Field(default=1000, gt=0)
    string_length_estimation: int = Field(default=50, gt=0)
    path_max_insert_length: int = Field(default=200, gt=0)
    path_parts_estimation: int = Field(default=50, gt=0)
    path_max_directory_traversal: int = Field(default=10, gt=0)
    path_max_directory_separator: int = Field(default=10, gt=0)

    # ── Explicit value vectors ───────────────────────────────────────────
    explicit_values_path: str = ""  # empty = bundled resources/explicit_values.yaml


@lru_cache
def get_settings() -> Settings:
    """Return cached settings singleton."""
    return Settings()
