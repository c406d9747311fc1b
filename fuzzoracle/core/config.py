"""Core configuration for the fuzzoracle engine."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fuzzoracle.core.addresses import (
    CHEATCODE_ADDRESS,
    DEFAULT_SENDER,
    DEFAULT_TEST_CONTRACT,
    WORD_MAX,
    parse_int,
)

# Fixed process-wide seed used when nothing else is configured.
DEFAULT_SEED = 0x5EED


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FUZZORACLE_",
        case_sensitive=False,
    )

    # ── App ──────────────────────────────────────────────────────────────
    app_name: str = "fuzzoracle"
    app_env: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"

    # ── Generation ───────────────────────────────────────────────────────
    default_seed: int = DEFAULT_SEED
    address_max_attempts: int = Field(default=32, ge=1)

    # ── Harness addresses ────────────────────────────────────────────────
    harness_address: str = CHEATCODE_ADDRESS
    default_sender: str = DEFAULT_SENDER
    default_test_contract: str = DEFAULT_TEST_CONTRACT

    @field_validator("default_seed", mode="before")
    @classmethod
    def _parse_seed(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_int(value)
        return value

    @field_validator("default_seed")
    @classmethod
    def _check_seed_bounds(cls, value: int) -> int:
        if not 0 <= value <= WORD_MAX:
            raise ValueError("default_seed must fit in 256 bits")
        return value


@lru_cache
def get_settings() -> Settings:
    """Return cached settings singleton."""
    return Settings()
