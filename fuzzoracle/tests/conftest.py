"""Shared fixtures for the fuzzoracle test suite."""

from __future__ import annotations

import pytest

from fuzzoracle.core.addresses import (
    CHEATCODE_ADDRESS,
    DEFAULT_TEST_CONTRACT,
    FIRST_DEPLOYMENT_ADDRESS,
)
from fuzzoracle.core.config import Settings, get_settings
from fuzzoracle.fuzzer.context import Cheatcodes, GenerationContext
from fuzzoracle.fuzzer.generator import BoundedValueGenerator
from fuzzoracle.fuzzer.registry import ArbitraryModeRegistry
from fuzzoracle.fuzzer.seed import SeedManager
from fuzzoracle.fuzzer.storage_overlay import StorageOverlay


# ── Settings ─────────────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Never leak a cached Settings instance between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring any local .env file."""
    return Settings(_env_file=None)


# ── Addresses ────────────────────────────────────────────────────────────────


@pytest.fixture
def harness_address() -> str:
    return CHEATCODE_ADDRESS


@pytest.fixture
def test_contract() -> str:
    return DEFAULT_TEST_CONTRACT


@pytest.fixture
def deployed_contract() -> str:
    """Address of the first contract deployed by the test contract."""
    return FIRST_DEPLOYMENT_ADDRESS


@pytest.fixture
def other_contract() -> str:
    return "0x00000000000000000000000000000000deadbeef"


# ── Oracle components ────────────────────────────────────────────────────────


@pytest.fixture
def seeds() -> SeedManager:
    return SeedManager()


@pytest.fixture
def generator(seeds: SeedManager) -> BoundedValueGenerator:
    return BoundedValueGenerator(seeds)


@pytest.fixture
def registry() -> ArbitraryModeRegistry:
    return ArbitraryModeRegistry()


@pytest.fixture
def overlay(generator: BoundedValueGenerator, registry: ArbitraryModeRegistry) -> StorageOverlay:
    return StorageOverlay(generator, registry)


@pytest.fixture
def context(settings: Settings) -> GenerationContext:
    return GenerationContext(settings=settings)


@pytest.fixture
def cheats(context: GenerationContext, test_contract: str) -> Cheatcodes:
    return Cheatcodes(context, caller=test_contract)
