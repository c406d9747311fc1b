"""Generation context and the cheatcode surface built on top of it.

A ``GenerationContext`` owns one seed manager, one generator, one
arbitrary-mode registry and one storage overlay. Independent tests each
construct their own context; nothing is shared through module state.

``Cheatcodes`` adapts a context to the harness-facing calls a test contract
makes (``randomUint``, ``arbitraryInt``, ``setArbitraryStorage``, ...), which
take bit widths rather than byte widths.
"""

from __future__ import annotations

import logging

from fuzzoracle.core.addresses import AddressLike, checksum
from fuzzoracle.core.config import Settings, get_settings
from fuzzoracle.core.errors import InvalidWidth
from fuzzoracle.core.logging import SeedLogFilter
from fuzzoracle.core.types import SeedInfo
from fuzzoracle.fuzzer.generator import MAX_WIDTH, BoundedValueGenerator
from fuzzoracle.fuzzer.registry import ArbitraryModeRegistry
from fuzzoracle.fuzzer.seed import SeedManager
from fuzzoracle.fuzzer.storage_overlay import StorageOverlay

logger = logging.getLogger(__name__)


class GenerationContext:
    """Everything one test run needs to produce arbitrary values."""

    def __init__(self, seed: int | str | None = None, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self.seeds = SeedManager(self.settings.default_seed if seed is None else seed)
        self.generator = BoundedValueGenerator(
            self.seeds,
            harness_address=self.settings.harness_address,
            max_address_attempts=self.settings.address_max_attempts,
        )
        self.registry = ArbitraryModeRegistry()
        self.storage = StorageOverlay(self.generator, self.registry)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "GenerationContext":
        return cls(settings=settings)

    def reseed(self, new_seed: int | str) -> None:
        self.seeds.reseed(new_seed)

    def seed_info(self) -> SeedInfo:
        return self.seeds.info(draws=self.generator.draws)

    def log_filter(self) -> SeedLogFilter:
        """A logging filter stamping this run's seed on every record."""
        return SeedLogFilter(self.seeds.current_seed_hex)


def _bits_to_width(bits: int) -> int:
    if isinstance(bits, bool) or not isinstance(bits, int) or bits % 8 or not 8 <= bits <= 8 * MAX_WIDTH:
        raise InvalidWidth(f"bits must be a multiple of 8 in [8, 256], got {bits!r}", bits=bits)
    return bits // 8


class Cheatcodes:
    """Harness cheatcodes bound to a context and a calling contract."""

    def __init__(self, context: GenerationContext, caller: AddressLike | None = None) -> None:
        self.context = context
        self.caller = checksum(caller or context.settings.default_test_contract)

    # ── Scalars ──────────────────────────────────────────────────────────────

    def random_uint(self, minimum: int | None = None, maximum: int | None = None) -> int:
        """``randomUint()`` or ``randomUint(min, max)``."""
        if minimum is None and maximum is None:
            return self.context.generator.unsigned_of_width(MAX_WIDTH)
        if minimum is None or maximum is None:
            raise TypeError("random_uint takes either no bounds or both bounds")
        return self.context.generator.range(minimum, maximum)

    def arbitrary_uint(self, bits: int = 256) -> int:
        return self.context.generator.unsigned_of_width(_bits_to_width(bits))

    def arbitrary_int(self, bits: int = 256) -> int:
        return self.context.generator.signed_of_width(_bits_to_width(bits))

    def random_address(self) -> str:
        return self.context.generator.address(exclude=(self.caller,))

    def arbitrary_bool(self) -> bool:
        return self.context.generator.boolean()

    def arbitrary_bytes(self, length: int) -> bytes:
        return bytes(self.context.generator.bytes(length))

    # ── Storage ──────────────────────────────────────────────────────────────

    def set_arbitrary_storage(self, target: AddressLike) -> None:
        self.context.storage.enable_arbitrary(target)

    def copy_storage(self, source: AddressLike, target: AddressLike) -> None:
        self.context.storage.copy_storage(source, target)

    def load(self, target: AddressLike, slot: int) -> int:
        return self.context.storage.read(target, slot)

    def store(self, target: AddressLike, slot: int, value: int) -> None:
        self.context.storage.write(target, slot, value)
