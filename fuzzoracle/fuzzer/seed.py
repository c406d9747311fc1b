"""Seed management for deterministic arbitrary values.

A ``SeedManager`` owns the single active 256-bit seed of one run. All
generation is derived from it, so logging the seed is enough to replay a
failing run. Reseeding only affects requests issued afterwards.
"""

from __future__ import annotations

import hashlib
import logging

from fuzzoracle.core.addresses import WORD_BYTES, WORD_MAX, parse_int
from fuzzoracle.core.config import DEFAULT_SEED
from fuzzoracle.core.errors import InvalidSeed
from fuzzoracle.core.types import SeedInfo

logger = logging.getLogger(__name__)


def normalize_seed(seed: int | str) -> int:
    """Coerce an int or hex/decimal string into a 256-bit seed."""
    if isinstance(seed, str):
        try:
            seed = parse_int(seed)
        except ValueError:
            raise InvalidSeed(f"seed is not a number: {seed!r}") from None
    if isinstance(seed, bool) or not isinstance(seed, int):
        raise InvalidSeed(f"seed must be an integer, got {type(seed).__name__}")
    if not 0 <= seed <= WORD_MAX:
        raise InvalidSeed("seed must fit in 256 bits", seed=hex(seed))
    return seed


class SeedManager:
    """Holds the active seed and derives per-request sub-seeds."""

    def __init__(self, seed: int | str = DEFAULT_SEED) -> None:
        self._seed = normalize_seed(seed)
        self._epoch = 0
        logger.info("Active seed %s", self.current_seed_hex, extra={"seed": self.current_seed_hex, "epoch": 0})

    @property
    def current_seed(self) -> int:
        return self._seed

    @property
    def current_seed_hex(self) -> str:
        return f"0x{self._seed:064x}"

    @property
    def epoch(self) -> int:
        """Number of reseeds performed so far."""
        return self._epoch

    def reseed(self, new_seed: int | str) -> None:
        """Replace the active seed.

        Values already memoized elsewhere are untouched; only later
        generation requests observe the new seed.
        """
        self._seed = normalize_seed(new_seed)
        self._epoch += 1
        logger.info(
            "Reseeded to %s (epoch %d)",
            self.current_seed_hex,
            self._epoch,
            extra={"seed": self.current_seed_hex, "epoch": self._epoch},
        )

    def derive(self, domain: bytes, key: bytes = b"") -> int:
        """Return ``sha256(seed ++ domain ++ key)`` as an unsigned integer."""
        digest = hashlib.sha256(self._seed.to_bytes(WORD_BYTES, "big") + domain + key).digest()
        return int.from_bytes(digest, "big")

    def info(self, draws: int = 0) -> SeedInfo:
        return SeedInfo(seed=self.current_seed_hex, epoch=self._epoch, draws=draws)
