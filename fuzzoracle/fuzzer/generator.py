"""Bounded value generator: seeded arbitrary scalars for test harnesses.

Two kinds of generation are offered:

  - **Stream draws** (``unsigned_of_width``, ``signed_of_width``, ``range``,
    ``address``, ``bytes``, ``boolean``): each call advances a seeded
    ``random.Random`` stream, so repeated calls generally differ but the whole
    sequence is reproducible for a given seed.
  - **Keyed words** (``keyed_word``): a pure function of ``(seed, key)``. The
    storage overlay uses these so that a given ``(address, slot)`` always
    resolves to the same word regardless of when it is first read.

The stream is rebuilt from the seed manager whenever its epoch changes, i.e.
after every reseed.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Iterable

from fuzzoracle.core.addresses import (
    ADDRESS_BYTES,
    CHEATCODE_ADDRESS,
    AddressLike,
    checksum,
    to_address_bytes,
)
from fuzzoracle.core.errors import (
    GenerationExhausted,
    InvalidLength,
    InvalidRange,
    InvalidWidth,
)
from fuzzoracle.core.types import GenerationKind, GenerationRequest
from fuzzoracle.fuzzer.seed import SeedManager

logger = logging.getLogger(__name__)

STREAM_DOMAIN = b"stream"
STORAGE_DOMAIN = b"storage"

MIN_WIDTH = 1
MAX_WIDTH = 32
DEFAULT_ADDRESS_ATTEMPTS = 32


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class BoundedValueGenerator:
    """Width- and range-bounded arbitrary values derived from a seed."""

    def __init__(
        self,
        seeds: SeedManager,
        harness_address: AddressLike = CHEATCODE_ADDRESS,
        max_address_attempts: int = DEFAULT_ADDRESS_ATTEMPTS,
    ) -> None:
        if max_address_attempts < 1:
            raise ValueError("max_address_attempts must be at least 1")
        self._seeds = seeds
        self._harness = to_address_bytes(harness_address)
        self._max_address_attempts = max_address_attempts
        self._rng: random.Random | None = None
        self._epoch = -1
        self._draws = 0

    @property
    def seeds(self) -> SeedManager:
        return self._seeds

    @property
    def draws(self) -> int:
        """Stream draws since the last (re)seed."""
        return self._draws

    def _stream(self) -> random.Random:
        if self._rng is None or self._epoch != self._seeds.epoch:
            self._rng = random.Random(self._seeds.derive(STREAM_DOMAIN))
            self._epoch = self._seeds.epoch
            self._draws = 0
        self._draws += 1
        return self._rng

    @staticmethod
    def _check_width(width: Any) -> int:
        if not _is_int(width) or not MIN_WIDTH <= width <= MAX_WIDTH:
            raise InvalidWidth(
                f"byte width must be an integer in [{MIN_WIDTH}, {MAX_WIDTH}], got {width!r}",
                width=width,
            )
        return width

    # ── Stream draws ─────────────────────────────────────────────────────────

    def unsigned_of_width(self, width: int) -> int:
        """Uniform over ``[0, 2**(8*width) - 1]``."""
        bits = 8 * self._check_width(width)
        return self._stream().getrandbits(bits)

    def signed_of_width(self, width: int) -> int:
        """Uniform over ``[-2**(8*width-1), 2**(8*width-1) - 1]``."""
        bits = 8 * self._check_width(width)
        raw = self._stream().getrandbits(bits)
        if raw >= 1 << (bits - 1):
            raw -= 1 << bits
        return raw

    def range(self, minimum: int, maximum: int) -> int:
        """Uniform over the closed interval ``[minimum, maximum]``."""
        if not (_is_int(minimum) and _is_int(maximum)):
            raise InvalidRange("range bounds must be integers", minimum=minimum, maximum=maximum)
        if minimum > maximum:
            raise InvalidRange(
                f"min must be less than or equal to max ({minimum} > {maximum})",
                minimum=minimum,
                maximum=maximum,
            )
        return self._stream().randint(minimum, maximum)

    def address(self, exclude: Iterable[AddressLike] = ()) -> str:
        """A fresh address that is neither the harness nor in ``exclude``."""
        excluded = {self._harness}
        excluded.update(to_address_bytes(a) for a in exclude)

        for attempt in range(1, self._max_address_attempts + 1):
            candidate = self._stream().getrandbits(8 * ADDRESS_BYTES).to_bytes(ADDRESS_BYTES, "big")
            if candidate not in excluded:
                return checksum(candidate)
            logger.debug("Rejected excluded address candidate (attempt %d)", attempt)

        raise GenerationExhausted(
            f"no admissible address after {self._max_address_attempts} attempts",
            attempts=self._max_address_attempts,
            excluded=len(excluded),
        )

    def bytes(self, length: int) -> bytearray:
        """``length`` independently drawn bytes in a freshly owned buffer."""
        if not _is_int(length) or length < 0:
            raise InvalidLength(f"length must be a non-negative integer, got {length!r}", length=length)
        return bytearray(self._stream().randbytes(length))

    def boolean(self) -> bool:
        return bool(self._stream().getrandbits(1))

    # ── Keyed generation ─────────────────────────────────────────────────────

    def keyed_word(self, key: bytes) -> int:
        """256-bit word determined solely by the current seed and ``key``."""
        if not isinstance(key, (bytes, bytearray)):
            raise TypeError(f"key must be bytes, got {type(key).__name__}")
        return self._seeds.derive(STORAGE_DOMAIN, bytes(key))

    # ── Request dispatch ─────────────────────────────────────────────────────

    def generate(self, request: GenerationRequest) -> Any:
        """Evaluate a ``GenerationRequest``."""
        kind = request.kind
        if kind is GenerationKind.UNSIGNED_WIDTH:
            return self.unsigned_of_width(request.width)
        if kind is GenerationKind.SIGNED_WIDTH:
            return self.signed_of_width(request.width)
        if kind is GenerationKind.RANGE:
            return self.range(request.minimum, request.maximum)
        if kind is GenerationKind.ADDRESS:
            return self.address(request.exclude)
        if kind is GenerationKind.BYTES:
            return self.bytes(request.length)
        if kind is GenerationKind.BOOL:
            return self.boolean()
        raise ValueError(f"unsupported generation kind: {kind}")
