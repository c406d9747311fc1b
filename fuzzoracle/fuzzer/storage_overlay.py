"""Storage overlay: lazily generated contract storage with explicit writes.

The execution engine routes every storage read and write of the contract
under test through a ``StorageOverlay``:

::

    read(address, slot)
      │
      ├── memoized entry?           → return it unchanged
      ├── address in arbitrary mode → keyed_word(address ++ slot),
      │                               memoize as GENERATED, return
      ├── storage copied from an    → src's generated word for slot,
      │   arbitrary src?              memoize on both
      └── otherwise                 → 0 (not memoized)

    write(address, slot, value)     → memoize as EXPLICIT, always wins

Entries are kept per address in sparse dicts, so the conceptually infinite
slot space costs nothing until it is touched. An explicit write of zero is
stored like any other value and is never replaced by a generated default.
"""

from __future__ import annotations

import logging

from fuzzoracle.core.addresses import (
    AddressLike,
    checksum,
    storage_key,
    to_address_bytes,
    to_word,
)
from fuzzoracle.core.errors import ArbitraryTarget
from fuzzoracle.core.types import Origin, OverlayEntry, OverlayStats
from fuzzoracle.fuzzer.generator import BoundedValueGenerator
from fuzzoracle.fuzzer.registry import ArbitraryModeRegistry

logger = logging.getLogger(__name__)


class StorageOverlay:
    """Per-address sparse slot → word map with lazy arbitrary defaults."""

    def __init__(
        self,
        generator: BoundedValueGenerator,
        registry: ArbitraryModeRegistry | None = None,
    ) -> None:
        self._generator = generator
        self._registry = registry if registry is not None else ArbitraryModeRegistry()
        self._storage: dict[bytes, dict[int, OverlayEntry]] = {}
        # generated words per address, unaffected by later writes
        self._generated: dict[bytes, dict[int, int]] = {}
        # target -> source of a storage copy
        self._copies: dict[bytes, bytes] = {}
        self._stats = OverlayStats()

    @property
    def registry(self) -> ArbitraryModeRegistry:
        return self._registry

    # ── Arbitrary mode ───────────────────────────────────────────────────────

    def enable_arbitrary(self, address: AddressLike) -> None:
        """Put ``address`` in arbitrary mode. Idempotent.

        Only slots that have not been memoized yet are affected.
        """
        if self._registry.enable(address):
            logger.info("Arbitrary storage enabled", extra={"address": checksum(address)})

    def is_arbitrary(self, address: AddressLike) -> bool:
        return self._registry.is_enabled(address)

    # ── Reads and writes ─────────────────────────────────────────────────────

    def read(self, address: AddressLike, slot: int) -> int:
        """Return the word stored at ``(address, slot)``."""
        addr = to_address_bytes(address)
        slot = to_word(slot, "slot")

        entry = self._storage.get(addr, {}).get(slot)
        if entry is not None:
            self._stats.hits += 1
            return entry.value

        self._stats.misses += 1
        value = self._fill(addr, slot)
        return 0 if value is None else value

    def write(self, address: AddressLike, slot: int, value: int) -> None:
        """Store ``value`` explicitly, overwriting any prior entry."""
        addr = to_address_bytes(address)
        self._put(addr, to_word(slot, "slot"), to_word(value), Origin.EXPLICIT)
        self._stats.explicit_writes += 1

    def _put(self, addr: bytes, slot: int, value: int, origin: Origin) -> None:
        self._storage.setdefault(addr, {})[slot] = OverlayEntry(value=value, origin=origin)

    def _fill(self, addr: bytes, slot: int) -> int | None:
        """Resolve an unmemoized slot. ``None`` means the conventional zero."""
        if self._registry.is_enabled(addr):
            return self._generated_word(addr, slot)
        source = self._copies.get(addr)
        if source is None:
            return None
        value = self._generated_word(source, slot)
        self._put(addr, slot, value, Origin.GENERATED)
        return value

    def _generated_word(self, addr: bytes, slot: int) -> int:
        """The generated word of an arbitrary ``addr``, produced at most once.

        Writes on ``addr`` leave this cache untouched, so storage copied
        from ``addr`` keeps reading the generated word.
        """
        generated = self._generated.setdefault(addr, {})
        value = generated.get(slot)
        if value is not None:
            return value

        value = self._generator.keyed_word(storage_key(addr, slot))
        generated[slot] = value
        self._stats.generated += 1
        if slot not in self._storage.get(addr, {}):
            self._put(addr, slot, value, Origin.GENERATED)
        logger.debug(
            "Generated storage word",
            extra={"address": checksum(addr), "slot": hex(slot)},
        )
        return value

    # ── Copies ───────────────────────────────────────────────────────────────

    def copy_storage(self, source: AddressLike, target: AddressLike) -> int:
        """Replace ``target``'s storage with a copy of ``source``'s.

        When ``source`` is in arbitrary mode at copy time, unset slots of
        ``target`` keep resolving through it and read the same generated
        words, even for slots ``source`` has since overwritten. Otherwise
        unset slots of ``target`` read zero. Returns the number of entries
        copied.
        """
        src = to_address_bytes(source)
        dst = to_address_bytes(target)
        if self._registry.is_enabled(dst):
            raise ArbitraryTarget(
                "target address cannot have arbitrary storage",
                target=checksum(dst),
            )
        if src == dst:
            return 0

        copied = {
            slot: OverlayEntry(value=entry.value, origin=Origin.COPIED)
            for slot, entry in self._storage.get(src, {}).items()
        }
        self._storage[dst] = copied
        if self._registry.is_enabled(src):
            self._copies[dst] = src
        else:
            self._copies.pop(dst, None)
        self._stats.copies += 1
        logger.info(
            "Copied %d storage entries from %s",
            len(copied),
            checksum(src),
            extra={"address": checksum(dst)},
        )
        return len(copied)

    # ── Introspection ────────────────────────────────────────────────────────

    def entry(self, address: AddressLike, slot: int) -> OverlayEntry | None:
        """The memoized entry for ``(address, slot)``, without generating."""
        return self._storage.get(to_address_bytes(address), {}).get(to_word(slot, "slot"))

    def storage_of(self, address: AddressLike) -> dict[int, int]:
        """Snapshot of the memoized words of ``address``."""
        return {slot: e.value for slot, e in self._storage.get(to_address_bytes(address), {}).items()}

    def stats(self) -> OverlayStats:
        return self._stats.model_copy(
            update={
                "entries": len(self),
                "arbitrary_addresses": len(self._registry),
            }
        )

    def __len__(self) -> int:
        return sum(len(slots) for slots in self._storage.values())
