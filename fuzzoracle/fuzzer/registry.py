"""Registry of addresses whose storage is in arbitrary mode."""

from __future__ import annotations

from typing import Iterator

from fuzzoracle.core.addresses import AddressLike, checksum, to_address_bytes


class ArbitraryModeRegistry:
    """Monotonic set of arbitrary-mode addresses.

    There is no ``disable``; once enabled, an address stays in
    arbitrary mode for the rest of the run.
    """

    def __init__(self) -> None:
        self._addresses: set[bytes] = set()

    def enable(self, address: AddressLike) -> bool:
        """Enable arbitrary mode. Returns ``True`` if newly enabled."""
        key = to_address_bytes(address)
        if key in self._addresses:
            return False
        self._addresses.add(key)
        return True

    def is_enabled(self, address: AddressLike) -> bool:
        return to_address_bytes(address) in self._addresses

    def __contains__(self, address: object) -> bool:
        if not isinstance(address, (str, bytes, bytearray)):
            return False
        return self.is_enabled(address)

    def __len__(self) -> int:
        return len(self._addresses)

    def __iter__(self) -> Iterator[str]:
        return (checksum(a) for a in sorted(self._addresses))
