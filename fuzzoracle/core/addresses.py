"""Address and word normalization shared by the oracle components.

Addresses are accepted as hex strings (any case, ``0x`` optional) or raw
20-byte values, kept internally as canonical bytes and rendered as EIP-55
checksum strings.
"""

from __future__ import annotations

from eth_utils import is_hex_address, to_canonical_address, to_checksum_address

from fuzzoracle.core.errors import InvalidAddress, InvalidWord

WORD_BYTES = 32
WORD_MAX = 2**256 - 1
ADDRESS_BYTES = 20

# Well-known harness addresses (lower-case; see ``checksum`` for display).
CHEATCODE_ADDRESS = "0x7109709ecfa91a80626ff3989d68f67f5b1dd12d"
DEFAULT_SENDER = "0x1804c8ab1f12e6bbf3894d4083f33e07309d1f38"
DEFAULT_TEST_CONTRACT = "0x7fa9385be102ac3eac297483dd6233d62b3e1496"
# First contract created by the default test contract (nonce 1).
FIRST_DEPLOYMENT_ADDRESS = "0x5615deb798bb3e4dfa0139dfa1b3d433cc23b72f"

AddressLike = str | bytes | bytearray


def to_address_bytes(value: AddressLike) -> bytes:
    """Return the canonical 20-byte form of ``value``."""
    if isinstance(value, (bytes, bytearray)):
        if len(value) != ADDRESS_BYTES:
            raise InvalidAddress(
                f"address must be {ADDRESS_BYTES} bytes, got {len(value)}",
                length=len(value),
            )
        return bytes(value)
    if isinstance(value, str) and is_hex_address(value):
        return to_canonical_address(value)
    raise InvalidAddress(f"not an address: {value!r}")


def checksum(value: AddressLike) -> str:
    return to_checksum_address(to_address_bytes(value))


def to_word(value: int, name: str = "value") -> int:
    """Validate that ``value`` is an unsigned 256-bit integer."""
    if isinstance(value, (bytes, bytearray)):
        if len(value) > WORD_BYTES:
            raise InvalidWord(f"{name} is longer than {WORD_BYTES} bytes", length=len(value))
        return int.from_bytes(value, "big")
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidWord(f"{name} must be an integer, got {type(value).__name__}")
    if not 0 <= value <= WORD_MAX:
        raise InvalidWord(f"{name} out of uint256 range: {value}")
    return value


def storage_key(address: AddressLike, slot: int) -> bytes:
    """Key bytes for keyed generation: ``address (20) ++ slot (32, big-endian)``."""
    return to_address_bytes(address) + to_word(slot, "slot").to_bytes(WORD_BYTES, "big")


def parse_int(text: str) -> int:
    """Parse a ``0x``-prefixed hex or a decimal string. Raises ``ValueError``."""
    text = text.strip()
    return int(text, 16) if text.lower().startswith("0x") else int(text)
