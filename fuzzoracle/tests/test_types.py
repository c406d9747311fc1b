"""Tests for fuzzoracle.core.types, errors and address helpers."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from fuzzoracle.core.addresses import checksum, storage_key, to_address_bytes, to_word
from fuzzoracle.core.errors import (
    ErrorCode,
    GenerationExhausted,
    InvalidAddress,
    InvalidLength,
    InvalidRange,
    InvalidWidth,
    InvalidWord,
    OracleError,
)
from fuzzoracle.core.types import (
    GenerationKind,
    GenerationRequest,
    Origin,
    OverlayEntry,
    OverlayStats,
)


# ── Enum Tests ───────────────────────────────────────────────────────────────


class TestEnums:
    def test_origin_values(self):
        assert {o.value for o in Origin} == {"generated", "explicit", "copied"}

    def test_generation_kinds(self):
        expected = {"unsigned_width", "signed_width", "range", "address", "bytes", "bool"}
        assert {k.value for k in GenerationKind} == expected


# ── Schemas ──────────────────────────────────────────────────────────────────


class TestOverlayEntry:
    def test_is_generated(self):
        assert OverlayEntry(1, Origin.GENERATED).is_generated
        assert not OverlayEntry(1, Origin.EXPLICIT).is_generated

    def test_frozen(self):
        entry = OverlayEntry(1, Origin.EXPLICIT)
        with pytest.raises(AttributeError):
            entry.value = 2  # type: ignore[misc]


class TestGenerationRequest:
    def test_constructors(self):
        assert GenerationRequest.unsigned(4).width == 4
        assert GenerationRequest.signed(2).kind is GenerationKind.SIGNED_WIDTH
        req = GenerationRequest.between(1, 2**256 - 1)
        assert (req.minimum, req.maximum) == (1, 2**256 - 1)
        assert GenerationRequest.bytes_of(3).length == 3
        assert GenerationRequest.address(["0x01"]).exclude == ("0x01",)

    def test_frozen(self):
        req = GenerationRequest.unsigned(4)
        with pytest.raises(ValidationError):
            req.width = 5  # type: ignore[misc]


class TestOverlayStats:
    def test_defaults(self):
        assert OverlayStats().summary() == {
            "hits": 0,
            "misses": 0,
            "generated": 0,
            "explicit_writes": 0,
            "copies": 0,
            "entries": 0,
            "arbitrary_addresses": 0,
        }


# ── Errors ───────────────────────────────────────────────────────────────────


class TestErrors:
    @pytest.mark.parametrize(
        "exc_type, code",
        [
            (InvalidRange, ErrorCode.INVALID_RANGE),
            (InvalidWidth, ErrorCode.INVALID_WIDTH),
            (InvalidLength, ErrorCode.INVALID_LENGTH),
            (GenerationExhausted, ErrorCode.GENERATION_EXHAUSTED),
        ],
    )
    def test_codes(self, exc_type, code):
        err = exc_type("bad")
        assert err.code is code
        assert isinstance(err, OracleError)

    def test_validation_errors_are_value_errors(self):
        assert issubclass(InvalidRange, ValueError)
        assert issubclass(InvalidWidth, ValueError)
        assert not issubclass(GenerationExhausted, ValueError)

    def test_envelope(self):
        err = InvalidRange("min > max", minimum=2, maximum=1)
        assert err.to_dict() == {
            "error": {
                "code": "INVALID_RANGE",
                "message": "min > max",
                "details": {"minimum": 2, "maximum": 1},
            }
        }

    def test_envelope_without_details(self):
        assert "details" not in InvalidLength("bad").to_dict()["error"]


# ── Address helpers ──────────────────────────────────────────────────────────


class TestAddresses:
    def test_to_address_bytes_from_hex(self, harness_address: str):
        assert to_address_bytes(harness_address) == bytes.fromhex(harness_address[2:])

    def test_to_address_bytes_without_prefix(self, harness_address: str):
        assert to_address_bytes(harness_address[2:]) == bytes.fromhex(harness_address[2:])

    @pytest.mark.parametrize("bad", ["0x12", b"\x00" * 21, 123, None, "0x" + "zz" * 20])
    def test_invalid(self, bad):
        with pytest.raises(InvalidAddress):
            to_address_bytes(bad)

    def test_checksum_round_trip(self, harness_address: str):
        rendered = checksum(harness_address)
        assert rendered.lower() == harness_address
        assert rendered != harness_address
        assert checksum(rendered) == rendered

    def test_to_word(self):
        assert to_word(0) == 0
        assert to_word(2**256 - 1) == 2**256 - 1
        assert to_word(b"\xff") == 255
        with pytest.raises(InvalidWord):
            to_word(b"\x00" * 33)

    def test_storage_key_layout(self, harness_address: str):
        key = storage_key(harness_address, 11)
        assert len(key) == 52
        assert key[:20] == bytes.fromhex(harness_address[2:])
        assert int.from_bytes(key[20:], "big") == 11
