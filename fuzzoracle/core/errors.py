"""Structured errors raised by the arbitrary-value oracle.

Every error carries a stable code and renders to the same envelope:

    {
        "error": {
            "code": "INVALID_RANGE",
            "message": "Human-readable description",
            "details": {...optional context...}
        }
    }

None of these are retried by the oracle itself; the harness reports them as
a failure of the test that triggered them.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


# ── Error Codes ──────────────────────────────────────────────────────────────


class ErrorCode(str, Enum):
    """Standard error codes carried by oracle errors."""

    INVALID_RANGE = "INVALID_RANGE"
    INVALID_WIDTH = "INVALID_WIDTH"
    INVALID_LENGTH = "INVALID_LENGTH"
    INVALID_SEED = "INVALID_SEED"
    INVALID_WORD = "INVALID_WORD"
    INVALID_ADDRESS = "INVALID_ADDRESS"
    GENERATION_EXHAUSTED = "GENERATION_EXHAUSTED"
    ARBITRARY_TARGET = "ARBITRARY_TARGET"


# ── Exceptions ───────────────────────────────────────────────────────────────


class OracleError(Exception):
    """Base class for all oracle failures."""

    code: ErrorCode

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        envelope: dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.details:
            envelope["details"] = self.details
        return {"error": envelope}


class InvalidRange(OracleError, ValueError):
    """``min`` is greater than ``max``."""

    code = ErrorCode.INVALID_RANGE


class InvalidWidth(OracleError, ValueError):
    """Byte or bit width outside the supported range."""

    code = ErrorCode.INVALID_WIDTH


class InvalidLength(OracleError, ValueError):
    code = ErrorCode.INVALID_LENGTH


class InvalidSeed(OracleError, ValueError):
    code = ErrorCode.INVALID_SEED


class InvalidWord(OracleError, ValueError):
    """Slot or value that is not an unsigned 256-bit integer."""

    code = ErrorCode.INVALID_WORD


class InvalidAddress(OracleError, ValueError):
    code = ErrorCode.INVALID_ADDRESS


class GenerationExhausted(OracleError):
    """Address exclusion could not be satisfied within the attempt bound."""

    code = ErrorCode.GENERATION_EXHAUSTED


class ArbitraryTarget(OracleError):
    """Storage cannot be copied onto an address in arbitrary mode."""

    code = ErrorCode.ARBITRARY_TARGET
