"""Shared enums and types used across the oracle."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ── Enums ────────────────────────────────────────────────────────────────────


class Origin(str, enum.Enum):
    """Where a memoized storage entry came from."""

    GENERATED = "generated"
    EXPLICIT = "explicit"
    COPIED = "copied"


class GenerationKind(str, enum.Enum):
    """Kind of scalar requested from the generator."""

    UNSIGNED_WIDTH = "unsigned_width"
    SIGNED_WIDTH = "signed_width"
    RANGE = "range"
    ADDRESS = "address"
    BYTES = "bytes"
    BOOL = "bool"


# ── Storage entries ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class OverlayEntry:
    """A memoized storage word and its origin."""
    value: int
    origin: Origin

    @property
    def is_generated(self) -> bool:
        return self.origin is Origin.GENERATED


# ── Shared Schemas ───────────────────────────────────────────────────────────


class GenerationRequest(BaseModel):
    """A single request for an arbitrary value.

    Requests are evaluated independently; two identical requests are two
    separate draws.
    """

    model_config = ConfigDict(frozen=True)

    kind: GenerationKind
    width: int | None = None
    minimum: int | None = None
    maximum: int | None = None
    length: int | None = None
    exclude: tuple[str, ...] = ()

    @classmethod
    def unsigned(cls, width: int) -> "GenerationRequest":
        return cls(kind=GenerationKind.UNSIGNED_WIDTH, width=width)

    @classmethod
    def signed(cls, width: int) -> "GenerationRequest":
        return cls(kind=GenerationKind.SIGNED_WIDTH, width=width)

    @classmethod
    def between(cls, minimum: int, maximum: int) -> "GenerationRequest":
        return cls(kind=GenerationKind.RANGE, minimum=minimum, maximum=maximum)

    @classmethod
    def address(cls, exclude: tuple[str, ...] = ()) -> "GenerationRequest":
        return cls(kind=GenerationKind.ADDRESS, exclude=tuple(exclude))

    @classmethod
    def bytes_of(cls, length: int) -> "GenerationRequest":
        return cls(kind=GenerationKind.BYTES, length=length)


class OverlayStats(BaseModel):
    """Counters describing storage overlay activity for one run."""

    hits: int = 0
    misses: int = 0
    generated: int = 0
    explicit_writes: int = 0
    copies: int = 0
    entries: int = 0
    arbitrary_addresses: int = 0

    def summary(self) -> dict[str, Any]:
        return self.model_dump()


class SeedInfo(BaseModel):
    """Replay information for a run, suitable for logs and reports."""

    seed: str
    epoch: int = 0
    draws: int = Field(default=0, ge=0)
