"""Structured logging configuration.

Provides:
  - JSON-formatted log output for CI runs
  - Human-readable colored output for local development
  - Seed correlation so a failing run can be replayed
"""

from __future__ import annotations

import logging
import json
import sys
from datetime import datetime, timezone
from typing import Any

# Extra record attributes surfaced by both formatters.
CONTEXT_FIELDS = ("seed", "epoch", "address", "slot", "kind")


def short_hex(value: str, width: int = 18) -> str:
    """Drop the zero padding of a ``0x`` hex string, keeping its low digits."""
    if not value.lower().startswith("0x"):
        return value
    digits = value[2:].lstrip("0") or "0"
    if len(digits) > width - 2:
        digits = "…" + digits[-(width - 3):]
    return "0x" + digits


class JSONFormatter(logging.Formatter):
    """Structured JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.pathname:
            log_entry["module"] = record.module
            log_entry["function"] = record.funcName
            log_entry["line"] = record.lineno

        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else "Unknown",
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        for key in CONTEXT_FIELDS:
            if hasattr(record, key):
                log_entry[key] = getattr(record, key)

        return json.dumps(log_entry, default=str)


class DevFormatter(logging.Formatter):
    """Colored human-readable formatter for development."""

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        ts = datetime.now(timezone.utc).strftime("%H:%M:%S")
        prefix = f"{color}{ts} [{record.levelname:>8s}]{self.RESET}"
        msg = record.getMessage()

        seed = getattr(record, "seed", None)
        if seed:
            msg = f"[seed {short_hex(str(seed))}] {msg}"

        base = f"{prefix} {record.name}: {msg}"
        if record.exc_info and record.exc_info[1]:
            base += "\n" + self.formatException(record.exc_info)
        return base


def setup_logging(env: str = "development", log_level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        env: Application environment (development/staging/production)
        log_level: Minimum log level
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    if env in ("staging", "production"):
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(DevFormatter())

    root.addHandler(handler)


class SeedLogFilter(logging.Filter):
    """Filter that stamps the active run seed on log records."""

    def __init__(self, seed: str = "") -> None:
        super().__init__()
        self.seed = seed

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "seed"):
            record.seed = self.seed  # type: ignore[attr-defined]
        return True
