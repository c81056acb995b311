"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import UTC, datetime


def now_iso() -> str:
    """Current UTC time as ISO 8601 (for result payloads)."""
    return datetime.now(UTC).isoformat(timespec="seconds")


def tail(text: str, lines: int = 5) -> str:
    """Last *lines* non-empty lines of process output, for error details."""
    kept = [line for line in text.splitlines() if line.strip()]
    return "\n".join(kept[-lines:])
