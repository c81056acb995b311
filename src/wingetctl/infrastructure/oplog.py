"""Append-only operation log written beside the manifest.

One line per event::

    [2026-10-18T09:30:12+00:00] INFO Start importing
    [2026-10-18T09:30:40+00:00] ERROR Failed to install Foo.Bar: winget install exited with code 1
    [2026-10-18T09:31:02+00:00] INFO End importing

The file is opened in append mode for every line.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from wingetctl.infrastructure.filesystem import resolve_unique_path

LOG_EXTENSION = ".log"


def _now() -> str:
    return datetime.now(UTC).isoformat(timespec="seconds")


class OperationLog:
    """Plain-text event log bound to a single file."""

    def __init__(self, path: Path, *, clock: Callable[[], str] = _now) -> None:
        self.path = path
        self._clock = clock

    @classmethod
    def create(cls, directory: Path, name: str) -> OperationLog:
        """Bind a log to a fresh, non-colliding ``<name>.log`` in *directory*."""
        directory.mkdir(parents=True, exist_ok=True)
        return cls(resolve_unique_path(directory, name, LOG_EXTENSION))

    def write(self, level: str, message: str) -> None:
        line = f"[{self._clock()}] {level.upper()} {message}\n"
        with self.path.open("a", encoding="utf-8") as fh:
            fh.write(line)

    def info(self, message: str) -> None:
        self.write("INFO", message)

    def error(self, message: str) -> None:
        self.write("ERROR", message)
