"""Package-manager capability and its winget implementation.

Services depend on the :class:`PackageManager` protocol only. The real
:class:`WingetClient` shells out to the ``winget`` executable; tests use
a fake with the same two methods.

Every subprocess call is wrapped so a missing executable or a non-zero
exit becomes a failed :class:`CommandResult`, never an exception. Output is
decoded as UTF-8 and undecodable bytes are replaced.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from wingetctl.config.models import WingetConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one package-manager invocation."""

    ok: bool
    returncode: int | None = None
    stdout: str = ""
    stderr: str = ""
    message: str = ""


class PackageManager(Protocol):
    """What the export and import services need from a package manager."""

    def export_installed(self, path: Path, *, include_versions: bool = False) -> CommandResult:
        """Write the installed-package manifest to *path*."""
        ...

    def install_package(self, identifier: str, *, source: str | None = None) -> CommandResult:
        """Install a single package by exact identifier."""
        ...


class WingetClient:
    """:class:`PackageManager` backed by the winget CLI."""

    def __init__(self, config: WingetConfig | None = None) -> None:
        self._config = config or WingetConfig()

    @property
    def executable(self) -> str:
        return self._config.executable

    # ------------------------------------------------------------------
    # Command builders
    # ------------------------------------------------------------------

    def export_args(self, path: Path, *, include_versions: bool = False) -> list[str]:
        args = ["export", "-o", str(path)]
        if include_versions:
            args.append("--include-versions")
        if self._config.accept_source_agreements:
            args.append("--accept-source-agreements")
        return args

    def install_args(self, identifier: str, *, source: str | None = None) -> list[str]:
        args = ["install", "--id", identifier, "--exact"]
        if source and self._config.pin_source:
            args += ["--source", source]
        if self._config.accept_package_agreements:
            args.append("--accept-package-agreements")
        if self._config.accept_source_agreements:
            args.append("--accept-source-agreements")
        return args

    # ------------------------------------------------------------------
    # PackageManager
    # ------------------------------------------------------------------

    def export_installed(self, path: Path, *, include_versions: bool = False) -> CommandResult:
        return self._run(*self.export_args(path, include_versions=include_versions))

    def install_package(self, identifier: str, *, source: str | None = None) -> CommandResult:
        return self._run(*self.install_args(identifier, source=source))

    # ------------------------------------------------------------------
    # Subprocess helper
    # ------------------------------------------------------------------

    def _run(self, *args: str) -> CommandResult:
        cmd = [self.executable, *args]
        logger.debug("Running %s", " ".join(cmd))
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as exc:
            logger.debug("%s could not be started: %s", self.executable, exc)
            return CommandResult(ok=False, message=f"{self.executable} could not be started: {exc}")

        if proc.returncode != 0:
            logger.debug("%s %s exited with %d", self.executable, args[0], proc.returncode)
            return CommandResult(
                ok=False,
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
                message=f"{self.executable} {args[0]} exited with code {proc.returncode}",
            )
        return CommandResult(ok=True, returncode=0, stdout=proc.stdout, stderr=proc.stderr)
