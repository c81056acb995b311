"""Shared pytest fixtures and test helpers for wingetctl tests."""

from __future__ import annotations

import json
from collections.abc import Generator, Iterable
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from wingetctl.config.settings import WingetctlSettings
from wingetctl.infrastructure.winget import CommandResult
from wingetctl.services.telemetry import _current_span, disable_telemetry


@pytest.fixture(autouse=True)
def _no_env_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's WINGETCTL_* environment out of the tests."""
    monkeypatch.delenv("WINGETCTL_CONFIG", raising=False)


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """--verbose enables telemetry through a ContextVar; reset it after each test."""
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> WingetctlSettings:
    """Default settings, with config discovery rooted at the temp directory."""
    return WingetctlSettings.from_cli(start=tmp_path)


@pytest.fixture
def fake_manager() -> FakePackageManager:
    return FakePackageManager()


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run with the temp directory as CWD so stray log files land there."""
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def patch_winget(monkeypatch: pytest.MonkeyPatch, fake_manager: FakePackageManager) -> Any:
    """Make the CLI build *fake_manager* instead of a real WingetClient."""
    monkeypatch.setattr(
        "wingetctl.infrastructure.winget.WingetClient",
        lambda config=None: fake_manager,
    )
    return fake_manager


# ---------------------------------------------------------------------------
# Fake package manager
# ---------------------------------------------------------------------------


class FakePackageManager:
    """In-memory stand-in for the winget CLI.

    Args:
        failing: Identifiers whose install reports a non-zero exit.
        export_doc: Manifest document written by ``export_installed``.
        export_stdout: Captured stdout returned by ``export_installed``.
        export_ok: When False, ``export_installed`` fails without writing.
        write_manifest: When False, export "succeeds" but writes nothing.
    """

    def __init__(
        self,
        *,
        failing: Iterable[str] = (),
        export_doc: dict[str, Any] | None = None,
        export_stdout: str = "",
        export_ok: bool = True,
        write_manifest: bool = True,
    ) -> None:
        self.failing = set(failing)
        self.export_doc = export_doc or make_manifest({"winget": ["Git.Git"]})
        self.export_stdout = export_stdout
        self.export_ok = export_ok
        self.write_manifest = write_manifest
        self.exports: list[tuple[Path, bool]] = []
        self.installs: list[tuple[str, str | None]] = []

    @property
    def installed_ids(self) -> list[str]:
        return [identifier for identifier, _source in self.installs]

    def export_installed(self, path: Path, *, include_versions: bool = False) -> CommandResult:
        self.exports.append((path, include_versions))
        if not self.export_ok:
            return CommandResult(
                ok=False,
                returncode=1,
                stdout=self.export_stdout,
                stderr="boom",
                message="winget export exited with code 1",
            )
        if self.write_manifest:
            path.write_text(json.dumps(self.export_doc), encoding="utf-8")
        return CommandResult(ok=True, returncode=0, stdout=self.export_stdout)

    def install_package(self, identifier: str, *, source: str | None = None) -> CommandResult:
        self.installs.append((identifier, source))
        if identifier in self.failing:
            return CommandResult(
                ok=False, returncode=1, message="winget install exited with code 1"
            )
        return CommandResult(ok=True, returncode=0)


# ---------------------------------------------------------------------------
# Manifest helpers
# ---------------------------------------------------------------------------


def make_manifest(sources: dict[str, list[str]]) -> dict[str, Any]:
    """Build a winget export document from ``{source_name: [identifiers]}``."""
    return {
        "$schema": "https://aka.ms/winget-packages.schema.2.0.json",
        "CreationDate": "2026-10-18T10:00:00.000-00:00",
        "Sources": [
            {
                "Packages": [{"PackageIdentifier": pkg} for pkg in packages],
                "SourceDetails": {
                    "Argument": "https://cdn.winget.microsoft.com/cache",
                    "Identifier": f"{name}.Source",
                    "Name": name,
                    "Type": "Microsoft.PreIndexed.Package",
                },
            }
            for name, packages in sources.items()
        ],
        "WinGetVersion": "1.9.25180",
    }


def write_manifest(path: Path, sources: dict[str, list[str]]) -> Path:
    """Write a manifest built by :func:`make_manifest` to *path*."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(make_manifest(sources)), encoding="utf-8")
    return path


def read_log(path: Path | str) -> list[str]:
    """Lines of an operation log file (empty if it was never written)."""
    path = Path(path)
    if not path.exists():
        return []
    return path.read_text(encoding="utf-8").splitlines()
