"""Command: export installed packages to a manifest."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from wingetctl.commands._base import WingetctlCommand

if TYPE_CHECKING:
    from wingetctl.commands._context import AppContext

_EXPORT_EXAMPLES = """\
  wingetctl export
  wingetctl export --output D:/backups
  wingetctl export --output D:/backups --name laptop --include-versions
  wingetctl --json export --output ./backups"""


@click.command(cls=WingetctlCommand, examples=_EXPORT_EXAMPLES)
@click.option(
    "--output",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the manifest and log files (default: [export] directory).",
)
@click.option(
    "--name",
    "base_name",
    default=None,
    help="Manifest file stem; a numeric suffix is added if the file exists.",
)
@click.option(
    "--include-versions/--no-include-versions",
    default=None,
    help="Pin package versions in the manifest.",
)
@click.pass_obj
def export(
    app: AppContext,
    output: Path | None,
    base_name: str | None,
    include_versions: bool | None,
) -> None:
    """Export installed packages to a JSON manifest."""
    from wingetctl.services.export import ExportService

    svc = ExportService(app.settings, app.package_manager)
    app.emit(
        svc.export_packages(output, base_name=base_name, include_versions=include_versions)
    )
