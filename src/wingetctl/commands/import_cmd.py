"""Command: reinstall packages from a manifest (named import_cmd to avoid the keyword)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from wingetctl.commands._base import WingetctlCommand

if TYPE_CHECKING:
    from wingetctl.commands._context import AppContext
    from wingetctl.domain.packages import PackageRecord
    from wingetctl.infrastructure.winget import CommandResult

_IMPORT_EXAMPLES = """\
  wingetctl import winget_packages.json
  wingetctl import D:/backups/laptop.json --dry-run
  wingetctl winget_packages.json          # same as 'import'
  wingetctl -q import winget_packages.json  # print only failed packages"""


def _echo_progress(index: int, total: int, record: PackageRecord, outcome: CommandResult) -> None:
    status = click.style("ok", fg="green") if outcome.ok else click.style("failed", fg="red")
    click.echo(f"[{index}/{total}] {record.identifier} ... {status}", err=True)


@click.command("import", cls=WingetctlCommand, examples=_IMPORT_EXAMPLES)
@click.argument("manifest", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--dry-run", is_flag=True, help="Show the install order without installing.")
@click.pass_obj
def import_cmd(app: AppContext, manifest: Path, dry_run: bool) -> None:
    """Install every package listed in MANIFEST, skipping past failures."""
    from wingetctl.services.importer import ImportService

    svc = ImportService(app.settings, app.package_manager)
    if dry_run:
        app.emit(svc.plan(manifest))
        return

    progress = _echo_progress if app.shows_progress else None
    app.emit(svc.import_packages(manifest, on_progress=progress))
