"""Interactive menu shown when wingetctl runs without arguments."""

from __future__ import annotations

from pathlib import Path

import click

from wingetctl.domain.types import Action


def prompt_action() -> Action:
    """Ask which operation to run."""
    choice = click.prompt(
        "Export installed packages or import from a manifest?",
        type=click.Choice([a.value for a in Action], case_sensitive=False),
        default=Action.EXPORT.value,
    )
    return Action(choice.lower())


def run_action(ctx: click.Context, action: Action) -> None:
    """Prompt for the inputs *action* needs, then invoke its command."""
    from wingetctl.commands.export import export
    from wingetctl.commands.import_cmd import import_cmd

    if action is Action.EXPORT:
        default_dir = ctx.obj.settings.export.directory
        output = click.prompt("Output directory", default=default_dir)
        ctx.invoke(export, output=Path(output))
    else:
        manifest = click.prompt("Manifest file", type=click.Path(dir_okay=False))
        ctx.invoke(import_cmd, manifest=Path(manifest))
