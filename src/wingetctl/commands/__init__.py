"""Subcommand modules for wingetctl.

Provides register_commands() which uses deferred imports to keep
``wingetctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the export and import commands on the root CLI group."""
    from wingetctl.commands.export import export
    from wingetctl.commands.import_cmd import import_cmd

    cli.add_command(export)
    cli.add_command(import_cmd)
