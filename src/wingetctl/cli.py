"""Root CLI group for wingetctl with global flags and command registration.

* ``wingetctl``               — interactive menu (help with ``--no-interact``)
* ``wingetctl MANIFEST``      — import MANIFEST
* ``wingetctl export|import`` — explicit subcommands
"""

from __future__ import annotations

import click

from wingetctl import __version__
from wingetctl.commands import register_commands
from wingetctl.commands._base import WingetctlGroup
from wingetctl.commands._context import AppContext
from wingetctl.config.settings import WingetctlSettings


@click.group(cls=WingetctlGroup, fallback_command="import", invoke_without_command=True)
@click.version_option(version=__version__, prog_name="wingetctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--no-interact", is_flag=True, help="Non-interactive mode (no prompts).")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    no_interact: bool,
    config_path: str | None,
) -> None:
    """wingetctl — back up and restore installed winget packages."""
    settings = WingetctlSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        no_interact=no_interact,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is not None:
        return

    if settings.no_interact:
        click.echo(ctx.get_help())
        return

    from wingetctl.commands.menu import prompt_action, run_action

    run_action(ctx, prompt_action())


register_commands(cli)
