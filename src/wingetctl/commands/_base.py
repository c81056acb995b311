"""Custom Click base classes with --examples support.

``WingetctlCommand`` and ``WingetctlGroup`` accept an ``examples`` parameter;
``--examples`` prints them and exits. This keeps ``--help`` concise.

``WingetctlGroup`` can also name a ``fallback_command``: when the first
argument is not a known subcommand, the whole argument list is handed to
that command instead. This is how ``wingetctl backup.json`` means
``wingetctl import backup.json``.
"""

from __future__ import annotations

from typing import Any

import click


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class WingetctlCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class WingetctlGroup(click.Group):
    """Click Group with ``--examples`` and an optional fallback subcommand."""

    command_class = WingetctlCommand

    def __init__(
        self,
        *args: Any,
        examples: str | None = None,
        fallback_command: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        self.fallback_command = fallback_command
        if examples:
            _add_examples_option(self, examples)

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        if self.fallback_command and args and self.get_command(ctx, args[0]) is None:
            fallback = self.get_command(ctx, self.fallback_command)
            if fallback is not None:
                return fallback.name, fallback, args
        return super().resolve_command(ctx, args)
