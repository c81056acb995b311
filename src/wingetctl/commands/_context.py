"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Provides the lazily built package manager and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from wingetctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from wingetctl.config.settings import WingetctlSettings
    from wingetctl.infrastructure.winget import PackageManager
    from wingetctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The package manager is created on first use so ``--help`` and
    ``--version`` never look for the winget executable.
    """

    def __init__(self, settings: WingetctlSettings) -> None:
        self.settings = settings
        self._package_manager: PackageManager | None = None

        from wingetctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from wingetctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def package_manager(self) -> PackageManager:
        """The package-manager client (created lazily on first access)."""
        if self._package_manager is None:
            from wingetctl.infrastructure.winget import WingetClient

            self._package_manager = WingetClient(self.settings.winget)
        return self._package_manager

    @property
    def shows_progress(self) -> bool:
        """Whether per-package progress lines should be written to stderr."""
        return not (self.settings.quiet or self.settings.json_output)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            if output:
                click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
