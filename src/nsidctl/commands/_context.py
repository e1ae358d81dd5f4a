"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Owns logging setup, the NsidService, and result
emission (stdout/stderr routing plus exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from nsidctl.config.logging import configure_logging
from nsidctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from nsidctl.config.settings import NsidSettings
    from nsidctl.services.nsid import NsidService
    from nsidctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: NsidSettings) -> None:
        self.settings = settings
        self._service: NsidService | None = None

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from nsidctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def service(self) -> NsidService:
        """The NsidService, configured from the ``[batch]`` settings."""
        if self._service is None:
            from nsidctl.services.nsid import NsidService

            self._service = NsidService(self.settings.batch)
        return self._service

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout. Warnings go to stderr in human mode
          (JSON mode already carries them in the payload).
        * Failure: writes to stderr and exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            width=self.settings.output.width,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
