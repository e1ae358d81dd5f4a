"""Root CLI group for nsidctl with global flags and command registration."""

from __future__ import annotations

import click

from nsidctl import __version__
from nsidctl.commands import register_commands
from nsidctl.commands._base import NsidGroup
from nsidctl.commands._context import AppContext
from nsidctl.config.settings import NsidSettings


@click.group(
    cls=NsidGroup,
    invoke_without_command=True,
    examples="""\
  nsidctl parse com.example.fooBar
  nsidctl validate --file lexicons.txt
  nsidctl --json build example.com fooBar""",
)
@click.version_option(version=__version__, prog_name="nsidctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with timing.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """nsidctl — Namespace Identifier (NSID) parser and validator."""
    settings = NsidSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
