"""Subcommand modules for nsidctl.

Provides register_commands(), which imports command modules only when the
root group is built.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from nsidctl.commands.build import build
    from nsidctl.commands.parse import parse
    from nsidctl.commands.validate import validate

    cli.add_command(parse)
    cli.add_command(validate)
    cli.add_command(build)
