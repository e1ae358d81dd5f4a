"""Command: parse a canonical NSID into authority and name."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from nsidctl.commands._base import NsidCommand

if TYPE_CHECKING:
    from nsidctl.commands._context import AppContext


@click.command(
    cls=NsidCommand,
    examples="""\
  nsidctl parse com.example.fooBar
  nsidctl parse com.example.*
  nsidctl --json parse com.long-thing1.cool.fooBarBaz""",
)
@click.argument("nsid")
@click.pass_obj
def parse(app: AppContext, nsid: str) -> None:
    """Parse NSID and show its authority (natural order) and name."""
    app.emit(app.service.parse(nsid))
