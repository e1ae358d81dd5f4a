"""Command: build a canonical NSID from an authority and a name."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from nsidctl.commands._base import NsidCommand

if TYPE_CHECKING:
    from nsidctl.commands._context import AppContext


@click.command(
    cls=NsidCommand,
    examples="""\
  nsidctl build example.com fooBar
  nsidctl build example.com '*'
  nsidctl -q build example.com feed.getTimeline""",
)
@click.argument("authority")
@click.argument("name")
@click.pass_obj
def build(app: AppContext, authority: str, name: str) -> None:
    """Build an NSID from AUTHORITY (e.g. example.com) and NAME.

    Both parts are validated with the same rules the parser applies.
    """
    app.emit(app.service.construct(authority, name))
