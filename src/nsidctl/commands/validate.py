"""Command: validate one or many NSIDs."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from nsidctl.commands._base import NsidCommand

if TYPE_CHECKING:
    from nsidctl.commands._context import AppContext


@click.command(
    cls=NsidCommand,
    examples="""\
  nsidctl validate com.example.fooBar
  nsidctl validate com.example.a com.example.b
  nsidctl validate --file lexicons.txt
  cat lexicons.txt | nsidctl -q validate --file -
  nsidctl validate --file lexicons.txt --fail-fast""",
)
@click.argument("nsids", nargs=-1)
@click.option(
    "--file",
    "source",
    type=click.File("r", encoding="utf-8", errors="replace"),
    default=None,
    help="Read one NSID per line ('-' for stdin).",
)
@click.option(
    "--fail-fast/--no-fail-fast",
    default=None,
    help="Stop at the first invalid entry (default from [batch] config).",
)
@click.pass_obj
def validate(
    app: AppContext,
    nsids: tuple[str, ...],
    source: TextIO | None,
    fail_fast: bool | None,
) -> None:
    """Validate NSIDS, or every line of --file.

    Arguments are checked verbatim. File lines are stripped, and blank or
    comment lines are skipped per the [batch] config. Undecodable bytes in
    a file become U+FFFD and fail the line they appear on.
    """
    if source is not None and nsids:
        raise click.UsageError("Pass NSIDs as arguments or via --file, not both.")
    if source is None and not nsids:
        raise click.UsageError("Provide at least one NSID or --file.")

    if source is not None:
        app.emit(app.service.validate_many(source, fail_fast=fail_fast))
    elif len(nsids) == 1:
        app.emit(app.service.validate(nsids[0]))
    else:
        app.emit(app.service.validate_many(nsids, fail_fast=fail_fast, normalize=False))
