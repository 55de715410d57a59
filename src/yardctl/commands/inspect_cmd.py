"""Command: show how each input line parses, without sorting anything."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from yardctl.commands._base import YardCommand

if TYPE_CHECKING:
    from yardctl.commands._context import AppContext


@click.command(
    "inspect",
    cls=YardCommand,
    examples="""\
  yardctl inspect wagons.txt
  yardctl inspect --token A-1 --token garbage --token X-9
  yardctl -q inspect wagons.txt    # rejected tokens only""",
)
@click.argument(
    "source",
    required=False,
    type=click.Path(exists=True, dir_okay=False, allow_dash=True),
)
@click.option("-t", "--token", "tokens", multiple=True, help="A TYPE-NUMBER token. Repeatable.")
@click.pass_obj
def inspect_cmd(app: AppContext, source: str | None, tokens: tuple[str, ...]) -> None:
    """Report accepted, rejected, and skipped lines from SOURCE."""
    lines = app.read_lines(source, tokens)
    app.emit(app.service.inspect(lines))
