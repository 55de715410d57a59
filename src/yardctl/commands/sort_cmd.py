"""Command: load wagons, sort them into directions, and print the report."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from yardctl.commands._base import YardCommand

if TYPE_CHECKING:
    from yardctl.commands._context import AppContext


@click.command(
    "sort",
    cls=YardCommand,
    examples="""\
  yardctl sort wagons.txt
  cat wagons.txt | yardctl sort -
  yardctl sort --token A-1 --token B-1 --token A-2
  yardctl --json sort wagons.txt
  yardctl -q sort wagons.txt""",
)
@click.argument(
    "source",
    required=False,
    type=click.Path(exists=True, dir_okay=False, allow_dash=True),
)
@click.option(
    "-t",
    "--token",
    "tokens",
    multiple=True,
    help="A TYPE-NUMBER token, e.g. A-12. Repeatable; read after SOURCE.",
)
@click.option("--reset", is_flag=True, help="Empty the direction stacks before loading.")
@click.pass_obj
def sort_cmd(app: AppContext, source: str | None, tokens: tuple[str, ...], reset: bool) -> None:
    """Sort wagons from SOURCE (one TYPE-NUMBER per line) into directions.

    Malformed lines and unknown type tags are skipped; use
    ``yardctl inspect`` to see which lines were rejected.
    """
    lines = app.read_lines(source, tokens)
    app.emit(app.service.run(lines, reset=reset))
