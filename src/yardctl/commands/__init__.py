"""Subcommand modules for yardctl.

register_commands() uses deferred imports so ``yardctl --help`` stays
cheap.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every standalone command on the root CLI group."""
    from yardctl.commands.inspect_cmd import inspect_cmd
    from yardctl.commands.sort_cmd import sort_cmd

    cli.add_command(sort_cmd)
    cli.add_command(inspect_cmd)
