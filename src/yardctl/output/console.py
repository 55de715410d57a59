"""Rich Console factory and theme for yardctl output.

Consoles render into a StringIO buffer so renderers keep a plain
``-> str`` contract.  In non-TTY environments (tests, pipes) Rich drops
color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

YARD_THEME = Theme(
    {
        "yard.ok": "bold green",
        "yard.error": "bold red",
        "yard.warning": "bold yellow",
        "yard.op": "bold cyan",
        "yard.key": "dim",
        "yard.count": "bold",
        "yard.empty": "dim italic",
        "yard.direction.a": "green",
        "yard.direction.b": "blue",
        "yard.rejected": "red",
        "yard.skipped": "dim",
    }
)

_DIRECTION_STYLES: dict[str, str] = {
    "A": "yard.direction.a",
    "B": "yard.direction.b",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=YARD_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_direction(tag: str) -> str:
    return _DIRECTION_STYLES.get(tag.upper(), "")
