"""Pick the output mode for a ServiceResult: JSON, quiet, or Rich."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from yardctl.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from yardctl.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Output flags resolved from CLI settings."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    style: str = "display"
    show_empty: bool = True


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    JSON wins over quiet, quiet wins over the Rich renderers.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(
        result,
        verbose=settings.verbose,
        style=settings.style,
        show_empty=settings.show_empty,
    )
