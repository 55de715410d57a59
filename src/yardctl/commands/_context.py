"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``.  Owns the yard service, input reading, and result
emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from yardctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from yardctl.config.settings import YardSettings
    from yardctl.services.result import ServiceResult
    from yardctl.services.yard import YardService


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The service is built lazily so ``--help`` and ``--version`` never
    construct a yard.
    """

    def __init__(self, settings: YardSettings) -> None:
        self.settings = settings
        self._service: YardService | None = None

        from yardctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from yardctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def service(self) -> YardService:
        """The yard service (created on first access)."""
        if self._service is None:
            from yardctl.services.yard import YardService

            self._service = YardService(strip_comments=self.settings.input.strip_comments)
        return self._service

    def read_lines(self, source: str | None, tokens: tuple[str, ...] = ()) -> list[str]:
        """Collect input lines from *source* (a path or ``-``) followed by *tokens*.

        Raises click.UsageError when neither is given.
        """
        if source is None and not tokens:
            raise click.UsageError("Provide an input FILE (or '-' for stdin) or --token values.")

        from yardctl.domain.yard import split_source

        lines: list[str] = []
        if source == "-":
            lines.extend(split_source(click.get_text_stream("stdin").read()))
        elif source is not None:
            path = Path(source)
            try:
                text = path.read_text(encoding=self.settings.input.encoding)
            except UnicodeDecodeError as exc:
                msg = f"Cannot decode {path} as {self.settings.input.encoding}: {exc}"
                raise click.ClickException(msg) from exc
            lines.extend(split_source(text))
        lines.extend(tokens)
        return lines

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout; warnings go to stderr outside JSON mode.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            style=self.settings.report.style,
            show_empty=self.settings.report.show_empty,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
