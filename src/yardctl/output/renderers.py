"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console backed by StringIO; the caller
gets plain text back from :func:`render_result`.  Renderers are
dispatched by ``result.op``; unknown ops fall through to a generic
key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from yardctl.output.console import create_console, get_output, style_for_direction

if TYPE_CHECKING:
    from rich.console import Console

    from yardctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(
    result: ServiceResult,
    *,
    verbose: bool = False,
    style: str = "display",
    show_empty: bool = True,
) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    opts = _RenderOptions(verbose=verbose, style=style, show_empty=show_empty)

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, opts)
    else:
        _render_error(result, console, opts)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: one line per direction, or rejected tokens."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    d = result.data
    if result.op in _REPORT_OPS:
        lines = []
        for tag, entry in d.get("directions", {}).items():
            tokens = " ".join(w["token"] for w in entry.get("wagons", []))
            lines.append(f"{tag}: {tokens}".rstrip())
        return "\n".join(lines)

    if result.op == "sort":
        sizes = " ".join(f"{tag}={size}" for tag, size in d.get("directions", {}).items())
        return f"moved: {d.get('moved', 0)} {sizes}".rstrip()

    if result.op == "load":
        return f"loaded: {d.get('count', 0)}"

    if result.op == "inspect":
        rejected = [item["token"] for item in d.get("items", []) if item["status"] == "rejected"]
        return "\n".join(rejected)

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


_REPORT_OPS = frozenset({"report", "run", "clear"})


class _RenderOptions:
    __slots__ = ("show_empty", "style", "verbose")

    def __init__(self, *, verbose: bool, style: str, show_empty: bool) -> None:
        self.verbose = verbose
        self.style = style
        self.show_empty = show_empty


def wagon_label(wagon: dict[str, Any], style: str = "display") -> str:
    """``Wagon A-1`` in display style, ``A-1`` in token style."""
    token = str(wagon.get("token", ""))
    return token if style == "token" else f"Wagon {token}"


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="yard.ok"), Text(f"  {result.op}", style="yard.op"))


def _field(console: Console, key: str, value: Any) -> None:
    console.print(Text(f"  {key}: ", style="yard.key"), Text(str(value)), sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block, including the telemetry span tree."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        if key == "telemetry":
            _render_span(console, value, indent=4)
        else:
            console.print(Text(f"    {key}: {value}"))


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    prefix = " " * indent
    line = f"{prefix}{span.get('duration_ms', 0.0):>8.2f}ms  {span.get('name', '?')}"
    annotations = span.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(Text(line, style="dim"))
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


def _directions_table(directions: dict[str, Any], opts: _RenderOptions) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Direction", no_wrap=True)
    table.add_column("Count", style="yard.count", justify="right")
    table.add_column("Wagons")

    for tag, entry in directions.items():
        wagons = entry.get("wagons", [])
        if not wagons and not opts.show_empty:
            continue
        labels = ", ".join(wagon_label(w, opts.style) for w in wagons)
        table.add_row(
            Text(tag, style=style_for_direction(tag)),
            str(entry.get("count", len(wagons))),
            Text(labels) if labels else Text("(empty)", style="yard.empty"),
        )
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, opts: _RenderOptions) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="yard.error"),
        Text(f"  {result.op}", style="yard.op"),
        Text(" — "),
        Text(msg),
    )
    if opts.verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_load(result: ServiceResult, console: Console, opts: _RenderOptions) -> None:
    _status_line(console, result)
    _field(console, "loaded", result.data.get("count", 0))
    _field(console, "input_size", result.data.get("input_size", 0))
    if opts.verbose:
        _render_meta(console, result)


def _render_sort(result: ServiceResult, console: Console, opts: _RenderOptions) -> None:
    _status_line(console, result)
    _field(console, "moved", result.data.get("moved", 0))
    _field(console, "input_size", result.data.get("input_size", 0))
    for tag, size in result.data.get("directions", {}).items():
        _field(console, f"direction {tag}", size)
    if opts.verbose:
        _render_meta(console, result)


def _render_report(result: ServiceResult, console: Console, opts: _RenderOptions) -> None:
    """Render report/run/clear results as a per-direction table."""
    d = result.data
    _status_line(console, result)
    for key in ("loaded", "moved"):
        if key in d:
            _field(console, key, d[key])
    console.print()
    console.print(_directions_table(d.get("directions", {}), opts))
    console.print(f"\n{d.get('total', 0)} wagons sorted")
    if opts.verbose:
        _render_meta(console, result)


def _render_inspect(result: ServiceResult, console: Console, opts: _RenderOptions) -> None:
    d = result.data
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Line", justify="right")
    table.add_column("Token", no_wrap=True)
    table.add_column("Status")
    table.add_column("Result")

    for item in d.get("items", []):
        status = item["status"]
        if status == "accepted":
            outcome = Text(wagon_label(item["wagon"], opts.style))
            status_text = Text(status, style="yard.ok")
        elif status == "rejected":
            outcome = Text(f"{item['reason']}: {item.get('detail', '')}", style="yard.rejected")
            status_text = Text(status, style="yard.rejected")
        else:
            outcome = Text("")
            status_text = Text(status, style="yard.skipped")
        table.add_row(str(item["line"]), Text(item["token"]), status_text, outcome)

    console.print(table)
    console.print(
        f"\n{d.get('accepted', 0)} accepted, {d.get('rejected', 0)} rejected, "
        f"{d.get('skipped', 0)} skipped"
    )
    if opts.verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, opts: _RenderOptions) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if opts.verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "load": _render_load,
    "sort": _render_sort,
    "report": _render_report,
    "run": _render_report,
    "clear": _render_report,
    "inspect": _render_inspect,
}
