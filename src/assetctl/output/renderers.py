"""Task-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from assetctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from assetctl.services.result import ServiceResult

# Past this many files, only the count is printed unless --verbose.
MAX_LISTED_FILES = 10


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="asset.ok")
    op = Text(f"  {result.op}", style="asset.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="asset.key")
    if key == "path":
        v = Text(str(value), style="asset.path")
    elif key == "count":
        v = Text(str(value), style="asset.count")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="asset.error")
    op = Text(f"  {result.op}", style="asset.op")
    console.print(label, op, Text(" — "), msg)

    if result.op == "build" and result.data.get("tasks"):
        console.print(_task_table(result.data["tasks"]))

    if err and err.detail:
        for item in err.detail.get("errors", []):
            console.print(f"  [asset.error]error[/asset.error] {item['file']}: {item['message']}")
        if verbose:
            console.print(Text("  detail:", style="dim"))
            for k, v in err.detail.items():
                console.print(f"    {k}: {v}")


# ── Task renderers ────────────────────────────────────────────────────


def _render_files(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render css/js/media/html/vendor results: count, then the files."""
    _status_line(console, result)
    files = result.data.get("files", [])
    _field(console, "count", result.data.get("count", len(files)))
    if verbose or len(files) <= MAX_LISTED_FILES:
        for path in files:
            console.print(Text(f"    {path}", style="asset.path"))
    if verbose:
        _render_meta(console, result)


def _render_clean(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "path", result.data.get("path", ""))
    _field(console, "removed", result.data.get("removed", False))
    if verbose:
        _render_meta(console, result)


def _task_table(tasks: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Task", style="asset.op", no_wrap=True)
    table.add_column("Status")
    table.add_column("Files", style="asset.count", justify="right")
    for task in tasks:
        status = Text("ok", style="asset.ok") if task.get("ok") else Text("failed", style="asset.error")
        table.add_row(str(task.get("task", "")), status, str(task.get("count", 0)))
    return table


def _render_build(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    console.print(_task_table(result.data.get("tasks", [])))
    console.print(f"\n{result.data.get('count', 0)} files written")
    if verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "clean": _render_clean,
    "vendor": _render_files,
    "css": _render_files,
    "js": _render_files,
    "media": _render_files,
    "html": _render_files,
    "build": _render_build,
}
