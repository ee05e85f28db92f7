"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from ifsctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from ifsctl.services.result import ServiceResult


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

    if verbose:
        _render_meta(console, result)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    data = result.data
    if result.op == "frontier":
        return "\n".join(cell["id"] for cell in data.get("frontier", []))
    if result.op == "list_rules":
        return "\n".join(str(item["index"]) for item in data.get("items", []))
    if result.op == "generate":
        return str(data.get("count", ""))
    if result.op == "share_encode":
        return str(data.get("url", ""))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="ifs.ok")
    op = Text(f"  {result.op}", style="ifs.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="ifs.key")
    if key == "path" or key == "saved":
        v = Text(str(value), style="ifs.path")
    elif key == "name":
        v = Text(str(value), style="ifs.name")
    elif key.endswith("count"):
        v = Text(str(value), style="ifs.count")
    elif isinstance(value, (dict, list)):
        v = Text(json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _fmt_vec(values: list[float]) -> str:
    return "(" + ", ".join(f"{v:.4g}" for v in values) + ")"


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


# ── Op renderers ──────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_generate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result)
    for key in ("name", "base_shape", "rule_count", "count", "max_instances", "saved"):
        if key in data:
            _field(console, key, data[key])

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Level", justify="right")
    table.add_column("Instances", style="ifs.count", justify="right")
    table.add_column("Total", justify="right")
    running = 0
    for level, count in enumerate(data.get("level_counts", [])):
        running += count
        table.add_row(str(level), str(count), str(running))
    console.print(table)

    if data.get("truncated"):
        console.print(
            Text(
                f"  truncated at level {data['completed_levels']} of {data['iterations']}"
                f" (uncapped total {data['expected_count']})",
                style="ifs.warning",
            )
        )
    elif verbose:
        console.print(Text(f"  levels: {data['completed_levels']}", style="dim"))


def _render_frontier(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result)
    for key in ("step", "offset", "occupied_count", "parent_cell_count", "frontier_count"):
        _field(console, key, data[key])

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Cell", style="ifs.cell", no_wrap=True)
    table.add_column("Position")
    for cell in data.get("frontier", []):
        table.add_row(cell["id"], _fmt_vec(cell["position"]))
    console.print(table)


def _render_rules(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result)
    _field(console, "name", data["name"])
    _field(console, "count", data["count"])

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right")
    table.add_column("Position")
    table.add_column("Rotation")
    table.add_column("Scale", justify="right")
    table.add_column("Cell", style="ifs.cell")
    for item in data.get("items", []):
        table.add_row(
            str(item["index"]),
            _fmt_vec(item["position"]),
            _fmt_vec(item["rotation"]),
            f"{item['scale']:.4g}",
            ",".join(str(i) for i in item.get("cell", [])),
        )
    console.print(table)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="ifs.error")
    op = Text(f"  {result.op}", style="ifs.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))
    if err and err.detail:
        for key, value in err.detail.items():
            _field(console, key, value)


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "generate": _render_generate,
    "frontier": _render_frontier,
    "list_rules": _render_rules,
}
