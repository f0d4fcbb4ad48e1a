"""Rich renderers for ResponseEnvelope.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are picked by the shape of ``envelope.data``: list results get
a table, mappings get key-value fields, anything else is printed as JSON.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from datotools.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from datotools.services.result import ResponseEnvelope

_MAX_COLUMNS = 5
_PREFERRED_COLUMNS = ("id", "type", "name", "label", "title", "api_key", "filename", "status")


# ── Public API ────────────────────────────────────────────────────────


def render_result(envelope: ResponseEnvelope, *, verbose: bool = False) -> str:
    """Render an envelope to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if envelope.success:
        data = envelope.data
        if isinstance(data, dict) and isinstance(data.get("items"), list):
            _render_list(envelope, console)
        elif isinstance(data, dict):
            _render_mapping(envelope, console)
        else:
            _render_raw(envelope, console)
    else:
        _render_error(envelope, console, verbose=verbose)

    if verbose:
        _render_meta(console, envelope)
    return get_output(console).rstrip("\n")


def render_quiet(envelope: ResponseEnvelope) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not envelope.success:
        msg = envelope.error.message if envelope.error else "Unknown error"
        return f"ERROR: {envelope.op}: {msg}"

    data = envelope.data
    items = data.get("items") if isinstance(data, dict) else None
    if isinstance(items, list) and items:
        ids = [_extract_id(item) for item in items]
        return "\n".join(i for i in ids if i)
    return f"OK: {envelope.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _extract_id(item: Any) -> str:
    if isinstance(item, dict):
        value = item.get("id")
        return "" if value is None else str(value)
    return str(item) if isinstance(item, (str, int)) else ""


def _compact(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


def _status_line(console: Console, envelope: ResponseEnvelope) -> None:
    label = Text("OK", style="dato.ok")
    op = Text(f"  {envelope.op}", style="dato.op")
    console.print(label, op, sep="", end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="dato.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="dato.id")
    elif key == "type":
        v = Text(str(value), style="dato.type")
    else:
        v = Text(_compact(value))
    console.print(k, v, sep="", end="")
    console.print()


def _columns(items: list[Any]) -> list[str]:
    seen: list[str] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        for key, value in item.items():
            if key not in seen and not isinstance(value, (dict, list)):
                seen.append(key)
    preferred = [c for c in _PREFERRED_COLUMNS if c in seen]
    rest = [c for c in seen if c not in preferred]
    return (preferred + rest)[:_MAX_COLUMNS]


def _item_table(items: list[Any]) -> Table:
    """Build a Rich Table for a list of resources."""
    columns = _columns(items)
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    if not columns:
        table.add_column("Value")
        for item in items:
            table.add_row(Text(_compact(item)))
        return table

    for col in columns:
        style = "dato.id" if col == "id" else None
        table.add_column(col.replace("_", " ").title(), style=style, no_wrap=col == "id")
    for item in items:
        row = item if isinstance(item, dict) else {}
        table.add_row(*(Text(_compact(row.get(col, ""))) for col in columns))
    return table


def _render_meta(console: Console, envelope: ResponseEnvelope) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not envelope.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in envelope.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
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
        line += f"  ({', '.join(f'{k}={v}' for k, v in annotations.items())})"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(envelope: ResponseEnvelope, console: Console, *, verbose: bool = False) -> None:
    err = envelope.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="dato.error")
    op = Text(f"  {envelope.op}", style="dato.op")
    code = Text(f"  [{err.code}]" if err else "", style="dato.code")
    console.print(label, op, code, Text(f"  {msg}"), sep="")

    if verbose and err and isinstance(err.details, dict):
        console.print(Text("  details:", style="dim"))
        for k, v in err.details.items():
            console.print(f"    {k}: {_compact(v)}", markup=False)


def _render_list(envelope: ResponseEnvelope, console: Console) -> None:
    """Status line, item count and pagination, then a table of items."""
    data = envelope.data
    items = data["items"]
    _status_line(console, envelope)
    _field(console, "count", data.get("count", len(items)))
    pagination = data.get("pagination")
    if isinstance(pagination, dict):
        _field(
            console,
            "page",
            f"offset={pagination.get('offset')} limit={pagination.get('limit')} "
            f"total={pagination.get('total')} has_more={pagination.get('has_more')}",
        )
    if items:
        console.print(_item_table(items))


def _render_mapping(envelope: ResponseEnvelope, console: Console) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, envelope)
    for key, value in envelope.data.items():
        _field(console, key, value)


def _render_raw(envelope: ResponseEnvelope, console: Console) -> None:
    _status_line(console, envelope)
    console.print(_json.dumps(envelope.data, indent=2, default=str), markup=False)
