"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). Renderers are
dispatched by ``result.op`` in :func:`render_result`; unknown ops fall
through to a generic key-value renderer.

User-supplied text is always wrapped in :class:`rich.text.Text` so that
brackets in rejected input are never read as console markup.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from nsidctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from nsidctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(
    result: ServiceResult,
    *,
    verbose: bool = False,
    width: int | None = None,
) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console(width=width)

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    if verbose:
        _render_meta(console, result)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Success prints the canonical identifier when there is one. A failed
    batch prints only the rejected entries, one ``line:nsid`` per line.
    """
    if not result.ok:
        if result.op == "validate_batch":
            return "\n".join(
                f"{item['line']}:{item['nsid']}"
                for item in result.data.get("items", [])
                if not item["valid"]
            )
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    nsid = result.data.get("nsid")
    if nsid:
        return str(nsid)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="nsid.ok"), Text(f"  {result.op}", style="nsid.op"))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="nsid.key")
    if key in ("nsid", "input"):
        v = Text(str(value), style="nsid.id")
    elif key.startswith("authority"):
        shown = ", ".join(value) if isinstance(value, list) else str(value)
        v = Text(shown, style="nsid.authority")
    elif key == "name":
        v = Text(str(value), style="nsid.name")
    else:
        v = Text(str(value))
    console.print(k + v)


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block, including the telemetry span tree."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(Text(f"    {k}: {v}"))


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)
    style = "yellow" if duration > 10 else "dim"

    line = Text(prefix)
    line.append(f"{duration:>8.3f}ms", style=style)
    line.append(f"  {name}")
    annotations = span_data.get("annotations") or {}
    if annotations:
        line.append("  (" + ", ".join(f"{ak}={av}" for ak, av in annotations.items()) + ")")
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _pointer(source: str, position: int) -> Text:
    """Two-line diagnostic: the source, then a caret under *position*."""
    text = Text("    ")
    text.append(source, style="nsid.id")
    text.append("\n    " + " " * position)
    text.append("^", style="nsid.caret")
    return text


def _items_table(items: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Line", justify="right", style="dim")
    table.add_column("NSID", style="nsid.id")
    table.add_column("Status")
    for item in items:
        if item["valid"]:
            status = Text("ok", style="nsid.ok")
        else:
            status = Text(f"{item.get('code', '')}: {item.get('message', '')}", style="nsid.error")
        table.add_row(Text(str(item["line"])), Text(str(item["nsid"])), status)
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    line = Text("ERROR", style="nsid.error")
    line.append(f"  {result.op}", style="nsid.op")
    line.append(" — ")
    line.append(msg)
    console.print(line)

    detail = err.detail if err else {}
    source = detail.get("value", result.data.get("input"))
    position = detail.get("position")
    if isinstance(source, str) and isinstance(position, int):
        console.print(_pointer(source, position))

    if result.op == "validate_batch":
        rejected = [item for item in result.data.get("items", []) if not item["valid"]]
        if rejected:
            console.print(_items_table(rejected))

    if verbose and detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Success renderers ─────────────────────────────────────────────────


def _render_identifier(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render parse_nsid / construct_nsid results."""
    _status_line(console, result)
    for key in ("nsid", "authority_domain", "name", "wildcard"):
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose and "authority" in result.data:
        _field(console, "authority_segments", result.data["authority"])


def _render_validate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "nsid", result.data.get("nsid", ""))


def _render_batch(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key in ("count", "valid_count", "invalid_count"):
        _field(console, key, result.data.get(key, 0))
    items = result.data.get("items", [])
    if verbose and items:
        console.print(_items_table(items))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS = {
    "parse_nsid": _render_identifier,
    "construct_nsid": _render_identifier,
    "validate_nsid": _render_validate,
    "validate_batch": _render_batch,
}
