"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from namedraw.output.console import create_console, get_output, style_for_state

if TYPE_CHECKING:
    from rich.console import Console

    from namedraw.services.result import ServiceResult

# Snapshot keys shown by the generic renderer, in order.
_SUMMARY_KEYS = ("count", "remaining_count", "no_repeat", "sound", "display", "state")


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if not result.ok:
        _render_error(result, console, verbose=verbose)
    elif result.blocked:
        _render_blocked(result, console, verbose=verbose)
    else:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if result.blocked:
        return f"BLOCKED: {result.reason}"
    if result.op == "draw":
        return result.winner or ""
    if result.op == "show_roster":
        return "\n".join(result.data.get("names", []))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="draw.ok"), Text(f"  {result.op}", style="draw.op"))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="draw.key")
    if key == "state":
        v = Text(str(value), style=style_for_state(str(value)))
    elif key in ("winner", "display"):
        v = Text(str(value), style="draw.winner")
    elif isinstance(value, bool):
        v = Text("on" if value else "off")
    else:
        v = Text(str(value))
    console.print(k.append_text(v))


def _summary(console: Console, data: dict[str, Any]) -> None:
    for key in _SUMMARY_KEYS:
        if key in data:
            _field(console, key, data[key])


def _roster_table(data: dict[str, Any]) -> Table:
    """Build a table of roster names and whether each is still eligible."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="draw.key")
    table.add_column("Name", style="draw.name")
    table.add_column("Drawn", justify="right")
    table.add_column("Eligible")

    remaining = set(data.get("remaining", []))
    history = data.get("history", [])
    no_repeat = bool(data.get("no_repeat"))
    for i, name in enumerate(data.get("names", []), start=1):
        drawn = history.count(name)
        eligible = name in remaining if no_repeat else True
        table.add_row(
            str(i),
            Text(name, style="" if eligible else "draw.drawn"),
            str(drawn),
            "yes" if eligible else "no",
        )
    return table


def _history_lines(console: Console, history: list[str]) -> None:
    console.print(Text("  history:", style="draw.key"))
    if not history:
        console.print(Text("    (no draws yet)", style="dim"))
        return
    for i, name in enumerate(history, start=1):
        console.print(Text(f"    {i:>2}. ").append(name))


# ── Error / blocked renderers ─────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="draw.error")
    op = Text(f"  {result.op}", style="draw.op")
    console.print(label, op, Text(" — "), Text(msg))
    if verbose and err and err.detail:
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


def _render_blocked(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    reason = result.reason
    console.print(
        Text("BLOCKED", style="draw.warning"),
        Text(f"  {result.op}", style="draw.op"),
        Text(f"  ({reason})", style="draw.key"),
    )
    if verbose:
        _summary(console, result.data)


# ── Operation renderers ───────────────────────────────────────────────


def _render_status(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result)
    _summary(console, data)
    if data.get("names"):
        console.print()
        console.print(_roster_table(data))
    console.print()
    _history_lines(console, data.get("history", []))


def _render_draw(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result)
    winner = Text(str(data.get("winner", "")), style="draw.winner", justify="center")
    console.print(Panel(winner, title="Winner", expand=False, padding=(0, 4)))
    if data.get("no_repeat"):
        _field(console, "remaining", f"{data.get('remaining_count', 0)}/{data.get('count', 0)}")
    _field(console, "drawn", len(data.get("history", [])))
    if verbose:
        _history_lines(console, data.get("history", []))


def _render_roster(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result)
    _field(console, "count", data.get("count", 0))
    for name in data.get("names", []):
        console.print(Text("    ").append(name))


def _render_undo(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result)
    _field(console, "removed", data.get("removed", ""))
    _field(console, "display", data.get("display", ""))
    _field(console, "remaining_count", data.get("remaining_count", 0))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _summary(console, result.data)
    if verbose:
        _history_lines(console, result.data.get("history", []))


_OP_RENDERERS = {
    "status": _render_status,
    "draw": _render_draw,
    "set_roster": _render_roster,
    "show_roster": _render_roster,
    "undo": _render_undo,
}
