"""Rich Console factory and theme for namedraw output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DRAW_THEME = Theme(
    {
        "draw.ok": "bold green",
        "draw.error": "bold red",
        "draw.warning": "bold yellow",
        "draw.op": "bold cyan",
        "draw.key": "dim",
        "draw.winner": "bold magenta",
        "draw.name": "bold",
        "draw.drawn": "dim strike",
        "draw.state.idle": "green",
        "draw.state.drawing": "yellow",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=DRAW_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 100,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_state(state: str) -> str:
    """Return the Rich style name for a machine state."""
    return f"draw.state.{state}" if state in ("idle", "drawing") else ""
