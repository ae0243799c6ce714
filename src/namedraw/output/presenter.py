"""Live draw ticker — a presentation plugin for terminals.

Rewrites a single stderr line with each cosmetic candidate while a draw
runs, so stdout stays clean for the final result.
"""

from __future__ import annotations

import sys
from typing import TextIO

from namedraw.plugins.hookspecs import hookimpl


class TickerPresenter:
    """Show cycling candidates on one line; clear it when the winner lands."""

    plugin_name = "ticker"

    def __init__(self, stream: TextIO | None = None, *, width: int = 40) -> None:
        self._stream = stream
        self._width = width
        self.ticks = 0

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stderr

    @hookimpl
    def on_draw_start(self, pool_size: int, duration_ms: int, tick_ms: int) -> None:
        self.ticks = 0

    @hookimpl
    def on_tick(self, candidate: str, progress: float, frequency: int, sound: bool) -> None:
        self.ticks += 1
        bar = "#" * int(progress * 10)
        line = f"  [{bar:<10}] {candidate}"
        self.stream.write("\r" + line[: self._width].ljust(self._width))
        self.stream.flush()

    @hookimpl
    def on_winner(self, winner: str, snapshot: dict[str, object]) -> None:
        if self.ticks:
            self.stream.write("\r" + " " * self._width + "\r")
            self.stream.flush()
