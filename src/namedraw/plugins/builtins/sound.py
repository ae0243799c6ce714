"""Terminal sound cue plugin.

Rings the terminal bell on draw ticks when the session's sound flag is
on. Tone synthesis is left to richer plugins; the suggested frequency
is kept for inspection.
"""

from __future__ import annotations

import sys
from typing import TextIO

from namedraw.plugins.hookspecs import hookimpl

BELL = "\a"


class SoundCuePlugin:
    """Emit a bell character per tick while sound is enabled."""

    plugin_name = "sound"

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self.frequencies: list[int] = []

    @hookimpl
    def on_tick(self, candidate: str, progress: float, frequency: int, sound: bool) -> None:
        if not sound:
            return
        self.frequencies.append(frequency)
        stream = self._stream or sys.stderr
        if stream.isatty() or self._stream is not None:
            stream.write(BELL)
            stream.flush()
