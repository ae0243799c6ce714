"""Pluggy hook specifications for draw-machine notifications.

Hooks run synchronously on the machine's timeline, after the state
change they describe has been applied and persisted.
"""

from __future__ import annotations

from typing import Any

import pluggy

PROJECT_NAME = "namedraw"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class NamedrawHookSpec:
    """Hook specifications for the namedraw plugin system."""

    @hookspec
    def post_state_change(self, op: str, snapshot: dict[str, Any]) -> None:
        """Called after every operation with a read-only snapshot."""

    @hookspec
    def on_draw_start(self, pool_size: int, duration_ms: int, tick_ms: int) -> None:
        """Called when a draw enters the drawing state."""

    @hookspec
    def on_tick(self, candidate: str, progress: float, frequency: int, sound: bool) -> None:
        """Called on each cosmetic animation tick.

        *frequency* is the suggested cue pitch in Hz; act on it only if
        *sound* is true.
        """

    @hookspec
    def on_winner(self, winner: str, snapshot: dict[str, Any]) -> None:
        """Called once a draw has committed its winner."""

    @hookspec
    def on_attention(self, reason: str) -> None:
        """Called when an operation is blocked or input is rejected."""
