"""Machine states and blocked-operation reasons.

The draw machine is either idle or drawing. The state is derived from
whether a draw's scheduled callbacks are outstanding and is never
persisted.
"""

from __future__ import annotations

from enum import StrEnum

PLACEHOLDER = "—"


class DrawState(StrEnum):
    """Derived machine state."""

    IDLE = "idle"
    DRAWING = "drawing"


class BlockedReason(StrEnum):
    """Why an operation was ignored instead of applied."""

    ALREADY_DRAWING = "already_drawing"
    EMPTY_ROSTER = "empty_roster"
    POOL_EXHAUSTED = "pool_exhausted"
    NOTHING_TO_UNDO = "nothing_to_undo"
    DRAWING = "drawing"


BLOCKED_MESSAGES: dict[str, str] = {
    BlockedReason.ALREADY_DRAWING: "A draw is already in progress",
    BlockedReason.EMPTY_ROSTER: "No names saved yet",
    BlockedReason.POOL_EXHAUSTED: "Everyone has been drawn; reset the draw to start over",
    BlockedReason.NOTHING_TO_UNDO: "Nothing to undo",
    BlockedReason.DRAWING: "Not allowed while a draw is in progress",
}
