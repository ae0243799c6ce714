"""DrawMachine — the draw state machine.

Holds the authoritative session, the drawing guard, and the pair of
scheduled callbacks (tick + completion) owned by a running draw.
Pure session transitions live in :mod:`namedraw.domain.session`; this
class sequences them, persists after every mutation, and notifies
plugins with a read-only snapshot.

States are derived: ``drawing`` while a handle pair is outstanding,
``idle`` otherwise.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from namedraw.domain import session as transitions
from namedraw.domain.roster import RosterValidationError
from namedraw.domain.session import Session
from namedraw.domain.states import BLOCKED_MESSAGES, PLACEHOLDER, BlockedReason, DrawState
from namedraw.infrastructure.randomness import pick
from namedraw.services.base import BaseService
from namedraw.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from namedraw.infrastructure.scheduler import CancelHandle
    from namedraw.infrastructure.workspace import Workspace

log = structlog.get_logger(__name__)

NOT_PERSISTED = "State not persisted; changes are kept in memory only"

BASE_FREQUENCY_HZ = 520
FREQUENCY_SPAN_HZ = 420


def tick_frequency(progress: float) -> int:
    """Cue pitch rising from 520 Hz to 940 Hz over the draw."""
    return BASE_FREQUENCY_HZ + int(FREQUENCY_SPAN_HZ * progress)


class DrawMachine(BaseService):
    """Draw/undo/reset/option operations over one owned session."""

    def __init__(self, workspace: Workspace) -> None:
        super().__init__(workspace)
        self._session = transitions.ensure_remaining(workspace.store.load())
        self._display = self._session.history[-1] if self._session.history else PLACEHOLDER

        self._drawing = False
        self._tick_handle: CancelHandle | None = None
        self._done_handle: CancelHandle | None = None
        self._pool: list[str] = []
        self._started_at = 0
        self._duration_ms = 0
        self._draw_warnings: list[str] = []
        self._last_draw: ServiceResult | None = None

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def session(self) -> Session:
        return self._session

    @property
    def state(self) -> DrawState:
        return DrawState.DRAWING if self._drawing else DrawState.IDLE

    @property
    def display(self) -> str:
        """The currently displayed result (last winner or placeholder)."""
        return self._display

    @property
    def last_draw(self) -> ServiceResult | None:
        """Result of the most recently completed draw, if any."""
        return self._last_draw

    def snapshot(self) -> dict[str, Any]:
        s = self._session
        return {
            "names": list(s.names),
            "count": len(s.names),
            "no_repeat": s.no_repeat,
            "sound": s.sound,
            "remaining": list(s.remaining),
            "remaining_count": len(s.remaining),
            "history": list(s.history),
            "display": self._display,
            "state": str(self.state),
        }

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _commit(self, session: Session, warnings: list[str]) -> None:
        """Replace the in-memory session and persist it (best-effort)."""
        self._session = session
        if not self._workspace.store.save(session):
            warnings.append(NOT_PERSISTED)

    def _finish(self, op: str, warnings: list[str], **extra: Any) -> ServiceResult:
        snapshot = self.snapshot()
        self._dispatch_event("post_state_change", {"op": op, "snapshot": snapshot}, warnings)
        return ServiceResult.succeeded(op, {**snapshot, **extra}, warnings)

    def _blocked(self, op: str, reason: BlockedReason) -> ServiceResult:
        warnings = [BLOCKED_MESSAGES[reason]]
        log.debug("operation.blocked", op=op, reason=str(reason))
        self._dispatch_event("on_attention", {"reason": str(reason)}, warnings)
        return ServiceResult.blocked_by(op, reason, self.snapshot(), warnings)

    def _stop_animation(self) -> bool:
        """Cancel both draw callbacks and clear the guard. Returns True if a draw was running."""
        was_drawing = self._drawing
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None
        if self._done_handle is not None:
            self._done_handle.cancel()
            self._done_handle = None
        self._drawing = False
        return was_drawing

    # ------------------------------------------------------------------
    # Roster
    # ------------------------------------------------------------------

    def set_roster(self, raw_text: str) -> ServiceResult:
        """Replace the roster from free-form text; clears history."""
        op = "set_roster"
        if self._drawing:
            return self._blocked(op, BlockedReason.DRAWING)

        try:
            updated = transitions.set_roster(self._session, raw_text)
        except RosterValidationError as exc:
            warnings: list[str] = []
            self._dispatch_event("on_attention", {"reason": "validation_error"}, warnings)
            return ServiceResult.failed(
                op,
                ErrorCode.VALIDATION_ERROR,
                str(exc),
                detail={"count": exc.count},
                warnings=warnings,
            )

        warnings = []
        self._display = PLACEHOLDER
        self._commit(updated, warnings)
        log.debug("roster.saved", count=len(updated.names))
        return self._finish(op, warnings)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def start_draw(self) -> ServiceResult:
        """Enter the drawing state and schedule the tick and completion callbacks.

        Returns immediately; the winner is committed when the completion
        callback fires on the scheduler.
        """
        op = "start_draw"
        if self._drawing:
            return self._blocked(op, BlockedReason.ALREADY_DRAWING)
        if not self._session.names:
            return self._blocked(op, BlockedReason.EMPTY_ROSTER)
        if self._session.no_repeat and not self._session.remaining:
            return self._blocked(op, BlockedReason.POOL_EXHAUSTED)

        cfg = self._workspace.settings.draw
        rng = self._workspace.random
        scheduler = self._workspace.scheduler

        self._drawing = True
        self._pool = self._session.pool
        self._duration_ms = rng.randint(cfg.min_duration_ms, cfg.max_duration_ms)
        tick_ms = rng.randint(cfg.min_tick_ms, cfg.max_tick_ms)
        self._started_at = scheduler.now()
        self._draw_warnings = []
        self._last_draw = None

        self._tick_handle = scheduler.call_every(tick_ms, self._on_tick)
        self._done_handle = scheduler.call_later(self._duration_ms, self._on_complete)

        log.debug(
            "draw.start", pool_size=len(self._pool), duration_ms=self._duration_ms, tick_ms=tick_ms
        )
        warnings: list[str] = []
        self._dispatch_event(
            "on_draw_start",
            {"pool_size": len(self._pool), "duration_ms": self._duration_ms, "tick_ms": tick_ms},
            warnings,
        )
        return self._finish(op, warnings, duration_ms=self._duration_ms, tick_ms=tick_ms)

    def draw(self) -> ServiceResult:
        """Start a draw and run the scheduler until it completes.

        Returns the committed winner result (``op="draw"``), or the
        blocked result if the draw could not start.
        """
        started = self.start_draw()
        if started.blocked:
            return started.model_copy(update={"op": "draw"})

        self._workspace.scheduler.run_until(lambda: not self._drawing)
        if self._last_draw is None:
            return ServiceResult.failed(
                "draw", ErrorCode.DRAW_CANCELLED, "Draw was cancelled", data=self.snapshot()
            )
        return self._last_draw.model_copy(
            update={"warnings": [*started.warnings, *self._last_draw.warnings]}
        )

    def cancel_draw(self) -> ServiceResult:
        """Stop a running draw without committing a winner."""
        was_drawing = self._stop_animation()
        warnings: list[str] = []
        if was_drawing:
            log.debug("draw.cancelled")
        return self._finish("cancel_draw", warnings, cancelled=was_drawing)

    def _on_tick(self) -> None:
        if not self._drawing:
            return
        elapsed = self._workspace.scheduler.now() - self._started_at
        progress = min(1.0, elapsed / self._duration_ms)
        candidate = pick(self._workspace.random, self._pool)
        self._dispatch_event(
            "on_tick",
            {
                "candidate": candidate,
                "progress": progress,
                "frequency": tick_frequency(progress),
                "sound": self._session.sound,
            },
            self._draw_warnings,
        )

    def _on_complete(self) -> None:
        if not self._stop_animation():
            return
        winner = pick(self._workspace.random, self._pool)
        self._apply_winner(winner)

    def _apply_winner(self, winner: str) -> None:
        warnings = self._draw_warnings
        self._display = winner
        self._commit(transitions.apply_winner(self._session, winner), warnings)
        log.debug("draw.winner", winner=winner, drawn=len(self._session.history))
        self._dispatch_event("on_winner", {"winner": winner, "snapshot": self.snapshot()}, warnings)
        self._last_draw = self._finish("draw", warnings, winner=winner)

    # ------------------------------------------------------------------
    # Undo / reset
    # ------------------------------------------------------------------

    def undo(self) -> ServiceResult:
        """Remove the most recent winner, returning it to the pool front."""
        op = "undo"
        if self._drawing:
            return self._blocked(op, BlockedReason.DRAWING)
        if not self._session.history:
            return self._blocked(op, BlockedReason.NOTHING_TO_UNDO)

        updated, removed = transitions.undo_last(self._session)
        warnings: list[str] = []
        self._display = updated.history[-1] if updated.history else PLACEHOLDER
        self._commit(updated, warnings)
        return self._finish(op, warnings, removed=removed)

    def reset_draw(self) -> ServiceResult:
        """Clear history and restore the full pool, keeping roster and settings."""
        cancelled = self._stop_animation()
        warnings: list[str] = []
        self._display = PLACEHOLDER
        self._commit(transitions.reset_draw(self._session), warnings)
        return self._finish("reset_draw", warnings, cancelled=cancelled)

    def reset_all(self, *, confirmed: bool = False) -> ServiceResult:
        """Restore the whole session to defaults. Requires *confirmed*."""
        op = "reset_all"
        if not confirmed:
            return ServiceResult.failed(
                op,
                ErrorCode.CONFIRMATION_REQUIRED,
                "Full reset deletes names, settings, and history; confirm to proceed",
            )

        cancelled = self._stop_animation()
        warnings: list[str] = []
        self._display = PLACEHOLDER
        self._commit(self._workspace.store.defaults, warnings)
        log.debug("session.reset_all")
        return self._finish(op, warnings, cancelled=cancelled)

    # ------------------------------------------------------------------
    # Options
    # ------------------------------------------------------------------

    def set_no_repeat(self, enabled: bool) -> ServiceResult:
        """Toggle no-repeat mode and recompute the pool from history."""
        warnings: list[str] = []
        self._commit(transitions.set_no_repeat(self._session, enabled), warnings)
        return self._finish("set_no_repeat", warnings)

    def set_sound(self, enabled: bool) -> ServiceResult:
        warnings: list[str] = []
        self._commit(transitions.set_sound(self._session, enabled), warnings)
        return self._finish("set_sound", warnings)

    def status(self) -> ServiceResult:
        return ServiceResult.succeeded("status", self.snapshot())

    def roster(self) -> ServiceResult:
        """The saved roster, one entry per name, for editing and re-saving."""
        names = list(self._session.names)
        return ServiceResult.succeeded("show_roster", {"names": names, "count": len(names)})

    def close(self) -> None:
        """Tear down: cancel any outstanding draw without committing it."""
        self._stop_animation()
