"""Session aggregate and its pure state transitions.

INVARIANT: ``remaining`` and ``history`` only ever hold roster members.
With no-repeat on, ``remaining`` is the roster minus every name in
``history``; with it off, ``remaining`` is the full roster.

Every transition takes a :class:`Session` and returns a new one.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from namedraw.domain.roster import normalize_name, normalize_names, parse_names, validate_roster


class Session(BaseModel):
    """The single persisted aggregate.

    Attributes:
        names: Roster in input order, unique and normalized.
        no_repeat: Exclude already drawn names until the pool is reset.
        sound: Play tick cues during a draw (informational).
        remaining: Names still eligible under no-repeat mode.
        history: Winners in draw order, most recent last.
    """

    model_config = {"frozen": True}

    names: list[str] = Field(default_factory=list)
    no_repeat: bool = True
    sound: bool = False
    remaining: list[str] = Field(default_factory=list)
    history: list[str] = Field(default_factory=list)

    @property
    def pool(self) -> list[str]:
        """Names eligible for the next draw."""
        return list(self.remaining) if self.no_repeat else list(self.names)

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the persisted record shape."""
        return {
            "names": list(self.names),
            "noRepeat": self.no_repeat,
            "sound": self.sound,
            "remaining": list(self.remaining),
            "history": list(self.history),
        }


def _string_list(value: Any) -> list[str] | None:
    if not isinstance(value, list):
        return None
    return [item for item in value if isinstance(item, str)]


def session_from_payload(payload: Any, defaults: Session | None = None) -> Session:
    """Build a session from a decoded record, tolerating missing or bad fields.

    Wrong-typed fields fall back to *defaults* (an empty :class:`Session`
    when omitted), non-string list members are dropped, and
    remaining/history entries that are not on the roster are pruned.
    """
    if defaults is None:
        defaults = Session()
    if not isinstance(payload, dict):
        return defaults

    names = normalize_names(_string_list(payload.get("names")) or [])
    roster = set(names)

    no_repeat = payload.get("noRepeat")
    sound = payload.get("sound")
    remaining = _string_list(payload.get("remaining")) or []
    history = _string_list(payload.get("history")) or []

    return Session(
        names=names,
        no_repeat=no_repeat if isinstance(no_repeat, bool) else defaults.no_repeat,
        sound=sound if isinstance(sound, bool) else defaults.sound,
        remaining=[n for n in normalize_names(remaining) if n in roster],
        history=[n for n in map(normalize_name, history) if n in roster],
    )


def compute_remaining(session: Session) -> list[str]:
    """Recompute the pool from roster, mode, and history."""
    if not session.no_repeat:
        return list(session.names)
    used = set(session.history)
    return [n for n in session.names if n not in used]


def ensure_remaining(session: Session) -> Session:
    return session.model_copy(update={"remaining": compute_remaining(session)})


def set_roster(session: Session, raw_text: str) -> Session:
    """Replace the roster from free-form text and clear history.

    Raises:
        RosterValidationError: fewer than two names after normalization.
    """
    names = validate_roster(parse_names(raw_text))
    return ensure_remaining(session.model_copy(update={"names": names, "history": []}))


def apply_winner(session: Session, winner: str) -> Session:
    """Record *winner* and drop one occurrence of it from the pool."""
    remaining = list(session.remaining)
    if session.no_repeat and winner in remaining:
        remaining.remove(winner)
    return session.model_copy(
        update={"history": [*session.history, winner], "remaining": remaining}
    )


def undo_last(session: Session) -> tuple[Session, str | None]:
    """Remove the most recent winner, returning it with the new session.

    With no-repeat on, the removed name goes back to the front of the
    pool unless it is already there or has left the roster.
    """
    if not session.history:
        return session, None
    last = session.history[-1]
    remaining = list(session.remaining)
    if session.no_repeat and last not in remaining and last in session.names:
        remaining = [last, *remaining]
    updated = session.model_copy(update={"history": session.history[:-1], "remaining": remaining})
    return updated, last


def reset_draw(session: Session) -> Session:
    """Clear history and restore the pool; roster and settings are kept."""
    return ensure_remaining(session.model_copy(update={"history": []}))


def set_no_repeat(session: Session, enabled: bool) -> Session:
    # Keeps history; a name drawn twice with repeats on is still excluded once.
    return ensure_remaining(session.model_copy(update={"no_repeat": enabled}))


def set_sound(session: Session, enabled: bool) -> Session:
    return session.model_copy(update={"sound": enabled})
