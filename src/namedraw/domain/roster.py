"""Roster parsing and normalization.

A roster is the deduplicated, whitespace-normalized list of participant
names. Raw text is split on newlines and commas; order of first
occurrence is preserved.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

MIN_ROSTER_SIZE = 2

_WHITESPACE_RE = re.compile(r"\s+")
_SEPARATOR_RE = re.compile(r"[\n,]")


class RosterValidationError(ValueError):
    """Raised when a roster has fewer than :data:`MIN_ROSTER_SIZE` names."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__("need at least two names")


def normalize_name(raw: object) -> str:
    """Collapse internal whitespace to single spaces and trim.

    Examples:
        >>> normalize_name("  Kim   Min  ")
        'Kim Min'
        >>> normalize_name("\\t")
        ''
    """
    return _WHITESPACE_RE.sub(" ", str(raw)).strip()


def normalize_names(names: Iterable[object]) -> list[str]:
    """Normalize each name, drop empties, and dedupe keeping first occurrence."""
    seen: set[str] = set()
    out: list[str] = []
    for raw in names:
        name = normalize_name(raw)
        if not name or name in seen:
            continue
        seen.add(name)
        out.append(name)
    return out


def parse_names(text: str) -> list[str]:
    """Split free-form *text* on newline or comma into a normalized roster.

    Examples:
        >>> parse_names("Kim, Lee\\nPark\\r\\nKim")
        ['Kim', 'Lee', 'Park']
    """
    replaced = text.replace("\r\n", "\n")
    parts = (part.strip() for part in _SEPARATOR_RE.split(replaced))
    return normalize_names(part for part in parts if part)


def validate_roster(names: list[str]) -> list[str]:
    """Return *names* unchanged, or raise :class:`RosterValidationError`."""
    if len(names) < MIN_ROSTER_SIZE:
        raise RosterValidationError(len(names))
    return names
