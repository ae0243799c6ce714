"""Key-value session store backed by the SQLite state database.

Persistence is best-effort: a failed write is logged and reported to
the caller, never raised, and in-memory state stays authoritative.
A missing or unparseable record loads as the default session.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from namedraw.domain.session import Session, session_from_payload
from namedraw.infrastructure.database.schema import storage

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


def decode_session(raw: str | None, defaults: Session | None = None) -> Session:
    """Decode a stored JSON value, falling back to *defaults* when malformed."""
    fallback = defaults if defaults is not None else Session()
    if not raw:
        return fallback
    try:
        payload = json.loads(raw)
    except ValueError:
        logger.debug("Discarding unparseable session payload")
        return fallback
    return session_from_payload(payload, fallback)


def encode_session(session: Session) -> str:
    return json.dumps(session.to_payload(), ensure_ascii=False, separators=(",", ":"))


class SessionStore:
    """Load and save the session under a single storage key.

    Parameters:
        engine: SQLAlchemy engine with the ``storage`` table.
        key: Storage key for the session record.
        defaults: Session returned when nothing usable is stored.
    """

    def __init__(self, engine: Engine, *, key: str, defaults: Session | None = None) -> None:
        self._engine = engine
        self._key = key
        self._defaults = defaults if defaults is not None else Session()

    @property
    def key(self) -> str:
        return self._key

    @property
    def defaults(self) -> Session:
        return self._defaults

    # ------------------------------------------------------------------
    # Raw access
    # ------------------------------------------------------------------

    def load_raw(self) -> str | None:
        """Return the stored text for the key, or None if absent or unreadable."""
        try:
            with self._engine.connect() as conn:
                return conn.execute(
                    select(storage.c.value).where(storage.c.key == self._key)
                ).scalar_one_or_none()
        except SQLAlchemyError:
            logger.warning("Failed to read session record %s", self._key, exc_info=True)
            return None

    def save_raw(self, value: str) -> bool:
        """Upsert *value* under the key. Returns False on failure."""
        modified = datetime.now(UTC).isoformat()
        try:
            with self._engine.begin() as conn:
                updated = conn.execute(
                    update(storage)
                    .where(storage.c.key == self._key)
                    .values(value=value, modified=modified)
                )
                if updated.rowcount == 0:
                    conn.execute(
                        insert(storage).values(key=self._key, value=value, modified=modified)
                    )
        except SQLAlchemyError:
            logger.warning("Failed to persist session record %s", self._key, exc_info=True)
            return False
        return True

    # ------------------------------------------------------------------
    # Session access
    # ------------------------------------------------------------------

    def load(self) -> Session:
        return decode_session(self.load_raw(), self._defaults)

    def save(self, session: Session) -> bool:
        ok = self.save_raw(encode_session(session))
        if ok:
            logger.debug(
                "Saved session: %d names, %d drawn", len(session.names), len(session.history)
            )
        return ok
