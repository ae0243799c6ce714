"""Database engine setup for the SQLite state file.

The DB is stored at {root}/{storage.dirname}/namedraw.db. SQLAlchemy
Core (not ORM) is used because namedraw is a short-lived CLI process.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from namedraw.infrastructure.database.schema import metadata

DB_FILENAME = "namedraw.db"


class StateDirectoryError(RuntimeError):
    """The state directory or its database cannot be opened."""

    def __init__(self, state_dir: Path, reason: str) -> None:
        self.state_dir = state_dir
        self.reason = reason
        super().__init__(f"Cannot open state directory {state_dir}: {reason}")


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with WAL mode enabled."""
    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return engine


def init_database(state_dir: Path) -> Engine:
    """Initialize the state database inside *state_dir*.

    Creates the directory (and its ``plugins/`` folder) and all tables.
    Idempotent — safe to call on an existing directory.

    Raises:
        StateDirectoryError: The directory cannot be created or the
            database file cannot be opened.
    """
    try:
        state_dir.mkdir(parents=True, exist_ok=True)
        (state_dir / "plugins").mkdir(exist_ok=True)
    except OSError as exc:
        raise StateDirectoryError(state_dir, exc.strerror or str(exc)) from exc

    engine = create_db_engine(state_dir / DB_FILENAME)
    try:
        metadata.create_all(engine)
    except SQLAlchemyError as exc:
        engine.dispose()
        raise StateDirectoryError(state_dir, str(getattr(exc, "orig", None) or exc)) from exc
    return engine
