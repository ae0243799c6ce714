"""SQLAlchemy Core table definitions for the namedraw state database.

A single key-value table mirrors browser local storage: each key holds
one JSON text value.
"""

from __future__ import annotations

from sqlalchemy import Column, MetaData, Table, Text

metadata = MetaData()

storage = Table(
    "storage",
    metadata,
    Column("key", Text, primary_key=True),
    Column("value", Text, nullable=False),
    Column("modified", Text, nullable=False),  # ISO 8601 UTC
)
