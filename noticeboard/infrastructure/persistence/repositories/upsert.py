"""Dialect-specific INSERT ... ON CONFLICT constructs (PostgreSQL in production, SQLite in tests)."""

from typing import Any

from sqlalchemy.dialects import postgresql, sqlite


def insert_for(dialect_name: str, table: Any) -> Any:
    """Return an insert() that supports on_conflict_do_update / on_conflict_do_nothing."""
    if dialect_name == "postgresql":
        return postgresql.insert(table)
    if dialect_name == "sqlite":
        return sqlite.insert(table)
    raise ValueError(f"Unsupported database dialect for upsert: {dialect_name}")
