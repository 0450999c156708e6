# src/errorledger/core/storage/schema.py
"""SQLAlchemy table definitions for error storage.

Uses SQLAlchemy Core (not ORM) for explicit control over queries
and compatibility with multiple database backends.

Tables are built per namespace: every table name carries the caller's
prefix so several validation runs can share one database.
"""

from dataclasses import dataclass

from sqlalchemy import Column, Integer, MetaData, String, Table


@dataclass(frozen=True)
class ErrorTables:
    """The three tables of one error namespace."""

    prefix: str
    metadata: MetaData
    errors: Table
    error_refs: Table
    error_info: Table

    @property
    def in_write_order(self) -> tuple[Table, Table, Table]:
        """Parent table first, so refs are never flushed ahead of their error."""
        return (self.errors, self.error_refs, self.error_info)


def build_error_tables(prefix: str | None) -> ErrorTables:
    """Build table definitions for a namespace.

    Args:
        prefix: String prepended to every table name. Include any separator
            (e.g. "feed_1_" or "feed_1."). A dot makes everything before it
            the database schema. Not sanitized.

    Returns:
        ErrorTables bound to a fresh MetaData
    """
    prefix = prefix or ""
    schema, _, name_prefix = prefix.rpartition(".")
    metadata = MetaData(schema=schema or None)

    # === Errors ===

    errors = Table(
        f"{name_prefix}errors",
        metadata,
        Column("error_id", Integer, primary_key=True, autoincrement=False),
        Column("type", String),
        Column("problems", String),
    )

    # === Entity References ===

    error_refs = Table(
        f"{name_prefix}error_refs",
        metadata,
        Column("error_id", Integer),
        Column("entity_type", String),
        Column("line_number", Integer),
        Column("entity_id", String),
        Column("sequence_number", Integer, nullable=True),
    )

    # === Info (reserved) ===

    error_info = Table(
        f"{name_prefix}error_info",
        metadata,
        Column("error_id", Integer),
        Column("key", String),
        Column("value", String),
    )

    return ErrorTables(
        prefix=prefix,
        metadata=metadata,
        errors=errors,
        error_refs=error_refs,
        error_info=error_info,
    )
