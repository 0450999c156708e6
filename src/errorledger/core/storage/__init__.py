"""Error storage: schema, store session and connection management."""

from errorledger.core.storage.database import ErrorDB
from errorledger.core.storage.schema import ErrorTables, build_error_tables
from errorledger.core.storage.store import INSERT_BATCH_SIZE, ErrorStore

__all__ = [
    "INSERT_BATCH_SIZE",
    "ErrorDB",
    "ErrorStore",
    "ErrorTables",
    "build_error_tables",
]
