# src/errorledger/core/storage/store.py
"""ErrorStore: append-only, batched persistence of validation errors.

One store owns one database connection for one namespace (table prefix).
It assigns every error a sequential id, stages rows for the errors,
error_refs and error_info tables, and sends them in batches. Nothing is
durable until finish() commits.

Single-owner precondition: a store is used by one thread only and there is
no internal locking. Concurrent sessions on the same namespace are not
supported; callers serialize them.
"""

from typing import Any

from sqlalchemy import Connection, Insert, func, insert, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from errorledger.contracts import ErrorRecord, StorageError
from errorledger.core.logging import get_logger
from errorledger.core.storage.schema import ErrorTables, build_error_tables

logger = get_logger(__name__)

INSERT_BATCH_SIZE = 500


class ErrorStore:
    """Stores validation errors one by one in a prefixed set of SQL tables.

    Usage:
        store = ErrorStore(engine, "feed_1_", create_tables=True)
        for error in validator.errors():
            store.store_error(error)
        store.finish()
        store.connection.close()

    Once constructed, the store never closes its connection, so pooled
    connections are released by whoever owns the session (see
    ErrorDB.open_store). A failed construction releases it before raising.
    """

    def __init__(
        self,
        engine: Engine,
        table_prefix: str | None,
        create_tables: bool,
        *,
        batch_size: int = INSERT_BATCH_SIZE,
    ) -> None:
        """Acquire a connection and create or reattach to the error tables.

        Args:
            engine: Connection factory for the target database
            table_prefix: Namespace prepended to all table names. Generated
                internally by callers, so it is not sanitized.
            create_tables: True to create the tables, False to resume
                numbering after the highest error_id already stored
            batch_size: Errors staged between batch executions

        Raises:
            StorageError: If connecting, creating or inspecting tables fails
        """
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")

        self._tables: ErrorTables = build_error_tables(table_prefix)
        self._batch_size = batch_size
        self._error_count = 0

        self._pending_errors: list[dict[str, Any]] = []
        self._pending_refs: list[dict[str, Any]] = []
        self._pending_info: list[dict[str, Any]] = []

        try:
            self._connection: Connection = engine.connect()
        except SQLAlchemyError as e:
            raise self._storage_error("connect", e) from e

        try:
            if create_tables:
                self._create_error_tables()
            else:
                self._reconnect_error_tables()
        except StorageError:
            # No store is returned, so nobody else can release the connection
            self._connection.close()
            raise
        self._create_insert_statements()

    @property
    def table_prefix(self) -> str:
        return self._tables.prefix

    @property
    def tables(self) -> ErrorTables:
        return self._tables

    @property
    def connection(self) -> Connection:
        """The connection held for this session. Released by the owner."""
        return self._connection

    def get_error_count(self) -> int:
        """Number of ids assigned so far, i.e. the next id to be assigned."""
        return self._error_count

    def store_error(self, error: ErrorRecord) -> int:
        """Assign an id to an error and stage its rows.

        Every batch_size errors, all staged rows are sent to the database.
        The transaction is not committed until finish().

        Args:
            error: Record to store

        Returns:
            The error_id assigned to this record

        Raises:
            StorageError: If a batch execution fails
        """
        # Assigned before any I/O so the count stays consistent on failure
        error_id = self._error_count
        self._error_count += 1

        self._pending_errors.append(
            {"error_id": error_id, "type": error.kind_name, "problems": error.detail}
        )
        # Info rows: not produced yet, see InfoEntry
        for ref in error.references:
            self._pending_refs.append(
                {
                    "error_id": error_id,
                    "entity_type": ref.entity_type,
                    "line_number": ref.line_number,
                    "entity_id": ref.entity_id,
                    "sequence_number": ref.sequence_number,
                }
            )

        if self._error_count % self._batch_size == 0:
            ref_rows = len(self._pending_refs)
            self._execute_batches()
            logger.debug(
                "Flushed error batch",
                table_prefix=self.table_prefix,
                error_count=self._error_count,
                ref_rows=ref_rows,
            )
        return error_id

    def finish(self) -> None:
        """Execute any remaining batches and commit the transaction.

        Must be called exactly once, at the end of the session.

        Raises:
            StorageError: If the final batch or the commit fails
        """
        self._execute_batches()
        try:
            self._connection.commit()
        except SQLAlchemyError as e:
            raise self._storage_error("commit", e) from e
        logger.info(
            "Committed errors",
            table_prefix=self.table_prefix,
            error_count=self._error_count,
        )

    def _execute_batches(self) -> None:
        """Send all staged rows, errors table first."""
        pending = (self._pending_errors, self._pending_refs, self._pending_info)
        try:
            for statement, rows in zip(self._inserts, pending, strict=True):
                if rows:
                    self._connection.execute(statement, rows)
                    rows.clear()
        except SQLAlchemyError as e:
            raise self._storage_error("flush", e) from e

    def _create_error_tables(self) -> None:
        try:
            # No checkfirst: an existing namespace must not be silently reused
            self._tables.metadata.create_all(self._connection, checkfirst=False)
            self._connection.commit()
        except SQLAlchemyError as e:
            raise self._storage_error("create_tables", e) from e
        logger.debug("Created error tables", table_prefix=self.table_prefix)

    def _reconnect_error_tables(self) -> None:
        try:
            max_error_id = self._connection.execute(
                select(func.max(self._tables.errors.c.error_id))
            ).scalar()
        except SQLAlchemyError as e:
            raise self._storage_error("reconnect_tables", e) from e

        # max() over an empty table is NULL
        self._error_count = 0 if max_error_id is None else max_error_id + 1
        logger.info(
            "Reconnected to errors table",
            table_prefix=self.table_prefix,
            max_error_id=max_error_id,
        )

    def _create_insert_statements(self) -> None:
        self._inserts: tuple[Insert, ...] = tuple(
            insert(table) for table in self._tables.in_write_order
        )

    def _storage_error(self, operation: str, cause: SQLAlchemyError) -> StorageError:
        logger.error(
            "Error storage failed",
            operation=operation,
            table_prefix=self.table_prefix,
            error=str(cause),
        )
        return StorageError(operation, str(cause))
