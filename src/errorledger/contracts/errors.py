"""Storage-layer exceptions.

Every database failure inside the error store surfaces as a StorageError.
Callers own the decision to abort the validation run.
"""


class StorageError(Exception):
    """Raised when the error store cannot read or write its tables.

    The underlying driver exception is chained as ``__cause__``.

    Attributes:
        operation: Store step that failed (connect, create_tables,
            reconnect_tables, flush, commit)
        message: Human-readable error description
    """

    def __init__(self, operation: str, message: str) -> None:
        self.operation = operation
        self.message = message
        super().__init__(f"Error storage failed during {operation}: {message}")
