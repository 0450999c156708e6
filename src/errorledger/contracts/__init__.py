"""Shared contracts between validators and the error store.

Import pattern:
    from errorledger.contracts import ErrorRecord, EntityReference, StorageError
"""

from errorledger.contracts.errors import StorageError
from errorledger.contracts.records import (
    LINE_NUMBER_UNKNOWN,
    EntityReference,
    ErrorRecord,
    InfoEntry,
)

__all__ = [
    "LINE_NUMBER_UNKNOWN",
    "EntityReference",
    "ErrorRecord",
    "InfoEntry",
    "StorageError",
]
