"""Core infrastructure: storage, configuration, logging."""

from errorledger.core.config import (
    DatabaseSettings,
    ErrorLedgerSettings,
    ErrorStoreSettings,
    LoggingSettings,
    load_settings,
)
from errorledger.core.logging import (
    configure_logging,
    get_logger,
)
from errorledger.core.storage import (
    INSERT_BATCH_SIZE,
    ErrorDB,
    ErrorStore,
)

__all__ = [
    "INSERT_BATCH_SIZE",
    "DatabaseSettings",
    "ErrorDB",
    "ErrorLedgerSettings",
    "ErrorStore",
    "ErrorStoreSettings",
    "LoggingSettings",
    "configure_logging",
    "get_logger",
    "load_settings",
]
