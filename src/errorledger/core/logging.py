# src/errorledger/core/logging.py
"""Structured logging configuration for errorledger.

Uses structlog for structured logging. Both structlog and stdlib logging
emit the same output (JSON or console): stdlib records are routed through
structlog's processor chain via ProcessorFormatter.

Configured from the ``logging`` section of ErrorLedgerSettings.
"""

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.stdlib import ProcessorFormatter

from errorledger.core.config import LoggingSettings

# SQLAlchemy echoes every statement and pool checkout at DEBUG; with batched
# inserts of 500 errors that drowns the store's own flush events.
_SQLALCHEMY_LOGGERS: tuple[str, ...] = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.pool",
)


def _remove_internal_fields(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Remove ProcessorFormatter bookkeeping fields from output."""
    del event_dict["_record"]
    del event_dict["_from_structlog"]
    return event_dict


def _renderers(json_output: bool) -> list[Any]:
    if json_output:
        return [
            _remove_internal_fields,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [_remove_internal_fields, structlog.dev.ConsoleRenderer(colors=False)]


def configure_logging(
    settings: LoggingSettings | None = None,
    *,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog and stdlib logging.

    Args:
        settings: Level and output format. Defaults to LoggingSettings().
        stream: Where log lines go. Defaults to sys.stdout.
    """
    settings = settings or LoggingSettings()
    log_level = getattr(logging, settings.level)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]

    structlog.configure(
        processors=[*shared_processors, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfiguration in tests needs fresh loggers
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(
        ProcessorFormatter(
            processors=_renderers(settings.json_output),
            foreign_pre_chain=shared_processors,
        )
    )

    root = logging.getLogger()
    root.handlers = []
    root.addHandler(handler)
    root.setLevel(log_level)

    # SQL echo is controlled by DatabaseSettings.echo, not the log level
    sqlalchemy_level = max(log_level, logging.WARNING)
    for logger_name in _SQLALCHEMY_LOGGERS:
        logging.getLogger(logger_name).setLevel(sqlalchemy_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a bound logger for a module.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Bound structlog logger.
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
