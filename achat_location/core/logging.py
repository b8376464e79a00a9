"""Logging configuration for achat_location.

Provides structured logging using structlog with JSON output for production
and plain console output for development.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any

import structlog

from achat_location.core.settings import get_settings

# Log file location
LOG_DIR = Path(__file__).parent.parent.parent / "logs"
LOG_FILE = LOG_DIR / "achat_location.log"

# Module-level state for lazy initialization
_configured: bool = False
_file_logging: bool = False


def configure_logging(
    level: str | None = None,
    json_output: bool | None = None,
    log_file: bool = True,
) -> structlog.BoundLogger:
    """Configure structured logging for the application.

    Only an explicit call writes to ``logs/``; the lazy setup done by
    ``get_logger`` logs to the console only. An explicit call after the
    lazy setup reconfigures logging with the file handler.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to the
            ``ACHATLOC_LOG_LEVEL`` setting.
        json_output: If True, output JSON format. Defaults to the
            ``ACHATLOC_JSON_LOGS`` setting.
        log_file: Also write to a rotating file under ``logs/``.

    Returns:
        Configured logger instance.
    """
    global _configured, _file_logging

    if _configured and (_file_logging or not log_file):
        return structlog.get_logger()

    settings = get_settings()
    log_level = (level or settings.log_level).upper()
    numeric_level = getattr(logging, log_level, logging.INFO)
    if json_output is None:
        json_output = settings.json_logs

    handlers: list[logging.Handler] = [
        logging.StreamHandler(sys.stdout),
    ]

    if log_file:
        try:
            LOG_DIR.mkdir(exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                str(LOG_FILE), maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
            )
            handlers.append(file_handler)
            _file_logging = True
        except OSError:
            # Read-only install location: console only
            pass

    logging.basicConfig(
        format="%(message)s",
        level=numeric_level,
        handlers=handlers,
        force=True,
    )

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    _configured = True
    return structlog.get_logger()


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger instance, optionally bound to a specific name.

    This function lazily initializes logging on first call.

    Args:
        name: Optional logger name (usually module name).

    Returns:
        Bound logger instance.
    """
    if not _configured:
        configure_logging(log_file=False)

    logger = structlog.get_logger()
    if name:
        return logger.bind(logger_name=name)
    return logger
