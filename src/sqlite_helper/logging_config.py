"""
Store logging configuration.

The package logs through the ``sqlite_helper`` logger hierarchy and never
configures handlers on its own. Applications call ``setup_store_logging`` to
get console (and optionally file) output at the level set in StoreSettings.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .settings import StoreSettings

LOGGER_NAME = 'sqlite_helper'
HANDLER_MARKER = '_sqlite_helper_handler'


class SafeFormatter(logging.Formatter):
    """Formatter that provides a default for the database context field."""

    def format(self, record):
        if not hasattr(record, 'database_context'):
            record.database_context = 'db'
        return super().format(record)


def setup_store_logging(settings: Optional[StoreSettings] = None) -> logging.Logger:
    """
    Setup store logging based on settings.

    Calling it again replaces the handlers it installed before.

    Args:
        settings: Store settings; defaults are used when omitted

    Returns:
        Configured package logger
    """
    settings = settings or StoreSettings()
    log_level = settings.log_level.value

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, log_level))

    for handler in logger.handlers[:]:
        if getattr(handler, HANDLER_MARKER, False):
            logger.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s - DB - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    ))
    setattr(console_handler, HANDLER_MARKER, True)
    logger.addHandler(console_handler)

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setFormatter(SafeFormatter(
            '%(asctime)s.%(msecs)03d - [%(database_context)s] - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        setattr(file_handler, HANDLER_MARKER, True)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def log_query(logger: Union[logging.Logger, logging.LoggerAdapter], query: str, params: Optional[Dict[str, Any]] = None,
              duration: Optional[float] = None) -> None:
    """
    Log an executed statement at DEBUG level.

    Args:
        logger: Logger instance
        query: SQL statement text
        params: Bound parameters
        duration: Execution time in seconds
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return
    message = f"Executed: {query}"
    if params:
        message += f" | params={params}"
    if duration is not None:
        message += f" | {duration:.3f}s"
    logger.debug(message)


class StoreLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that tags records with the store file name.
    """

    def __init__(self, logger: logging.Logger, extra: Optional[Dict[str, Any]] = None):
        super().__init__(logger, extra or {})

    def process(self, msg, kwargs):
        db_path = self.extra.get('db_path')
        db_name = Path(db_path).stem if db_path else 'unknown'

        kwargs.setdefault('extra', {})
        kwargs['extra']['database_context'] = db_name
        return msg, kwargs

    def query(self, query: str, params: Optional[Dict[str, Any]] = None,
              duration: Optional[float] = None) -> None:
        """Log an executed statement."""
        log_query(self, query, params, duration)

    def connection_event(self, event: str, details: Optional[str] = None) -> None:
        """Log a connection open/close event."""
        message = f"Connection {event}"
        if details:
            message += f": {details}"
        self.debug(message)

