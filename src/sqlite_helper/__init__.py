"""
SQLite Helper

Dictionary-driven create/read/update/delete operations against a local SQLite
file, built on SQLAlchemy Core.

Components:
- helper: SQLiteHelper, the synchronous facade
- aio: AsyncSQLiteHelper, the awaitable facade (aiosqlite)
- queries: statement builders and SQLite maintenance statements
- settings: pydantic settings, YAML loading and environment overrides
- logging_config: opt-in logging setup for the sqlite_helper logger
"""

__version__ = "1.0.0"

from .aio import AsyncSQLiteHelper
from .exceptions import ArgumentError, ConfigurationError, HelperError, StoreError
from .helper import SQLiteHelper
from .logging_config import setup_store_logging
from .settings import LogLevel, StoreSettings, load_settings
from .store import StoreHandle
from .types import Conditions, Row, Scalar

__all__ = [
    'AsyncSQLiteHelper',
    'SQLiteHelper',
    'StoreHandle',
    'StoreSettings',
    'LogLevel',
    'load_settings',
    'setup_store_logging',
    'HelperError',
    'ConfigurationError',
    'ArgumentError',
    'StoreError',
    'Row',
    'Scalar',
    'Conditions',
]
