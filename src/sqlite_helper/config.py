"""
Store configuration and engine management
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool
from pathlib import Path
from typing import Dict, Any, Optional
import logging

from .exceptions import ConfigurationError
from .settings import StoreSettings

logger = logging.getLogger(__name__)

SYNC_DRIVER = 'sqlite'
ASYNC_DRIVER = 'sqlite+aiosqlite'


class EngineConfig:
    """Configuration manager for store connections"""

    @staticmethod
    def resolve_path(directory: Optional[str], file_name: Optional[str]) -> Path:
        """
        Join store directory and file name

        Args:
            directory: Directory holding the store file
            file_name: Store file name

        Returns:
            Full store path

        Raises:
            ConfigurationError: If directory or file name is empty
        """
        if not directory or not file_name:
            raise ConfigurationError("Database directory or name is not defined.")
        return Path(directory) / file_name

    @staticmethod
    def get_connection_string(db_path: Path, driver: str = SYNC_DRIVER) -> str:
        """
        Build the SQLAlchemy URL for a store file

        Args:
            db_path: Store file path
            driver: Dialect+driver prefix

        Returns:
            Connection string such as ``sqlite:////data/store.db``
        """
        return f"{driver}:///{db_path}"

    @staticmethod
    def get_engine_args(settings: StoreSettings) -> Dict[str, Any]:
        """
        Engine arguments for per-call connections

        NullPool closes the DBAPI connection whenever a Connection is released,
        so no connection outlives the operation that opened it.
        """
        return {
            'poolclass': NullPool,
            'echo': settings.echo,
            'connect_args': {'timeout': settings.timeout},
        }

    @staticmethod
    def get_engine(db_path: Path, settings: StoreSettings) -> Engine:
        """
        Create SQLAlchemy engine for a store file

        Args:
            db_path: Store file path
            settings: Store settings

        Returns:
            SQLAlchemy Engine instance
        """
        conn_string = EngineConfig.get_connection_string(db_path)
        logger.debug(f"Creating sqlite engine: {conn_string}")
        return create_engine(conn_string, **EngineConfig.get_engine_args(settings))

    @staticmethod
    def get_async_engine(db_path: Path, settings: StoreSettings) -> AsyncEngine:
        """
        Create SQLAlchemy async engine (aiosqlite) for a store file

        Args:
            db_path: Store file path
            settings: Store settings

        Returns:
            SQLAlchemy AsyncEngine instance
        """
        conn_string = EngineConfig.get_connection_string(db_path, ASYNC_DRIVER)
        logger.debug(f"Creating async sqlite engine: {conn_string}")
        return create_async_engine(conn_string, **EngineConfig.get_engine_args(settings))

    @staticmethod
    def ensure_store_file(db_path: Path) -> bool:
        """
        Create an empty store file if none exists

        Args:
            db_path: Store file path

        Returns:
            True if the file was created, False if it already existed
        """
        if db_path.exists():
            return False
        try:
            db_path.parent.mkdir(parents=True, exist_ok=True)
            db_path.touch()
        except OSError as e:
            raise ConfigurationError(f"Cannot create database file {db_path}: {e}") from e
        logger.info(f"Created database file {db_path}")
        return True
