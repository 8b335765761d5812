"""
Store handle shared by the synchronous and asynchronous helpers
"""

from pathlib import Path
from typing import Optional
import logging

from .config import EngineConfig
from .exceptions import ConfigurationError
from .logging_config import StoreLoggerAdapter
from .settings import StoreSettings

logger = logging.getLogger(__name__)


class StoreHandle:
    """
    Resolved store path and connection descriptor for one SQLite file.

    The handle is fixed at construction and never holds a live connection.
    """

    def __init__(self, store_directory: str, store_file_name: str,
                 base_resource_uri: Optional[str] = None,
                 settings: Optional[StoreSettings] = None):
        """
        Initialize store handle, creating the store file if it is missing

        Args:
            store_directory: Directory holding the store file
            store_file_name: Store file name
            base_resource_uri: Optional base URI for application resources
            settings: Store settings; defaults are used when omitted

        Raises:
            ConfigurationError: If directory or file name is empty
        """
        self._settings = settings or StoreSettings()
        self._db_file_path = EngineConfig.resolve_path(store_directory, store_file_name)
        self._connection_string = EngineConfig.get_connection_string(self._db_file_path)
        self._base_resource_uri = base_resource_uri

        self.logger = StoreLoggerAdapter(logger, {'db_path': str(self._db_file_path)})

        if self._settings.create_missing:
            EngineConfig.ensure_store_file(self._db_file_path)

    @classmethod
    def from_settings(cls, settings: StoreSettings, base_resource_uri: Optional[str] = None):
        """
        Create a helper from settings carrying directory and file name

        Args:
            settings: Store settings with ``directory`` and ``file_name`` set
            base_resource_uri: Optional base URI for application resources

        Raises:
            ConfigurationError: If the settings lack directory or file name
        """
        if not settings.directory or not settings.file_name:
            raise ConfigurationError("Settings must define both 'directory' and 'file_name'")
        return cls(settings.directory, settings.file_name, base_resource_uri, settings)

    @property
    def db_file_path(self) -> Path:
        """Full path of the store file"""
        return self._db_file_path

    @property
    def connection_string(self) -> str:
        """SQLAlchemy URL of the store"""
        return self._connection_string

    @property
    def base_resource_uri(self) -> Optional[str]:
        return self._base_resource_uri

    @property
    def settings(self) -> StoreSettings:
        return self._settings

    @property
    def validate(self) -> bool:
        return self._settings.validate_identifiers

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self._db_file_path)!r})"
