"""
Store settings validation using Pydantic

Settings can be built directly, loaded from a YAML file (either flat or under
a top-level ``store:`` section) and overridden from the environment.
"""

import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigurationError

ENV_PREFIX = "SQLITE_HELPER_"

# Environment variable suffix -> settings field
ENV_OVERRIDES = {
    'DIRECTORY': 'directory',
    'FILE_NAME': 'file_name',
    'LOG_LEVEL': 'log_level',
    'LOG_FILE': 'log_file',
}


class LogLevel(str, Enum):
    """Valid logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class StoreSettings(BaseModel):
    """Settings for a single SQLite store file."""
    directory: Optional[str] = Field(None, description="Directory holding the store file")
    file_name: Optional[str] = Field(None, description="Store file name")
    order_by_column: str = Field("Id", description="Ordering key used by full table reads")
    validate_identifiers: bool = Field(True, description="Check table/column names against the allow-list")
    create_missing: bool = Field(True, description="Create the store file if it does not exist")
    timeout: float = Field(5.0, ge=0.0, le=600.0, description="SQLite busy timeout in seconds")
    echo: bool = Field(False, description="Echo SQL statements through SQLAlchemy")
    log_level: LogLevel = LogLevel.INFO
    log_file: Optional[str] = Field(None, description="Optional log file path")

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator('order_by_column')
    @classmethod
    def validate_order_by_column(cls, v):
        """Ordering column must not be blank."""
        if not v or not v.strip():
            raise ValueError('order_by_column cannot be empty')
        return v.strip()


def _read_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a YAML settings file, returning the store section."""
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Settings file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in settings file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file {path} must contain a mapping")

    section = data.get('store', data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"'store' section in {path} must be a mapping")
    return dict(section)


def _env_overrides() -> Dict[str, Any]:
    """Collect overrides from SQLITE_HELPER_* environment variables."""
    overrides = {}
    for suffix, field in ENV_OVERRIDES.items():
        value = os.environ.get(ENV_PREFIX + suffix)
        if value:
            overrides[field] = value
    return overrides


def load_settings(path: Optional[Union[str, Path]] = None,
                  overrides: Optional[Dict[str, Any]] = None) -> StoreSettings:
    """
    Load and validate store settings

    Precedence, lowest first: YAML file, environment, explicit overrides.

    Args:
        path: Optional YAML settings file
        overrides: Optional explicit field overrides

    Returns:
        Validated StoreSettings

    Raises:
        ConfigurationError: If the file cannot be read or validation fails
    """
    data: Dict[str, Any] = {}
    if path is not None:
        data.update(_read_yaml(path))
    data.update(_env_overrides())
    if overrides:
        data.update(overrides)

    try:
        return StoreSettings(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid store settings: {e}") from e
