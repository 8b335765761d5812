"""Unit tests for engine configuration."""

from pathlib import Path

import pytest
from sqlalchemy.pool import NullPool

from sqlite_helper import ConfigurationError, StoreSettings
from sqlite_helper.config import EngineConfig


class TestEngineConfig:
    """Test path resolution and engine creation."""

    def test_resolve_path(self):
        assert EngineConfig.resolve_path('/data', 'store.db') == Path('/data') / 'store.db'

    @pytest.mark.parametrize("directory,file_name", [
        ('', 'store.db'),
        (None, 'store.db'),
        ('/data', ''),
        ('/data', None),
    ])
    def test_resolve_path_requires_both(self, directory, file_name):
        with pytest.raises(ConfigurationError, match="Database directory or name is not defined."):
            EngineConfig.resolve_path(directory, file_name)

    def test_connection_strings(self):
        db_path = Path('/data/store.db')
        assert EngineConfig.get_connection_string(db_path) == "sqlite:////data/store.db"
        assert EngineConfig.get_connection_string(db_path, 'sqlite+aiosqlite') == (
            "sqlite+aiosqlite:////data/store.db"
        )

    def test_engine_args_use_null_pool(self):
        args = EngineConfig.get_engine_args(StoreSettings(timeout=2.5, echo=True))
        assert args['poolclass'] is NullPool
        assert args['echo'] is True
        assert args['connect_args'] == {'timeout': 2.5}

    def test_get_engine(self, tmp_path):
        engine = EngineConfig.get_engine(tmp_path / "store.db", StoreSettings())
        try:
            assert engine.dialect.name == 'sqlite'
            assert isinstance(engine.pool, NullPool)
        finally:
            engine.dispose()

    def test_ensure_store_file(self, tmp_path):
        db_path = tmp_path / "nested" / "dir" / "store.db"
        assert EngineConfig.ensure_store_file(db_path) is True
        assert db_path.exists()
        assert EngineConfig.ensure_store_file(db_path) is False

    def test_ensure_store_file_failure(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        with pytest.raises(ConfigurationError, match="Cannot create database file"):
            EngineConfig.ensure_store_file(blocker / "store.db")
