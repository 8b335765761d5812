"""
SQLite-specific maintenance statements
"""

import re
from typing import Optional

from ..exceptions import ArgumentError
from ..identifiers import validate_identifier
from .builders import Statement, require_text

PRAGMA_VALUE_PATTERN = re.compile(r'^-?[A-Za-z0-9_]+$')

JOURNAL_MODES = {'DELETE', 'TRUNCATE', 'PERSIST', 'MEMORY', 'WAL', 'OFF'}


class SQLiteSpecificQueries:
    """SQLite-specific statement text for maintenance operations"""

    @staticmethod
    def vacuum() -> Statement:
        """VACUUM statement; must run outside a transaction"""
        return Statement("VACUUM", {})

    @staticmethod
    def analyze(table_name: Optional[str] = None, validate: bool = True) -> Statement:
        """
        ANALYZE statement

        Args:
            table_name: Optional specific table name
            validate: Check identifiers against the allow-list
        """
        if table_name:
            if validate:
                validate_identifier(table_name, 'table')
            return Statement(f"ANALYZE {table_name}", {})
        return Statement("ANALYZE", {})

    @staticmethod
    def pragma(pragma_name: str, value: Optional[str] = None) -> Statement:
        """
        PRAGMA statement, read or set

        Pragma names and values cannot be bound, so both are checked before
        being spliced into the text.

        Args:
            pragma_name: Name of pragma
            value: Optional value to set

        Returns:
            ``PRAGMA <name>`` or ``PRAGMA <name> = <value>``
        """
        require_text(pragma_name, 'pragma_name', 'Pragma name')
        validate_identifier(pragma_name, 'pragma')
        if value is None:
            return Statement(f"PRAGMA {pragma_name}", {})

        value = str(value)
        if not PRAGMA_VALUE_PATTERN.match(value):
            raise ArgumentError(f"Invalid pragma value: {value!r}", 'value')
        return Statement(f"PRAGMA {pragma_name} = {value}", {})

    @staticmethod
    def journal_mode(mode: str = "WAL") -> Statement:
        """
        Set journal mode

        Args:
            mode: Journal mode (DELETE, TRUNCATE, PERSIST, MEMORY, WAL, OFF)
        """
        mode = require_text(mode, 'mode', 'Journal mode').upper()
        if mode not in JOURNAL_MODES:
            raise ArgumentError(f"Unsupported journal mode: {mode}", 'mode')
        return SQLiteSpecificQueries.pragma("journal_mode", mode)

    @staticmethod
    def table_exists(table_name: str) -> Statement:
        """Count of tables with the given name (0 or 1); the name is bound"""
        require_text(table_name, 'table_name', 'Table name')
        return Statement(
            "SELECT COUNT(*) FROM sqlite_master WHERE type = 'table' AND name = :name",
            {'name': table_name}
        )

    @staticmethod
    def table_list() -> Statement:
        """User tables in name order, excluding SQLite internal tables"""
        return Statement(
            "SELECT name FROM sqlite_master "
            "WHERE type = 'table' AND name NOT LIKE 'sqlite_%' ORDER BY name",
            {}
        )
