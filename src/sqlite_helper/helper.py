"""
Synchronous data access helper using SQLAlchemy Core
"""

from contextlib import contextmanager
from typing import Any, Iterable, Iterator, List, Mapping, Optional
import time

from sqlalchemy import text
from sqlalchemy.engine import Connection, CursorResult
from sqlalchemy.exc import SQLAlchemyError

from .config import EngineConfig
from .exceptions import StoreError
from .queries import (
    LAST_INSERT_ID_QUERY,
    SQLiteSpecificQueries,
    Statement,
    build_count,
    build_delete,
    build_insert,
    build_select_all,
    build_select_where,
    build_update,
)
from .queries.builders import require_mapping, require_table, require_text
from .settings import StoreSettings
from .store import StoreHandle
from .types import Conditions, ResultRows, Row, Scalar


class SQLiteHelper(StoreHandle):
    """
    Dictionary-driven CRUD helper for a single SQLite file.

    Every operation opens its own connection, runs one statement (one per row
    for batch inserts) and closes the connection before returning.
    """

    def __init__(self, store_directory: str, store_file_name: str,
                 base_resource_uri: Optional[str] = None,
                 settings: Optional[StoreSettings] = None):
        super().__init__(store_directory, store_file_name, base_resource_uri, settings)
        self.engine = EngineConfig.get_engine(self.db_file_path, self.settings)

    @contextmanager
    def _connect(self, operation: str, begin: bool = False) -> Iterator[Connection]:
        """
        Open a connection for one operation

        Driver failures are logged and re-raised as StoreError chained to the
        original exception. With ``begin`` the work is committed on success
        and rolled back on failure.

        Args:
            operation: Operation name used in log and error messages
            begin: Wrap the connection in a transaction
        """
        start_time = time.time()
        try:
            opener = self.engine.begin() if begin else self.engine.connect()
            with opener as conn:
                self.logger.connection_event('opened', operation)
                yield conn
        except SQLAlchemyError as e:
            self.logger.error(f"{operation} failed: {e}")
            raise StoreError(f"{operation} failed: {e}", operation) from e
        finally:
            duration = time.time() - start_time
            self.logger.connection_event('closed', f"{operation} after {duration:.3f}s")

    def _execute(self, conn: Connection, statement: Statement) -> CursorResult:
        start_time = time.time()
        result = conn.execute(text(statement.sql), statement.params)
        self.logger.query(statement.sql, statement.params, time.time() - start_time)
        return result

    @staticmethod
    def _rows(result: CursorResult) -> ResultRows:
        return [dict(row._mapping) for row in result]

    @staticmethod
    def _first_value(result: CursorResult) -> Any:
        if not result.returns_rows:
            return None
        row = result.fetchone()
        return row[0] if row else None

    def execute_statement(self, query: str, params: Optional[Mapping[str, Any]] = None) -> None:
        """
        Execute a non-query statement (DDL, maintenance, raw DML)

        Args:
            query: SQL statement text
            params: Optional named parameters
        """
        require_text(query, 'query', 'Query')
        with self._connect('execute', begin=True) as conn:
            self._execute(conn, Statement(query, dict(params or {})))

    def is_table_empty(self, table_name: str) -> bool:
        """
        Check whether a table has zero rows

        Args:
            table_name: Name of table

        Returns:
            True if the table is empty
        """
        statement = build_count(table_name, self.validate)
        with self._connect('count') as conn:
            count = self._execute(conn, statement).scalar()
        return count == 0

    def insert_if_empty(self, table_name: str, rows: Iterable[Row]) -> None:
        """
        Seed a table with rows only when it is empty

        Args:
            table_name: Name of target table
            rows: Rows to insert
        """
        if self.is_table_empty(table_name):
            self.insert_rows(table_name, rows)

    def insert_rows(self, table_name: str, rows: Iterable[Row]) -> None:
        """
        Insert rows into a table

        The column list comes from the first row. Rows are written one
        statement at a time over a single connection, each committed as it
        goes, so a failure part way leaves the earlier rows in place.

        Args:
            table_name: Name of target table
            rows: Rows to insert; an empty batch is a no-op
        """
        self._insert(table_name, rows, return_id=False)

    def insert_rows_returning_id(self, table_name: str, rows: Iterable[Row]) -> int:
        """
        Insert rows and return the rowid of the last one

        Args:
            table_name: Name of target table
            rows: Rows to insert

        Returns:
            Last inserted rowid, or -1 if ``rows`` was empty
        """
        return self._insert(table_name, rows, return_id=True)

    def _insert(self, table_name: str, rows: Iterable[Row], return_id: bool) -> Optional[int]:
        require_table(table_name, self.validate)
        rows = list(rows or [])
        if not rows:
            return -1 if return_id else None

        batch = build_insert(table_name, rows, self.validate)
        with self._connect('insert') as conn:
            for params in batch.param_sets:
                self._execute(conn, Statement(batch.sql, params))
                conn.commit()

            if return_id:
                last_id = self._execute(conn, Statement(LAST_INSERT_ID_QUERY, {})).scalar()
                return int(last_id)
        return None

    def read_all(self, table_name: str) -> ResultRows:
        """
        Read every row of a table ordered by the key column

        Args:
            table_name: Name of table

        Returns:
            List of row dictionaries in result-set column order
        """
        statement = build_select_all(table_name, self.settings.order_by_column, self.validate)
        with self._connect('read') as conn:
            return self._rows(self._execute(conn, statement))

    def read_where(self, table_name: str, conditions: Conditions) -> ResultRows:
        """
        Read rows matching every condition

        Args:
            table_name: Name of table
            conditions: Column -> value equality tests

        Returns:
            List of row dictionaries, in no guaranteed order
        """
        statement = build_select_where(table_name, conditions, self.validate)
        with self._connect('read') as conn:
            return self._rows(self._execute(conn, statement))

    def update_where(self, table_name: str, values: Mapping[str, Scalar],
                     conditions: Conditions) -> int:
        """
        Update rows matching every condition

        Args:
            table_name: Name of target table
            values: Column -> new value mapping
            conditions: Column -> value equality tests

        Returns:
            Number of rows updated
        """
        require_mapping(conditions, 'conditions', 'Conditions')
        statement = build_update(table_name, values, conditions, self.validate)
        with self._connect('update', begin=True) as conn:
            return self._execute(conn, statement).rowcount

    def update_all(self, table_name: str, values: Mapping[str, Scalar]) -> int:
        """
        Update every row of a table

        Args:
            table_name: Name of target table
            values: Column -> new value mapping

        Returns:
            Number of rows updated
        """
        statement = build_update(table_name, values, None, self.validate)
        with self._connect('update', begin=True) as conn:
            return self._execute(conn, statement).rowcount

    def delete_where(self, table_name: str, conditions: Conditions) -> int:
        """
        Delete rows matching every condition

        Args:
            table_name: Name of target table
            conditions: Column -> value equality tests

        Returns:
            Number of rows deleted
        """
        statement = build_delete(table_name, conditions, self.validate)
        with self._connect('delete', begin=True) as conn:
            return self._execute(conn, statement).rowcount

    def vacuum(self) -> None:
        """Run VACUUM on the store"""
        statement = SQLiteSpecificQueries.vacuum()
        self.execute_statement(statement.sql)
        self.logger.info("Ran VACUUM command")

    def analyze(self, table_name: Optional[str] = None) -> None:
        """Run ANALYZE on one table or the whole store"""
        statement = SQLiteSpecificQueries.analyze(table_name, self.validate)
        self.execute_statement(statement.sql)
        self.logger.info(f"Ran ANALYZE on {table_name or 'all tables'}")

    def pragma(self, pragma_name: str, value: Optional[str] = None) -> Any:
        """
        Read or set a PRAGMA

        Args:
            pragma_name: Name of pragma
            value: Optional value to set

        Returns:
            Current pragma value when reading (or the value the store reports
            after setting), None if the pragma returns no row
        """
        statement = SQLiteSpecificQueries.pragma(pragma_name, value)
        with self._connect('pragma', begin=value is not None) as conn:
            return self._first_value(self._execute(conn, statement))

    def set_journal_mode(self, mode: str = "WAL") -> Any:
        """Set journal mode, returning the mode the store reports"""
        statement = SQLiteSpecificQueries.journal_mode(mode)
        with self._connect('pragma', begin=True) as conn:
            return self._first_value(self._execute(conn, statement))

    def table_exists(self, table_name: str) -> bool:
        """Check if a table exists in the store"""
        statement = SQLiteSpecificQueries.table_exists(table_name)
        with self._connect('table_exists') as conn:
            return self._execute(conn, statement).scalar() > 0

    def get_table_names(self) -> List[str]:
        """Names of all user tables, sorted"""
        statement = SQLiteSpecificQueries.table_list()
        with self._connect('table_list') as conn:
            return [row[0] for row in self._execute(conn, statement)]

    def close(self) -> None:
        """Dispose of the engine"""
        self.engine.dispose()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
