"""
Asynchronous data access helper using SQLAlchemy's asyncio extension (aiosqlite)

Same operations and semantics as SQLiteHelper, as coroutines.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Iterable, List, Mapping, Optional
import time

from sqlalchemy import text
from sqlalchemy.engine import CursorResult
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection

from .config import EngineConfig
from .exceptions import StoreError
from .helper import SQLiteHelper
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


class AsyncSQLiteHelper(StoreHandle):
    """
    Awaitable twin of SQLiteHelper.

    Each coroutine opens its own aiosqlite connection and closes it before
    returning, so callers may run operations concurrently with other work.
    """

    def __init__(self, store_directory: str, store_file_name: str,
                 base_resource_uri: Optional[str] = None,
                 settings: Optional[StoreSettings] = None):
        super().__init__(store_directory, store_file_name, base_resource_uri, settings)
        self.engine = EngineConfig.get_async_engine(self.db_file_path, self.settings)

    @asynccontextmanager
    async def _connect(self, operation: str, begin: bool = False) -> AsyncIterator[AsyncConnection]:
        """Open a connection for one operation; see SQLiteHelper._connect"""
        start_time = time.time()
        try:
            opener = self.engine.begin() if begin else self.engine.connect()
            async with opener as conn:
                self.logger.connection_event('opened', operation)
                yield conn
        except SQLAlchemyError as e:
            self.logger.error(f"{operation} failed: {e}")
            raise StoreError(f"{operation} failed: {e}", operation) from e
        finally:
            duration = time.time() - start_time
            self.logger.connection_event('closed', f"{operation} after {duration:.3f}s")

    async def _execute(self, conn: AsyncConnection, statement: Statement) -> CursorResult:
        start_time = time.time()
        result = await conn.execute(text(statement.sql), statement.params)
        self.logger.query(statement.sql, statement.params, time.time() - start_time)
        return result

    async def execute_statement(self, query: str, params: Optional[Mapping[str, Any]] = None) -> None:
        """Execute a non-query statement (DDL, maintenance, raw DML)"""
        require_text(query, 'query', 'Query')
        async with self._connect('execute', begin=True) as conn:
            await self._execute(conn, Statement(query, dict(params or {})))

    async def is_table_empty(self, table_name: str) -> bool:
        """Check whether a table has zero rows"""
        statement = build_count(table_name, self.validate)
        async with self._connect('count') as conn:
            count = (await self._execute(conn, statement)).scalar()
        return count == 0

    async def insert_if_empty(self, table_name: str, rows: Iterable[Row]) -> None:
        """Seed a table with rows only when it is empty"""
        if await self.is_table_empty(table_name):
            await self.insert_rows(table_name, rows)

    async def insert_rows(self, table_name: str, rows: Iterable[Row]) -> None:
        """Insert rows, one committed statement per row over one connection"""
        await self._insert(table_name, rows, return_id=False)

    async def insert_rows_returning_id(self, table_name: str, rows: Iterable[Row]) -> int:
        """Insert rows and return the rowid of the last one, -1 for no rows"""
        return await self._insert(table_name, rows, return_id=True)

    async def _insert(self, table_name: str, rows: Iterable[Row], return_id: bool) -> Optional[int]:
        require_table(table_name, self.validate)
        rows = list(rows or [])
        if not rows:
            return -1 if return_id else None

        batch = build_insert(table_name, rows, self.validate)
        async with self._connect('insert') as conn:
            for params in batch.param_sets:
                await self._execute(conn, Statement(batch.sql, params))
                await conn.commit()

            if return_id:
                result = await self._execute(conn, Statement(LAST_INSERT_ID_QUERY, {}))
                return int(result.scalar())
        return None

    async def read_all(self, table_name: str) -> ResultRows:
        """Read every row of a table ordered by the key column"""
        statement = build_select_all(table_name, self.settings.order_by_column, self.validate)
        async with self._connect('read') as conn:
            return SQLiteHelper._rows(await self._execute(conn, statement))

    async def read_where(self, table_name: str, conditions: Conditions) -> ResultRows:
        """Read rows matching every condition"""
        statement = build_select_where(table_name, conditions, self.validate)
        async with self._connect('read') as conn:
            return SQLiteHelper._rows(await self._execute(conn, statement))

    async def update_where(self, table_name: str, values: Mapping[str, Scalar],
                           conditions: Conditions) -> int:
        """Update rows matching every condition, returning the row count"""
        require_mapping(conditions, 'conditions', 'Conditions')
        statement = build_update(table_name, values, conditions, self.validate)
        async with self._connect('update', begin=True) as conn:
            return (await self._execute(conn, statement)).rowcount

    async def update_all(self, table_name: str, values: Mapping[str, Scalar]) -> int:
        """Update every row of a table, returning the row count"""
        statement = build_update(table_name, values, None, self.validate)
        async with self._connect('update', begin=True) as conn:
            return (await self._execute(conn, statement)).rowcount

    async def delete_where(self, table_name: str, conditions: Conditions) -> int:
        """Delete rows matching every condition, returning the row count"""
        statement = build_delete(table_name, conditions, self.validate)
        async with self._connect('delete', begin=True) as conn:
            return (await self._execute(conn, statement)).rowcount

    async def vacuum(self) -> None:
        await self.execute_statement(SQLiteSpecificQueries.vacuum().sql)
        self.logger.info("Ran VACUUM command")

    async def analyze(self, table_name: Optional[str] = None) -> None:
        await self.execute_statement(SQLiteSpecificQueries.analyze(table_name, self.validate).sql)
        self.logger.info(f"Ran ANALYZE on {table_name or 'all tables'}")

    async def pragma(self, pragma_name: str, value: Optional[str] = None) -> Any:
        statement = SQLiteSpecificQueries.pragma(pragma_name, value)
        async with self._connect('pragma', begin=value is not None) as conn:
            return SQLiteHelper._first_value(await self._execute(conn, statement))

    async def set_journal_mode(self, mode: str = "WAL") -> Any:
        statement = SQLiteSpecificQueries.journal_mode(mode)
        async with self._connect('pragma', begin=True) as conn:
            return SQLiteHelper._first_value(await self._execute(conn, statement))

    async def table_exists(self, table_name: str) -> bool:
        statement = SQLiteSpecificQueries.table_exists(table_name)
        async with self._connect('table_exists') as conn:
            return (await self._execute(conn, statement)).scalar() > 0

    async def get_table_names(self) -> List[str]:
        statement = SQLiteSpecificQueries.table_list()
        async with self._connect('table_list') as conn:
            return [row[0] for row in await self._execute(conn, statement)]

    async def close(self) -> None:
        """Dispose of the engine"""
        await self.engine.dispose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
