"""
Statement builders for the CRUD operations

Every builder validates its arguments, splices table and column names into
the statement text and binds values under positional parameter names
(``value_<i>``, ``set_<i>``, ``where_<i>``). Nothing here touches the store.
"""

from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Sequence

from ..exceptions import ArgumentError
from ..identifiers import validate_identifier
from ..types import Conditions, Row

LAST_INSERT_ID_QUERY = "SELECT last_insert_rowid()"


class Statement(NamedTuple):
    """SQL text plus its bound parameters"""
    sql: str
    params: Dict[str, Any]


class BatchStatement(NamedTuple):
    """One SQL template executed once per parameter set"""
    sql: str
    param_sets: List[Dict[str, Any]]


def require_text(value: Optional[str], argument: str, label: str) -> str:
    """Raise ArgumentError if a required text argument is empty."""
    if not value or not isinstance(value, str) or not value.strip():
        raise ArgumentError(f"{label} cannot be null or empty.", argument)
    return value


def require_mapping(value: Optional[Mapping[str, Any]], argument: str, label: str) -> Mapping[str, Any]:
    """Raise ArgumentError if a required mapping is missing or empty."""
    if not value:
        raise ArgumentError(f"{label} cannot be null or empty.", argument)
    return value


def require_table(table_name: str, validate: bool = True) -> str:
    """Check a table name is present and, when validating, allowed."""
    require_text(table_name, 'table_name', 'Table name')
    if validate:
        validate_identifier(table_name, 'table')
    return table_name


def _columns(columns: Sequence[str], validate: bool) -> List[str]:
    columns = list(columns)
    for column in columns:
        require_text(column, 'column', 'Column name')
        if validate:
            validate_identifier(column, 'column')
    return columns


def _where_clause(conditions: Conditions, validate: bool) -> Statement:
    """Build ``c1 = :where_0 AND c2 = :where_1`` and its parameters."""
    columns = _columns(conditions.keys(), validate)
    parts = []
    params = {}
    for i, column in enumerate(columns):
        parts.append(f"{column} = :where_{i}")
        params[f"where_{i}"] = conditions[column]
    return Statement(" AND ".join(parts), params)


def build_count(table_name: str, validate: bool = True) -> Statement:
    """
    Build row-count statement

    Args:
        table_name: Name of table
        validate: Check identifiers against the allow-list

    Returns:
        ``SELECT COUNT(*) FROM <table>``
    """
    table = require_table(table_name, validate)
    return Statement(f"SELECT COUNT(*) FROM {table}", {})


def build_insert(table_name: str, rows: Sequence[Row], validate: bool = True) -> BatchStatement:
    """
    Build a batch INSERT from a sequence of row mappings

    The column list comes from the first row. Every other row must carry
    exactly the same columns; values are rebound per row by column name, so
    key order within a row does not matter.

    Args:
        table_name: Name of target table
        rows: Non-empty sequence of rows
        validate: Check identifiers against the allow-list

    Returns:
        BatchStatement with one parameter set per row

    Raises:
        ArgumentError: If the table name is empty, the first row has no
            columns, or a row's columns differ from the first row's
    """
    table = require_table(table_name, validate)
    if not rows:
        raise ArgumentError("Rows cannot be null or empty.", 'rows')

    columns = _columns(rows[0].keys(), validate)
    if not columns:
        raise ArgumentError("Rows must contain at least one column.", 'rows')

    expected = set(columns)
    param_sets = []
    for index, row in enumerate(rows):
        if set(row.keys()) != expected:
            raise ArgumentError(
                f"Row {index} columns {sorted(row.keys())} do not match "
                f"first row columns {sorted(expected)}",
                'rows'
            )
        param_sets.append({f"value_{i}": row[column] for i, column in enumerate(columns)})

    placeholders = ", ".join(f":value_{i}" for i in range(len(columns)))
    sql = f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})"
    return BatchStatement(sql, param_sets)


def build_select_all(table_name: str, order_by: str = "Id", validate: bool = True) -> Statement:
    """
    Build full table read ordered by the key column

    Args:
        table_name: Name of table
        order_by: Ordering column
        validate: Check identifiers against the allow-list

    Returns:
        ``SELECT * FROM <table> ORDER BY <order_by>``
    """
    table = require_table(table_name, validate)
    order_by = _columns([order_by], validate)[0]
    return Statement(f"SELECT * FROM {table} ORDER BY {order_by}", {})


def build_select_where(table_name: str, conditions: Conditions, validate: bool = True) -> Statement:
    """
    Build filtered read

    Args:
        table_name: Name of table
        conditions: Non-empty column -> value equality tests
        validate: Check identifiers against the allow-list

    Returns:
        ``SELECT * FROM <table> WHERE 1=1 AND c1 = :where_0 ...``
    """
    table = require_table(table_name, validate)
    require_mapping(conditions, 'conditions', 'Conditions')

    where = _where_clause(conditions, validate)
    sql = f"SELECT * FROM {table} WHERE 1=1 AND {where.sql}"
    return Statement(sql, where.params)


def build_update(table_name: str, values: Mapping[str, Any],
                 conditions: Optional[Conditions] = None, validate: bool = True) -> Statement:
    """
    Build UPDATE, filtered when conditions are given

    SET parameters and WHERE parameters are bound under separate names, so a
    column may appear in both.

    Args:
        table_name: Name of target table
        values: Non-empty column -> new value mapping
        conditions: Column -> value equality tests; None updates every row
        validate: Check identifiers against the allow-list

    Returns:
        ``UPDATE <table> SET c1 = :set_0, ... [WHERE k1 = :where_0 AND ...]``
    """
    table = require_table(table_name, validate)
    require_mapping(values, 'values', 'Updated values')

    columns = _columns(values.keys(), validate)
    set_clause = ", ".join(f"{column} = :set_{i}" for i, column in enumerate(columns))
    params = {f"set_{i}": values[column] for i, column in enumerate(columns)}
    sql = f"UPDATE {table} SET {set_clause}"

    if conditions is not None:
        require_mapping(conditions, 'conditions', 'Conditions')
        where = _where_clause(conditions, validate)
        sql += f" WHERE {where.sql}"
        params.update(where.params)

    return Statement(sql, params)


def build_delete(table_name: str, conditions: Conditions, validate: bool = True) -> Statement:
    """
    Build filtered DELETE

    Args:
        table_name: Name of target table
        conditions: Non-empty column -> value equality tests
        validate: Check identifiers against the allow-list

    Returns:
        ``DELETE FROM <table> WHERE k1 = :where_0 AND ...``
    """
    table = require_table(table_name, validate)
    require_mapping(conditions, 'conditions', 'Conditions')

    where = _where_clause(conditions, validate)
    return Statement(f"DELETE FROM {table} WHERE {where.sql}", where.params)
