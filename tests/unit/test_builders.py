"""Unit tests for statement builders."""

import pytest

from sqlite_helper import ArgumentError
from sqlite_helper.queries import (
    SQLiteSpecificQueries,
    build_count,
    build_delete,
    build_insert,
    build_select_all,
    build_select_where,
    build_update,
)


class TestInsertBuilder:
    """Test batch INSERT construction."""

    def test_columns_from_first_row(self):
        batch = build_insert('Products', [
            {'Name': 'Potato', 'Type': 'Vegetable'},
            {'Type': 'Fruit', 'Name': 'Tomato'},
        ])
        assert batch.sql == "INSERT INTO Products (Name, Type) VALUES (:value_0, :value_1)"
        assert batch.param_sets == [
            {'value_0': 'Potato', 'value_1': 'Vegetable'},
            {'value_0': 'Tomato', 'value_1': 'Fruit'},
        ]

    def test_mismatched_rows_rejected(self):
        with pytest.raises(ArgumentError, match="Row 1 columns"):
            build_insert('Products', [{'Name': 'Potato'}, {'Type': 'Fruit'}])

        with pytest.raises(ArgumentError):
            build_insert('Products', [{'Name': 'Potato'}, {'Name': 'Tomato', 'Type': 'Fruit'}])

    def test_empty_arguments(self):
        with pytest.raises(ArgumentError, match="Table name cannot be null or empty"):
            build_insert('', [{'Name': 'Potato'}])
        with pytest.raises(ArgumentError, match="Rows cannot be null or empty"):
            build_insert('Products', [])
        with pytest.raises(ArgumentError, match="at least one column"):
            build_insert('Products', [{}])


class TestReadBuilders:
    """Test count and SELECT construction."""

    def test_count(self):
        assert build_count('Products').sql == "SELECT COUNT(*) FROM Products"

    def test_select_all_orders_by_key(self):
        assert build_select_all('Products').sql == "SELECT * FROM Products ORDER BY Id"
        assert build_select_all('Products', 'Name').sql == "SELECT * FROM Products ORDER BY Name"

    def test_select_where(self):
        statement = build_select_where('Products', {'Name': 'Potato', 'Type': 'Vegetable'})
        assert statement.sql == (
            "SELECT * FROM Products WHERE 1=1 AND Name = :where_0 AND Type = :where_1"
        )
        assert statement.params == {'where_0': 'Potato', 'where_1': 'Vegetable'}

    def test_select_where_requires_conditions(self):
        with pytest.raises(ArgumentError, match="Conditions cannot be null or empty"):
            build_select_where('Products', {})
        with pytest.raises(ArgumentError):
            build_select_where('Products', None)


class TestWriteBuilders:
    """Test UPDATE and DELETE construction."""

    def test_update_with_same_column_in_set_and_where(self):
        statement = build_update('Products', {'Name': 'Sweet Potato'}, {'Name': 'Potato'})
        assert statement.sql == "UPDATE Products SET Name = :set_0 WHERE Name = :where_0"
        assert statement.params == {'set_0': 'Sweet Potato', 'where_0': 'Potato'}

    def test_update_all_has_no_where(self):
        statement = build_update('Products', {'Type': 'Plant', 'Name': None})
        assert statement.sql == "UPDATE Products SET Type = :set_0, Name = :set_1"
        assert statement.params == {'set_0': 'Plant', 'set_1': None}

    def test_update_requires_values(self):
        with pytest.raises(ArgumentError, match="Updated values cannot be null or empty"):
            build_update('Products', {}, {'Id': 1})

    def test_update_rejects_empty_conditions(self):
        with pytest.raises(ArgumentError):
            build_update('Products', {'Name': 'X'}, {})

    def test_delete(self):
        statement = build_delete('Products', {'Id': 2})
        assert statement.sql == "DELETE FROM Products WHERE Id = :where_0"
        assert statement.params == {'where_0': 2}

        with pytest.raises(ArgumentError):
            build_delete('Products', {})

    def test_invalid_column_rejected(self):
        with pytest.raises(ArgumentError, match="Invalid column name"):
            build_update('Products', {'Name; DROP TABLE Products': 'x'})

    def test_validation_can_be_disabled(self):
        statement = build_delete('"My Table"', {'"Sale Id"': 1}, validate=False)
        assert statement.sql == 'DELETE FROM "My Table" WHERE "Sale Id" = :where_0'


class TestSQLiteSpecificQueries:
    """Test maintenance statements."""

    def test_vacuum_and_analyze(self):
        assert SQLiteSpecificQueries.vacuum().sql == "VACUUM"
        assert SQLiteSpecificQueries.analyze().sql == "ANALYZE"
        assert SQLiteSpecificQueries.analyze('Products').sql == "ANALYZE Products"

    def test_pragma(self):
        assert SQLiteSpecificQueries.pragma('user_version').sql == "PRAGMA user_version"
        assert SQLiteSpecificQueries.pragma('cache_size', -2000).sql == "PRAGMA cache_size = -2000"

        with pytest.raises(ArgumentError, match="Invalid pragma value"):
            SQLiteSpecificQueries.pragma('user_version', '1; DROP TABLE Products')
        with pytest.raises(ArgumentError):
            SQLiteSpecificQueries.pragma('user version')

    def test_journal_mode(self):
        assert SQLiteSpecificQueries.journal_mode('wal').sql == "PRAGMA journal_mode = WAL"
        with pytest.raises(ArgumentError, match="Unsupported journal mode"):
            SQLiteSpecificQueries.journal_mode('fast')

    def test_table_exists_binds_name(self):
        statement = SQLiteSpecificQueries.table_exists('Products')
        assert ':name' in statement.sql
        assert statement.params == {'name': 'Products'}
