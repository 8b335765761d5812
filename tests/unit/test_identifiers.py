"""Unit tests for identifier validation."""

import pytest

from sqlite_helper import ArgumentError
from sqlite_helper.identifiers import validate_identifier


class TestValidateIdentifier:
    """Test the table/column name allow-list."""

    @pytest.mark.parametrize("name", ["Products", "Id", "_private", "sale_2024", "a"])
    def test_valid_names(self, name):
        assert validate_identifier(name) == name

    @pytest.mark.parametrize("name", [
        "2024_sales",
        "Sale Id",
        "Products; DROP TABLE Products",
        "name--",
        "\"quoted\"",
        "",
    ])
    def test_invalid_names(self, name):
        with pytest.raises(ArgumentError):
            validate_identifier(name)

    def test_non_string_rejected(self):
        with pytest.raises(ArgumentError):
            validate_identifier(None)

    def test_error_names_kind(self):
        with pytest.raises(ArgumentError) as exc_info:
            validate_identifier("bad name", 'column')
        assert "Invalid column name: 'bad name'" in str(exc_info.value)
        assert exc_info.value.argument == 'column'
        assert isinstance(exc_info.value, ValueError)
