"""
Shared fixtures: a temporary store with the Products table
"""

import pytest

from sqlite_helper import SQLiteHelper

PRODUCTS_SCHEMA = """
CREATE TABLE Products (
    Id INTEGER PRIMARY KEY AUTOINCREMENT,
    Name TEXT NOT NULL,
    Type TEXT
)
"""

PRODUCT_ROWS = [
    {'Name': 'Potato', 'Type': 'Vegetable'},
    {'Name': 'Tomato', 'Type': 'Fruit'},
]


@pytest.fixture
def store_dir(tmp_path):
    """Directory for a throwaway store file"""
    return str(tmp_path / "data")


@pytest.fixture
def helper(store_dir):
    """Helper over a fresh store with an empty Products table"""
    helper = SQLiteHelper(store_dir, "products.db")
    helper.execute_statement(PRODUCTS_SCHEMA)
    yield helper
    helper.close()


@pytest.fixture
def products(helper):
    """Helper whose Products table holds Potato (Id 1) and Tomato (Id 2)"""
    helper.insert_rows('Products', PRODUCT_ROWS)
    return helper
