"""
Statement builders
"""

from .builders import (
    LAST_INSERT_ID_QUERY,
    BatchStatement,
    Statement,
    build_count,
    build_delete,
    build_insert,
    build_select_all,
    build_select_where,
    build_update,
)
from .sqlite_queries import SQLiteSpecificQueries

__all__ = [
    'LAST_INSERT_ID_QUERY',
    'BatchStatement',
    'Statement',
    'build_count',
    'build_delete',
    'build_insert',
    'build_select_all',
    'build_select_where',
    'build_update',
    'SQLiteSpecificQueries',
]
