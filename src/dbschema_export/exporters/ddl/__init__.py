"""
SQL DDL Export

Generates transactional CREATE TABLE scripts for MySQL, PostgreSQL and SQLite.
"""

from .generator import SqlDdlExporter
from .dialects import (
    BaseDialect,
    MySqlDialect,
    PostgresDialect,
    SqliteDialect,
    DIALECTS,
    SUPPORTED_DRIVERS,
    get_dialect,
)

__all__ = [
    'SqlDdlExporter',
    'BaseDialect',
    'MySqlDialect',
    'PostgresDialect',
    'SqliteDialect',
    'DIALECTS',
    'SUPPORTED_DRIVERS',
    'get_dialect',
]
