"""
Database Schema Exporter

Exports table metadata (columns, indexes, foreign keys) read from a database
as SQL DDL for MySQL, PostgreSQL or SQLite, as versioned JSON, or as a
dictionary.

Usage:
    from dbschema_export import DbSchemaExporter, SqliteSchemaReader

    with SqliteSchemaReader('app.db') as reader:
        exporter = DbSchemaExporter(reader)
        sql = exporter.to_sql(['users', 'orders'])
        doc = exporter.to_json(['users'], pretty_print=True)
"""

from .errors import (
    SchemaExportError,
    ConfigurationError,
    UnsupportedDriverError,
    SchemaReadError,
    TableNotFoundError,
    ExportEncodingError,
)
from .exporter import DbSchemaExporter
from .schema import (
    Column,
    ForeignKey,
    Index,
    Table,
    SchemaReader,
    InMemorySchemaReader,
    SqliteSchemaReader,
)
from .type_mapping import LogicalType, map_native_type

__version__ = "0.1.0"

__all__ = [
    'DbSchemaExporter',
    'Column',
    'ForeignKey',
    'Index',
    'Table',
    'SchemaReader',
    'InMemorySchemaReader',
    'SqliteSchemaReader',
    'LogicalType',
    'map_native_type',
    'SchemaExportError',
    'ConfigurationError',
    'UnsupportedDriverError',
    'SchemaReadError',
    'TableNotFoundError',
    'ExportEncodingError',
]
