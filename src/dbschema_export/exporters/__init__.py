"""
Schema Exporters

Each exporter renders table metadata from a schema reader into one output
form: SQL DDL or JSON.

Usage:
    from dbschema_export.exporters import SqlDdlExporter, JsonExporter, get_dialect

    sql = SqlDdlExporter(reader, get_dialect('mysql')).generate(['users', 'orders'])
    json_text = JsonExporter(reader).generate(['users'], pretty_print=True)
"""

from .ddl import SqlDdlExporter, get_dialect
from .json import JsonExporter

__all__ = [
    'SqlDdlExporter',
    'JsonExporter',
    'get_dialect',
]
