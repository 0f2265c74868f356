"""
Schema Model and Readers

Table metadata model plus the readers that produce it.
"""

from .models import Column, ForeignKey, Index, Table
from .reader import InMemorySchemaReader, SchemaReader
from .sqlite_reader import SqliteSchemaReader

__all__ = [
    'Column',
    'ForeignKey',
    'Index',
    'Table',
    'SchemaReader',
    'InMemorySchemaReader',
    'SqliteSchemaReader',
]
