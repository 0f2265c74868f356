"""
JSON Export

Versioned JSON / dictionary export of table metadata.
"""

from .exporter import JsonExporter, PRETTY_INDENT, SCHEMA_VERSION

__all__ = [
    'JsonExporter',
    'PRETTY_INDENT',
    'SCHEMA_VERSION',
]
