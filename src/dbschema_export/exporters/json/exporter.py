"""
JSON Exporter

Exports table metadata as a versioned JSON document (or the equivalent
dictionary), with each column enriched by its logical type.
"""

import json
import logging
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, Optional

from ...errors import ExportEncodingError
from ...schema.models import Column
from ...schema.reader import SchemaReader
from ...type_mapping import LogicalType, parse_enum_values, resolve_native_type

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
PRETTY_INDENT = 4


class JsonExporter:
    """
    Exports database schema metadata as JSON.

    The document holds a version marker, a generation timestamp and, per
    requested table, its columns, indexes and foreign keys.
    """

    def __init__(
        self,
        schema: SchemaReader,
        clock: Optional[Callable[[], datetime]] = None,
        indent: int = PRETTY_INDENT,
    ):
        """
        Initialize the exporter.

        Args:
            schema: Reader providing table metadata
            clock: Returns the generation time (default: datetime.now)
            indent: Indentation width for pretty-printed output
        """
        self.schema = schema
        self._clock = clock or datetime.now
        self.indent = indent

    def generate(self, tables: Iterable[str], pretty_print: bool = False) -> str:
        """
        Generate the JSON document.

        Args:
            tables: Table names to export
            pretty_print: Indent the output instead of the compact form

        Returns:
            JSON string

        Raises:
            ExportEncodingError: If the metadata is not JSON-serializable
                (including NaN and infinite numbers)
        """
        data = self.generate_array(tables)

        try:
            if pretty_print:
                return json.dumps(data, indent=self.indent, ensure_ascii=False, allow_nan=False)
            return json.dumps(data, separators=(',', ':'), ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise ExportEncodingError(f"Failed to encode schema data as JSON: {e}") from e

    def generate_array(self, tables: Iterable[str]) -> Dict[str, Any]:
        """
        Generate the document as a dictionary.

        Args:
            tables: Table names to export

        Returns:
            Dict with 'version', 'generated' and 'tables' (in request order)
        """
        return {
            'version': SCHEMA_VERSION,
            'generated': self._clock().strftime(TIMESTAMP_FORMAT),
            'tables': self._collect_table_metadata(tables),
        }

    def _collect_table_metadata(self, tables: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        metadata = {}

        for table in tables:
            columns = [self._column_entry(c) for c in self.schema.columns(table)]
            metadata[table] = {
                'columns': columns,
                'indexes': [i.to_dict() for i in self.schema.indexes(table)],
                'foreignKeys': [fk.to_dict() for fk in self.schema.foreign_keys(table)],
            }

        logger.debug(f"Collected metadata for {len(metadata)} tables")
        return metadata

    def _column_entry(self, column: Column) -> Dict[str, Any]:
        """Column dictionary enriched with its logical type."""
        entry = column.to_dict()
        native_type = resolve_native_type(column)

        if 'enumValues' not in entry:
            values = parse_enum_values(native_type)
            if values is not None:
                entry['enumValues'] = values

        logical = self.schema.field_type(native_type)
        if isinstance(logical, LogicalType):
            logical = logical.value
        entry['logicalType'] = logical or LogicalType.UNKNOWN.value
        return entry
