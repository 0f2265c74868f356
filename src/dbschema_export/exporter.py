"""
Schema Exporter

Unified entry point exporting a database schema as SQL DDL, JSON or a
dictionary.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from .exporters.ddl import BaseDialect, SqlDdlExporter, get_dialect
from .exporters.json import PRETTY_INDENT, JsonExporter
from .schema.reader import SchemaReader

logger = logging.getLogger(__name__)


class DbSchemaExporter:
    """
    Exports database schema in various formats (SQL DDL, JSON, dictionary).

    The SQL dialect is resolved from the reader's driver on first use and
    reused for the lifetime of the instance; so is the JSON exporter.
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
            clock: Generation time source for JSON exports (default: now)
            indent: Indentation width for pretty-printed JSON
        """
        self.schema = schema
        self._clock = clock
        self._indent = indent
        self._dialect: Optional[BaseDialect] = None
        self._json_exporter: Optional[JsonExporter] = None

    def to_sql(self, tables: List[str]) -> str:
        """
        Export schema as a SQL DDL script.

        Args:
            tables: Table names to export, in creation order

        Returns:
            Complete SQL DDL script

        Raises:
            UnsupportedDriverError: If the reader's driver has no dialect
        """
        exporter = SqlDdlExporter(self.schema, self.dialect)
        return exporter.generate(tables)

    def to_json(self, tables: List[str], pretty_print: bool = False) -> str:
        """
        Export schema as JSON.

        Args:
            tables: Table names to export
            pretty_print: Format JSON with indentation

        Returns:
            JSON representation of the schema
        """
        return self._get_json_exporter().generate(tables, pretty_print)

    def to_array(self, tables: List[str]) -> Dict[str, Any]:
        """
        Export schema as a dictionary.

        Args:
            tables: Table names to export

        Returns:
            Dictionary equal to the decoded JSON export
        """
        return self._get_json_exporter().generate_array(tables)

    @property
    def dialect(self) -> BaseDialect:
        """SQL dialect for the reader's driver (resolved once, cached)."""
        if self._dialect is None:
            driver = self.schema.driver_name()
            self._dialect = get_dialect(driver)
            logger.debug(f"Using {self._dialect.DISPLAY_NAME} dialect for driver {driver}")
        return self._dialect

    def _get_json_exporter(self) -> JsonExporter:
        """Get or create the JSON exporter (lazy-loaded, cached)."""
        if self._json_exporter is None:
            self._json_exporter = JsonExporter(self.schema, clock=self._clock, indent=self._indent)
        return self._json_exporter
