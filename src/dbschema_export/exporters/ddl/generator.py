"""
SQL DDL Exporter

Renders tables read from a schema reader into one transactional
CREATE TABLE script for a single SQL dialect.
"""

import logging
from typing import Iterable, List

from ...schema.models import Column, ForeignKey, Index
from ...schema.reader import SchemaReader
from .dialects import BaseDialect

logger = logging.getLogger(__name__)

SCRIPT_HEADER = "-- SQL DDL Export"
COLUMN_INDENT = "    "

PRIMARY_INDEX_NAME = "PRIMARY"


class SqlDdlExporter:
    """
    Generates SQL DDL scripts.

    Tables are rendered in the order given. No dependency ordering is done:
    callers pass referenced tables before the tables that reference them.
    """

    def __init__(self, schema: SchemaReader, dialect: BaseDialect):
        """
        Initialize the exporter.

        Args:
            schema: Reader providing table metadata
            dialect: Dialect used for the whole script
        """
        self.schema = schema
        self.dialect = dialect

    def generate(self, tables: Iterable[str]) -> str:
        """
        Generate a complete DDL script.

        Args:
            tables: Table names, in creation order

        Returns:
            Script text: header comment, transaction open, one CREATE TABLE
            block per table, commit
        """
        statements = []
        for table in tables:
            statements.append(self._generate_table(table))

        logger.info(f"Generated {self.dialect.DISPLAY_NAME} DDL for {len(statements)} tables")

        lines = [
            SCRIPT_HEADER,
            self.dialect.transaction_open_statement(),
            "",
        ]
        for statement in statements:
            lines.append(statement)
            lines.append("")
        lines.append(self.dialect.transaction_commit_statement())

        return '\n'.join(lines)

    def _generate_table(self, table: str) -> str:
        """Render the CREATE TABLE statement and index statements of a table."""
        columns = self.schema.columns(table)
        indexes = self.schema.indexes(table)
        foreign_keys = self.schema.foreign_keys(table)

        logger.debug(
            f"Rendering {table}: {len(columns)} columns, {len(indexes)} indexes, "
            f"{len(foreign_keys)} foreign keys"
        )
        if not columns:
            logger.warning(f"Table {table} has no columns; the CREATE TABLE will be rejected")

        parts = [self._create_table(table, columns, foreign_keys)]

        primary_columns = [c.name for c in columns if c.primary]
        for index in indexes:
            if self._is_primary_index(index, primary_columns):
                continue
            parts.append(self.dialect.render_index(table, index))

        return '\n'.join(parts)

    def _create_table(
        self,
        table: str,
        columns: List[Column],
        foreign_keys: List[ForeignKey]
    ) -> str:
        definitions = [self.dialect.render_column(column) for column in columns]

        primary_key = self.dialect.render_primary_key([c for c in columns if c.primary])
        if primary_key:
            definitions.append(primary_key)

        for foreign_key in foreign_keys:
            definitions.append(self.dialect.render_foreign_key(foreign_key))

        body = ',\n'.join(f"{COLUMN_INDENT}{d}" for d in definitions)
        return f"CREATE TABLE {self.dialect.quote_identifier(table)} (\n{body}\n);"

    @staticmethod
    def _is_primary_index(index: Index, primary_columns: List[str]) -> bool:
        """Primary key indexes are covered by the PRIMARY KEY clause."""
        if index.primary or index.name.upper() == PRIMARY_INDEX_NAME:
            return True
        return index.unique and bool(primary_columns) and list(index.columns) == primary_columns
