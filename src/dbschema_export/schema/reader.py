"""
Schema Readers

Defines the interface the exporters read table metadata through, plus an
in-memory implementation that can be rebuilt from a previous JSON export.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import yaml

from ..errors import SchemaReadError, TableNotFoundError
from ..type_mapping import map_native_type
from .models import Column, ForeignKey, Index, Table

logger = logging.getLogger(__name__)


class SchemaReader(ABC):
    """
    Abstract base class for schema metadata providers.

    Readers report a driver identifier and per-table metadata. Empty
    metadata is returned as empty lists, never None.
    """

    @abstractmethod
    def driver_name(self) -> str:
        """Driver identifier of the source database (mysql, pgsql, sqlite)."""
        pass

    @abstractmethod
    def columns(self, table: str) -> List[Column]:
        """Columns of a table in natural order."""
        pass

    @abstractmethod
    def indexes(self, table: str) -> List[Index]:
        """Indexes of a table."""
        pass

    @abstractmethod
    def foreign_keys(self, table: str) -> List[ForeignKey]:
        """Foreign keys of a table."""
        pass

    @abstractmethod
    def table_names(self) -> List[str]:
        """Names of all tables in the source."""
        pass

    def field_type(self, native_type: str) -> Optional[str]:
        """
        Map a native type name to a logical type name.

        Override in subclasses that know better about their driver's types.
        """
        return map_native_type(native_type).value

    def table(self, name: str) -> Table:
        """Fetch the complete metadata of a table."""
        return Table(
            name=name,
            columns=self.columns(name),
            indexes=self.indexes(name),
            foreign_keys=self.foreign_keys(name),
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(driver={self.driver_name()})"


class InMemorySchemaReader(SchemaReader):
    """Schema reader over already-built Table objects."""

    def __init__(self, driver: str, tables: Iterable[Table]):
        self._driver = driver
        self._tables: Dict[str, Table] = {}
        for table in tables:
            self._tables[table.name] = table

    @classmethod
    def from_document(cls, document: Dict[str, Any], driver: str) -> 'InMemorySchemaReader':
        """
        Rebuild a reader from a JSON export envelope.

        Args:
            document: Envelope as produced by JsonExporter.generate_array
            driver: Driver identifier to report

        Returns:
            Reader holding the tables of the document
        """
        tables = document.get('tables') if isinstance(document, dict) else None
        if not isinstance(tables, dict):
            raise SchemaReadError("Schema document has no 'tables' mapping")

        try:
            parsed = [Table.from_dict(name, data) for name, data in tables.items()]
        except (KeyError, TypeError, ValueError) as e:
            raise SchemaReadError(f"Invalid schema document: {e}") from e

        logger.debug(f"Loaded {len(parsed)} tables from schema document")
        return cls(driver, parsed)

    @classmethod
    def from_file(cls, path: Union[str, Path], driver: str) -> 'InMemorySchemaReader':
        """Load a JSON or YAML export envelope from disk."""
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                if path.suffix.lower() in ('.yaml', '.yml'):
                    document = yaml.safe_load(f)
                else:
                    document = json.load(f)
        except OSError as e:
            raise SchemaReadError(f"Cannot read schema file {path}: {e}") from e
        except (ValueError, yaml.YAMLError) as e:
            raise SchemaReadError(f"Cannot parse schema file {path}: {e}") from e

        return cls.from_document(document, driver)

    def _get(self, table: str) -> Table:
        try:
            return self._tables[table]
        except KeyError:
            raise TableNotFoundError(table, source='memory') from None

    def driver_name(self) -> str:
        return self._driver

    def columns(self, table: str) -> List[Column]:
        return list(self._get(table).columns)

    def indexes(self, table: str) -> List[Index]:
        return list(self._get(table).indexes)

    def foreign_keys(self, table: str) -> List[ForeignKey]:
        return list(self._get(table).foreign_keys)

    def table_names(self) -> List[str]:
        return list(self._tables.keys())
