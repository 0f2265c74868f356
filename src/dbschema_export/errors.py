"""
Exporter Exceptions

Error hierarchy shared by the readers, the exporters and the CLI.
"""

from typing import Iterable, Optional


class SchemaExportError(Exception):
    """Base exception for schema export errors."""
    pass


class ConfigurationError(SchemaExportError, ValueError):
    """Raised when the exporter is configured with unsupported settings."""
    pass


class UnsupportedDriverError(ConfigurationError):
    """Raised when a schema reader reports a driver without a SQL dialect."""

    def __init__(self, driver: str, supported: Iterable[str]):
        self.driver = driver
        self.supported = tuple(supported)
        super().__init__(
            f"Unsupported database driver: {driver}. "
            f"Supported: {', '.join(self.supported)}"
        )


class SchemaReadError(SchemaExportError):
    """Raised when schema metadata cannot be read from the source."""
    pass


class TableNotFoundError(SchemaReadError):
    """Raised when a requested table does not exist in the source."""

    def __init__(self, table: str, source: Optional[str] = None):
        self.table = table
        message = f"Table not found: {table}"
        if source:
            message += f" (source: {source})"
        super().__init__(message)


class ExportEncodingError(SchemaExportError):
    """Raised when the structured export cannot be encoded as JSON."""
    pass
