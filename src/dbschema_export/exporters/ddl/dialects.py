"""
SQL Dialect Implementations

Provides dialect-specific DDL rendering: identifier quoting, transaction
control, column definitions, auto-increment syntax and constraint clauses.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Dict, FrozenSet, List, Optional, Type

from ...errors import UnsupportedDriverError
from ...schema.models import Column, ForeignKey, Index
from ...type_mapping import (
    LogicalType,
    map_native_type,
    normalize_type_name,
    parse_enum_values,
    resolve_native_type,
)

logger = logging.getLogger(__name__)

_NUMERIC_LITERAL = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_FUNCTION_CALL = re.compile(r"^[A-Za-z_][\w.]*\s*\(.*\)$", re.DOTALL)
_CAST_SUFFIX = re.compile(r"(::[A-Za-z_][\w .\[\]\"]*)+$")

# Default expressions emitted verbatim
SQL_KEYWORD_DEFAULTS = frozenset({
    'NULL',
    'TRUE',
    'FALSE',
    'CURRENT_TIMESTAMP',
    'CURRENT_DATE',
    'CURRENT_TIME',
    'LOCALTIMESTAMP',
    'LOCALTIME',
})

ALL_REFERENTIAL_ACTIONS = frozenset({
    'CASCADE',
    'SET NULL',
    'SET DEFAULT',
    'RESTRICT',
    'NO ACTION',
})


class BaseDialect(ABC):
    """Abstract base class for SQL dialects."""

    DIALECT_NAME: str = "generic"
    DISPLAY_NAME: str = "Generic SQL"
    IDENTIFIER_QUOTE: str = '"'
    REFERENTIAL_ACTIONS: FrozenSet[str] = ALL_REFERENTIAL_ACTIONS

    # Types rendered with their length / precision arguments
    SIZED_TYPES = frozenset({
        'char', 'varchar', 'character', 'character varying',
        'nchar', 'nvarchar', 'binary', 'varbinary', 'bit', 'bit varying',
    })
    DECIMAL_TYPES = frozenset({'decimal', 'numeric'})

    # Fallback type for enum columns on dialects without inline enums
    ENUM_FALLBACK_TYPE = "VARCHAR(255)"

    # Normalized type names accepted as is; empty means any name is accepted
    NATIVE_TYPES: FrozenSet[str] = frozenset()

    # Normalized foreign type name -> this dialect's type
    TYPE_TRANSLATIONS: Dict[str, str] = {}

    # Type used for a foreign name that is neither native nor translated
    LOGICAL_TYPE_FALLBACKS: Dict[LogicalType, str] = {}

    # Sized types that are invalid without a size
    UNSIZED_FALLBACKS: Dict[str, str] = {}

    @abstractmethod
    def transaction_open_statement(self) -> str:
        """Statement opening the script transaction."""
        pass

    @abstractmethod
    def transaction_commit_statement(self) -> str:
        """Statement committing the script transaction."""
        pass

    @abstractmethod
    def render_column(self, column: Column) -> str:
        """Render a column definition fragment."""
        pass

    def quote_identifier(self, name: str) -> str:
        """Quote an identifier (table, column, index name)."""
        quote = self.IDENTIFIER_QUOTE
        return f"{quote}{name.replace(quote, quote * 2)}{quote}"

    def quote_string(self, value: str) -> str:
        """Quote a string literal."""
        return "'" + value.replace("'", "''") + "'"

    def render_type(self, column: Column) -> str:
        """
        Render the type of a column with its size arguments.

        Type names of another database are translated to this dialect;
        names the dialect accepts are kept.
        """
        base = (column.type or '').strip()
        if not base:
            return ''

        translated = self.translate_type(base)
        if translated is not None:
            return self._with_size(translated, column)
        if '(' in base:
            return base.upper()
        return self._with_size(base.upper(), column)

    def translate_type(self, native_type: str) -> Optional[str]:
        """
        Translate a native type name into this dialect.

        Args:
            native_type: Type name as reported by the source database

        Returns:
            The dialect's type name, or None when the name is kept as is
        """
        normalized = normalize_type_name(native_type)
        if normalized in self.TYPE_TRANSLATIONS:
            return self.TYPE_TRANSLATIONS[normalized]
        if not self.NATIVE_TYPES or normalized in self.NATIVE_TYPES:
            return None

        fallback = self.LOGICAL_TYPE_FALLBACKS.get(map_native_type(native_type))
        if fallback is None:
            logger.warning(
                f"No {self.DISPLAY_NAME} equivalent for type '{native_type}'; emitting it as is"
            )
        return fallback

    def _with_size(self, name: str, column: Column) -> str:
        if '(' in name:
            return name

        lowered = ' '.join(name.lower().split())
        if column.precision is not None and lowered in self.DECIMAL_TYPES:
            if column.scale is not None:
                return f"{name}({column.precision},{column.scale})"
            return f"{name}({column.precision})"
        if lowered in self.SIZED_TYPES:
            if column.length:
                return f"{name}({column.length})"
            return self.UNSIZED_FALLBACKS.get(lowered, name)
        return name

    def render_default(self, column: Column) -> Optional[str]:
        """
        Render the DEFAULT expression of a column.

        Keywords, function calls, casts and quoted literals are emitted as is;
        casts are removed on dialects without the :: operator.
        Numeric literals stay bare unless the column is textual; anything
        else becomes a string literal.
        """
        if column.default is None:
            return None

        text = self._strip_cast(str(column.default).strip())
        if text.upper() in SQL_KEYWORD_DEFAULTS:
            return text.upper()
        if text.startswith("'") or text.startswith('(') or '::' in text:
            return text
        if _FUNCTION_CALL.match(text):
            return text

        logical = self.logical_type(column)
        if _NUMERIC_LITERAL.match(text) and logical != LogicalType.STRING:
            return text
        return self.quote_string(text)

    def render_primary_key(self, columns: List[Column]) -> Optional[str]:
        """Render the trailing PRIMARY KEY clause."""
        if not columns:
            return None
        cols = ', '.join(self.quote_identifier(c.name) for c in columns)
        return f"PRIMARY KEY ({cols})"

    def render_foreign_key(self, foreign_key: ForeignKey) -> str:
        """Render a trailing FOREIGN KEY constraint clause."""
        clause = (
            f"FOREIGN KEY ({self.quote_identifier(foreign_key.constraint_col)}) "
            f"REFERENCES {self.quote_identifier(foreign_key.ref_container)}"
            f"({self.quote_identifier(foreign_key.ref_column)})"
        )
        if foreign_key.name:
            clause = f"CONSTRAINT {self.quote_identifier(foreign_key.name)} {clause}"

        for label, action in (('ON DELETE', foreign_key.on_delete),
                              ('ON UPDATE', foreign_key.on_update)):
            rendered = self._referential_action(action, foreign_key)
            if rendered:
                clause += f" {label} {rendered}"
        return clause

    def render_index(self, table_name: str, index: Index) -> str:
        """Render a CREATE INDEX statement."""
        unique = "UNIQUE " if index.unique else ""
        cols = ', '.join(self.quote_identifier(c) for c in index.columns)
        return (
            f"CREATE {unique}INDEX {self.quote_identifier(self.index_name(table_name, index))} "
            f"ON {self.quote_identifier(table_name)} ({cols});"
        )

    def index_name(self, table_name: str, index: Index) -> str:
        """Name used for an index in the generated script."""
        return index.name

    def logical_type(self, column: Column) -> LogicalType:
        """Logical type of a column, from its most detailed native type."""
        return map_native_type(resolve_native_type(column))

    def _enum_values(self, column: Column) -> Optional[List[str]]:
        if column.enum_values is not None:
            return list(column.enum_values)
        return parse_enum_values(column.column_type or column.type or '')

    def _is_enum(self, column: Column) -> bool:
        return normalize_type_name(column.type) == 'enum' or bool(
            parse_enum_values(column.column_type or '')
        )

    def _enum_check(self, column: Column) -> Optional[str]:
        values = self._enum_values(column)
        if not values:
            return None
        allowed = ', '.join(self.quote_string(v) for v in values)
        return f"CHECK ({self.quote_identifier(column.name)} IN ({allowed}))"

    def _referential_action(self, action: Optional[str], foreign_key: ForeignKey) -> Optional[str]:
        if not action:
            return None
        normalized = ' '.join(action.upper().split())
        if normalized not in self.REFERENTIAL_ACTIONS:
            logger.warning(
                f"Dropping unsupported referential action '{action}' on "
                f"{foreign_key.constraint_col} for {self.DISPLAY_NAME}"
            )
            return None
        return normalized

    def _strip_cast(self, text: str) -> str:
        """Drop a trailing PostgreSQL cast: 'open'::state -> 'open'."""
        if '::' not in text:
            return text
        return _CAST_SUFFIX.sub('', text)

    def _join_parts(self, parts: List[Optional[str]]) -> str:
        return ' '.join(p for p in parts if p)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(dialect={self.DIALECT_NAME})"


class MySqlDialect(BaseDialect):
    """
    MySQL / MariaDB dialect.

    - Backtick-quoted identifiers
    - AUTO_INCREMENT keyword trailing the column
    - Native ENUM types
    """

    DIALECT_NAME = "mysql"
    DISPLAY_NAME = "MySQL"
    IDENTIFIER_QUOTE = '`'
    # InnoDB rejects SET DEFAULT
    REFERENTIAL_ACTIONS = frozenset({'CASCADE', 'SET NULL', 'RESTRICT', 'NO ACTION'})

    NATIVE_TYPES = frozenset({
        'int', 'integer', 'tinyint', 'smallint', 'mediumint', 'bigint', 'bit',
        'decimal', 'numeric', 'float', 'double', 'double precision', 'real',
        'bool', 'boolean',
        'char', 'varchar', 'nchar', 'nvarchar', 'binary', 'varbinary',
        'tinytext', 'text', 'mediumtext', 'longtext',
        'tinyblob', 'blob', 'mediumblob', 'longblob',
        'enum', 'set', 'json',
        'date', 'datetime', 'timestamp', 'time', 'year',
        'geometry', 'point', 'linestring', 'polygon',
    })

    TYPE_TRANSLATIONS = {
        # PostgreSQL
        'int2': 'SMALLINT',
        'int4': 'INT',
        'int8': 'BIGINT',
        'smallserial': 'SMALLINT',
        'serial2': 'SMALLINT',
        'serial': 'INT',
        'serial4': 'INT',
        'bigserial': 'BIGINT',
        'serial8': 'BIGINT',
        'float4': 'FLOAT',
        'float8': 'DOUBLE',
        'money': 'DECIMAL(19,4)',
        'character varying': 'VARCHAR',
        'character': 'CHAR',
        'bpchar': 'CHAR',
        'citext': 'TEXT',
        'name': 'VARCHAR(63)',
        'uuid': 'CHAR(36)',
        'bytea': 'LONGBLOB',
        'jsonb': 'JSON',
        'array': 'JSON',
        'user-defined': 'VARCHAR(255)',
        'xml': 'LONGTEXT',
        'inet': 'VARCHAR(45)',
        'cidr': 'VARCHAR(45)',
        'macaddr': 'VARCHAR(17)',
        'interval': 'VARCHAR(255)',
        'timestamptz': 'DATETIME',
        'timestamp without time zone': 'DATETIME',
        'timestamp with time zone': 'DATETIME',
        'timetz': 'TIME',
        'time without time zone': 'TIME',
        'time with time zone': 'TIME',
        # SQLite
        'clob': 'LONGTEXT',
    }

    LOGICAL_TYPE_FALLBACKS = {
        LogicalType.INT: 'INT',
        LogicalType.FLOAT: 'DOUBLE',
        LogicalType.STRING: 'TEXT',
        LogicalType.BOOL: 'BOOLEAN',
        LogicalType.DATETIME: 'DATETIME',
        LogicalType.ARRAY: 'JSON',
    }

    UNSIZED_FALLBACKS = {
        'varchar': 'TEXT',
        'nvarchar': 'TEXT',
        'varbinary': 'BLOB',
    }

    def transaction_open_statement(self) -> str:
        return "START TRANSACTION;"

    def transaction_commit_statement(self) -> str:
        return "COMMIT;"

    def render_type(self, column: Column) -> str:
        """Prefer the detailed column type (size, signedness, enum values)."""
        if column.column_type and self.translate_type(column.column_type) is None:
            detailed = column.column_type.strip()
            # enum/set values are case-sensitive
            return detailed if "'" in detailed else detailed.upper()

        if self._is_enum(column):
            values = self._enum_values(column)
            if values:
                return f"ENUM({', '.join(self.quote_string(v) for v in values)})"
        return super().render_type(column)

    def render_column(self, column: Column) -> str:
        default = None if column.auto_increment else self.render_default(column)
        return self._join_parts([
            self.quote_identifier(column.name),
            self.render_type(column),
            None if column.nullable else "NOT NULL",
            f"DEFAULT {default}" if default is not None else None,
            "AUTO_INCREMENT" if column.auto_increment else None,
        ])


class PostgresDialect(BaseDialect):
    """
    PostgreSQL dialect.

    - Double-quoted identifiers
    - SMALLSERIAL / SERIAL / BIGSERIAL substitution for auto-increment
    - Enums rendered as VARCHAR with a CHECK constraint
    """

    DIALECT_NAME = "pgsql"
    DISPLAY_NAME = "PostgreSQL"

    BIGSERIAL_TYPES = frozenset({'bigint', 'int8', 'bigserial', 'serial8'})
    SMALLSERIAL_TYPES = frozenset({'smallint', 'int2', 'smallserial', 'serial2'})

    NATIVE_TYPES = frozenset({
        'smallint', 'integer', 'int', 'bigint', 'int2', 'int4', 'int8',
        'smallserial', 'serial', 'bigserial', 'serial2', 'serial4', 'serial8',
        'decimal', 'numeric', 'real', 'double precision', 'float', 'float4', 'float8',
        'money',
        'char', 'character', 'varchar', 'character varying', 'bpchar', 'text',
        'citext', 'name', 'uuid', 'bytea',
        'bool', 'boolean', 'bit', 'bit varying', 'varbit',
        'date', 'time', 'timetz', 'timestamp', 'timestamptz',
        'time without time zone', 'time with time zone',
        'timestamp without time zone', 'timestamp with time zone', 'interval',
        'json', 'jsonb', 'xml', 'inet', 'cidr', 'macaddr', 'tsvector', 'tsquery',
        'point', 'line', 'lseg', 'box', 'path', 'polygon', 'circle',
    })

    TYPE_TRANSLATIONS = {
        # MySQL
        'tinyint': 'SMALLINT',
        'mediumint': 'INTEGER',
        'year': 'SMALLINT',
        'double': 'DOUBLE PRECISION',
        'datetime': 'TIMESTAMP',
        'nchar': 'CHAR',
        'nvarchar': 'VARCHAR',
        'tinytext': 'TEXT',
        'mediumtext': 'TEXT',
        'longtext': 'TEXT',
        'set': 'TEXT',
        'binary': 'BYTEA',
        'varbinary': 'BYTEA',
        'tinyblob': 'BYTEA',
        'blob': 'BYTEA',
        'mediumblob': 'BYTEA',
        'longblob': 'BYTEA',
        # SQLite
        'clob': 'TEXT',
    }

    LOGICAL_TYPE_FALLBACKS = {
        LogicalType.INT: 'INTEGER',
        LogicalType.FLOAT: 'DOUBLE PRECISION',
        LogicalType.STRING: 'TEXT',
        LogicalType.BOOL: 'BOOLEAN',
        LogicalType.DATETIME: 'TIMESTAMP',
        LogicalType.ARRAY: 'JSONB',
    }

    def transaction_open_statement(self) -> str:
        return "BEGIN;"

    def transaction_commit_statement(self) -> str:
        return "COMMIT;"

    def render_type(self, column: Column) -> str:
        if column.auto_increment and self.logical_type(column) == LogicalType.INT:
            return self._serial_type(column)

        if self._is_enum(column):
            return self.ENUM_FALLBACK_TYPE

        data_type = (column.type or '').strip().upper()
        if data_type == 'USER-DEFINED' and column.udt_name:
            return self.quote_identifier(column.udt_name)
        if data_type == 'ARRAY' and column.udt_name:
            return f"{column.udt_name.lstrip('_').upper()}[]"
        return super().render_type(column)

    def _strip_cast(self, text: str) -> str:
        return text

    def _serial_type(self, column: Column) -> str:
        native = normalize_type_name(resolve_native_type(column))
        if native in self.BIGSERIAL_TYPES:
            return "BIGSERIAL"
        if native in self.SMALLSERIAL_TYPES:
            return "SMALLSERIAL"
        return "SERIAL"

    def render_column(self, column: Column) -> str:
        # SERIAL already implies the nextval() default
        default = None if column.auto_increment else self.render_default(column)
        return self._join_parts([
            self.quote_identifier(column.name),
            self.render_type(column),
            None if column.nullable else "NOT NULL",
            f"DEFAULT {default}" if default is not None else None,
            self._enum_check(column) if self._is_enum(column) else None,
        ])


class SqliteDialect(BaseDialect):
    """
    SQLite dialect.

    - Double-quoted identifiers
    - AUTOINCREMENT only on an inline INTEGER PRIMARY KEY
    - Enums rendered as VARCHAR with a CHECK constraint
    """

    DIALECT_NAME = "sqlite"
    DISPLAY_NAME = "SQLite"

    RESERVED_INDEX_PREFIX = "sqlite_"

    # Any type name is accepted; only names that are not valid SQL are translated
    TYPE_TRANSLATIONS = {
        'user-defined': 'TEXT',
        'array': 'TEXT',
    }

    def transaction_open_statement(self) -> str:
        return "BEGIN TRANSACTION;"

    def transaction_commit_statement(self) -> str:
        return "COMMIT;"

    def render_type(self, column: Column) -> str:
        if self._is_enum(column):
            return self.ENUM_FALLBACK_TYPE
        return super().render_type(column)

    def render_column(self, column: Column) -> str:
        if column.auto_increment and column.primary:
            return f"{self.quote_identifier(column.name)} INTEGER PRIMARY KEY AUTOINCREMENT"

        if column.auto_increment:
            logger.warning(
                f"SQLite supports AUTOINCREMENT only on INTEGER PRIMARY KEY; "
                f"dropping it on column {column.name}"
            )

        default = self.render_default(column)
        return self._join_parts([
            self.quote_identifier(column.name),
            self.render_type(column),
            None if column.nullable else "NOT NULL",
            f"DEFAULT {default}" if default is not None else None,
            self._enum_check(column) if self._is_enum(column) else None,
        ])

    def render_primary_key(self, columns: List[Column]) -> Optional[str]:
        """The AUTOINCREMENT column already declares the key inline."""
        if any(c.auto_increment for c in columns):
            return None
        return super().render_primary_key(columns)

    def index_name(self, table_name: str, index: Index) -> str:
        """Names starting with sqlite_ are reserved for internal indexes."""
        if not index.name.startswith(self.RESERVED_INDEX_PREFIX):
            return index.name
        suffix = 'key' if index.unique else 'idx'
        return '_'.join([table_name, *index.columns, suffix])


# Driver identifier -> dialect
DIALECTS: Dict[str, Type[BaseDialect]] = {
    'mysql': MySqlDialect,
    'pgsql': PostgresDialect,
    'sqlite': SqliteDialect,
}

SUPPORTED_DRIVERS = tuple(DIALECTS.keys())


def get_dialect(driver: str) -> BaseDialect:
    """
    Get a dialect instance for a driver identifier.

    Args:
        driver: Driver identifier ('mysql', 'pgsql', 'sqlite'), matched exactly

    Returns:
        Dialect instance

    Raises:
        UnsupportedDriverError: If no dialect exists for the driver
    """
    dialect_class = DIALECTS.get(driver) if isinstance(driver, str) else None
    if dialect_class is None:
        raise UnsupportedDriverError(str(driver), SUPPORTED_DRIVERS)

    logger.debug(f"Resolved dialect {dialect_class.DISPLAY_NAME} for driver {driver}")
    return dialect_class()
