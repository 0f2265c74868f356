"""
Native Type Mapping

Translates native database type names (MySQL, PostgreSQL, SQLite) into a
small closed set of logical types. The mapping is total: names that are not
catalogued map to ``unknown``.
"""

import re
from enum import Enum
from typing import Any, Dict, List, Optional


class LogicalType(str, Enum):
    """Host-neutral logical column types."""
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    BOOL = "bool"
    DATETIME = "datetime"
    ARRAY = "array"
    UNKNOWN = "unknown"


# Columns carry up to three type fields; the first one present wins.
NATIVE_TYPE_FIELDS = ('column_type', 'udt_name', 'type')

TYPE_MAPPINGS: Dict[str, LogicalType] = {
    # Integers
    'int': LogicalType.INT,
    'integer': LogicalType.INT,
    'tinyint': LogicalType.INT,
    'smallint': LogicalType.INT,
    'mediumint': LogicalType.INT,
    'bigint': LogicalType.INT,
    'int2': LogicalType.INT,
    'int4': LogicalType.INT,
    'int8': LogicalType.INT,
    'smallserial': LogicalType.INT,
    'serial': LogicalType.INT,
    'bigserial': LogicalType.INT,
    'serial2': LogicalType.INT,
    'serial4': LogicalType.INT,
    'serial8': LogicalType.INT,
    'year': LogicalType.INT,
    'bit': LogicalType.INT,

    # Floating point and fixed point
    'decimal': LogicalType.FLOAT,
    'numeric': LogicalType.FLOAT,
    'float': LogicalType.FLOAT,
    'float4': LogicalType.FLOAT,
    'float8': LogicalType.FLOAT,
    'double': LogicalType.FLOAT,
    'double precision': LogicalType.FLOAT,
    'real': LogicalType.FLOAT,
    'money': LogicalType.FLOAT,

    # Text
    'char': LogicalType.STRING,
    'varchar': LogicalType.STRING,
    'character': LogicalType.STRING,
    'character varying': LogicalType.STRING,
    'nchar': LogicalType.STRING,
    'nvarchar': LogicalType.STRING,
    'bpchar': LogicalType.STRING,
    'text': LogicalType.STRING,
    'tinytext': LogicalType.STRING,
    'mediumtext': LogicalType.STRING,
    'longtext': LogicalType.STRING,
    'citext': LogicalType.STRING,
    'clob': LogicalType.STRING,
    'name': LogicalType.STRING,
    'uuid': LogicalType.STRING,
    'enum': LogicalType.STRING,
    'set': LogicalType.STRING,
    'xml': LogicalType.STRING,
    'inet': LogicalType.STRING,
    'cidr': LogicalType.STRING,
    'macaddr': LogicalType.STRING,
    'interval': LogicalType.STRING,

    # Binary
    'binary': LogicalType.STRING,
    'varbinary': LogicalType.STRING,
    'blob': LogicalType.STRING,
    'tinyblob': LogicalType.STRING,
    'mediumblob': LogicalType.STRING,
    'longblob': LogicalType.STRING,
    'bytea': LogicalType.STRING,

    # Boolean
    'bool': LogicalType.BOOL,
    'boolean': LogicalType.BOOL,

    # Date and time
    'date': LogicalType.DATETIME,
    'datetime': LogicalType.DATETIME,
    'timestamp': LogicalType.DATETIME,
    'timestamptz': LogicalType.DATETIME,
    'timestamp without time zone': LogicalType.DATETIME,
    'timestamp with time zone': LogicalType.DATETIME,
    'time': LogicalType.DATETIME,
    'timetz': LogicalType.DATETIME,
    'time without time zone': LogicalType.DATETIME,
    'time with time zone': LogicalType.DATETIME,

    # Structured
    'json': LogicalType.ARRAY,
    'jsonb': LogicalType.ARRAY,
}

_SIZE_ARGS = re.compile(r"\([^)]*\)")
_MODIFIERS = re.compile(r"\b(unsigned|signed|zerofill)\b")
_ENUM_TYPE = re.compile(r"^\s*enum\s*\((.*)\)\s*$", re.IGNORECASE | re.DOTALL)
_QUOTED_VALUE = re.compile(r"'((?:[^']|'')*)'")


def normalize_type_name(native_type: str) -> str:
    """Lower-case a native type name and strip size arguments and modifiers."""
    normalized = (native_type or '').strip().lower()
    normalized = _SIZE_ARGS.sub('', normalized)
    normalized = _MODIFIERS.sub('', normalized)
    return ' '.join(normalized.split())


def map_native_type(native_type: str) -> LogicalType:
    """
    Map a native database type name to a logical type.

    Args:
        native_type: Type name as reported by the database, e.g.
                     ``int(10) unsigned``, ``character varying``, ``_text``

    Returns:
        The matching LogicalType, ``LogicalType.UNKNOWN`` when not catalogued
    """
    normalized = normalize_type_name(native_type)
    if not normalized:
        return LogicalType.UNKNOWN

    if normalized in TYPE_MAPPINGS:
        return TYPE_MAPPINGS[normalized]

    # PostgreSQL array udt names (_int4, _text) map to their element type
    if normalized.startswith('_') and normalized[1:] in TYPE_MAPPINGS:
        return TYPE_MAPPINGS[normalized[1:]]

    # "int identity", "varchar[]", "timestamp(6) with local time zone"
    base = re.split(r"[\s\[]", normalized, maxsplit=1)[0]
    return TYPE_MAPPINGS.get(base, LogicalType.UNKNOWN)


def resolve_native_type(column: Any) -> str:
    """
    Pick the native type name used for mapping a column.

    Tries the MySQL detailed column type, then the PostgreSQL underlying type
    name, then the generic type; the first present field wins.
    """
    for field_name in NATIVE_TYPE_FIELDS:
        value = getattr(column, field_name, None)
        if value is not None:
            return value
    return ''


def parse_enum_values(native_type: str) -> Optional[List[str]]:
    """
    Extract the values of an ``enum('a','b')`` type declaration.

    Returns:
        List of values in declaration order, or None for non-enum types
    """
    match = _ENUM_TYPE.match(native_type or '')
    if not match:
        return None
    return [value.replace("''", "'") for value in _QUOTED_VALUE.findall(match.group(1))]
