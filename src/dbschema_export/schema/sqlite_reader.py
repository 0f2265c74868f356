"""
SQLite Schema Reader

Reads table metadata from a SQLite database through sqlite_master and the
table_info / index_list / index_info / foreign_key_list pragmas.
"""

import logging
import re
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional, Union

from ..errors import SchemaReadError, TableNotFoundError
from .models import Column, ForeignKey, Index
from .reader import SchemaReader

logger = logging.getLogger(__name__)

_TYPE_ARGS = re.compile(r"^\s*([^(]*?)\s*\(\s*(\d+)\s*(?:,\s*(\d+)\s*)?\)\s*$")
_AUTOINCREMENT = re.compile(r"\bAUTOINCREMENT\b", re.IGNORECASE)

# PRAGMA foreign_key_list reports NO ACTION when no action was declared
_DEFAULT_ACTION = 'NO ACTION'


class SqliteSchemaReader(SchemaReader):
    """
    Schema reader for SQLite databases.

    Accepts a database path or an open sqlite3 connection. A connection
    opened by the reader is closed by close(); a borrowed one is left open.
    """

    DRIVER_NAME = "sqlite"

    def __init__(self, database: Union[str, Path, sqlite3.Connection]):
        if isinstance(database, sqlite3.Connection):
            self._conn = database
            self._owns_connection = False
            self.database = None
        else:
            self.database = str(database)
            try:
                self._conn = sqlite3.connect(self.database)
            except sqlite3.Error as e:
                raise SchemaReadError(f"Cannot open SQLite database {self.database}: {e}") from e
            self._owns_connection = True
        self._conn.row_factory = sqlite3.Row

    def close(self):
        """Close the connection if this reader opened it."""
        if self._owns_connection and self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> 'SqliteSchemaReader':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @contextmanager
    def _cursor(self):
        """Cursor with sqlite3 errors translated to SchemaReadError."""
        if self._conn is None:
            raise SchemaReadError("SQLite reader is closed")
        cursor = self._conn.cursor()
        try:
            yield cursor
        except sqlite3.Error as e:
            raise SchemaReadError(f"SQLite introspection failed: {e}") from e
        finally:
            cursor.close()

    @staticmethod
    def _quote(name: str) -> str:
        return '"' + name.replace('"', '""') + '"'

    def driver_name(self) -> str:
        return self.DRIVER_NAME

    def table_names(self) -> List[str]:
        """List user-defined tables, in creation order."""
        with self._cursor() as cur:
            cur.execute(
                "SELECT name FROM sqlite_master "
                "WHERE type = 'table' AND name NOT LIKE 'sqlite_%' "
                "ORDER BY rowid"
            )
            return [row['name'] for row in cur.fetchall()]

    def _table_sql(self, table: str) -> str:
        with self._cursor() as cur:
            cur.execute(
                "SELECT sql FROM sqlite_master WHERE type = 'table' AND name = ?",
                (table,),
            )
            row = cur.fetchone()
        if row is None:
            raise TableNotFoundError(table, source=self.database or 'sqlite')
        return row['sql'] or ''

    def columns(self, table: str) -> List[Column]:
        """Columns from PRAGMA table_info."""
        create_sql = self._table_sql(table)

        with self._cursor() as cur:
            cur.execute(f"PRAGMA table_info({self._quote(table)})")
            rows = cur.fetchall()

        pk_count = sum(1 for row in rows if row['pk'])
        has_autoincrement = bool(_AUTOINCREMENT.search(create_sql))

        columns = []
        for row in rows:
            declared = (row['type'] or '').strip()
            base_type, length, scale = self._split_type(declared)
            is_primary = row['pk'] > 0

            # AUTOINCREMENT is only legal on a lone INTEGER PRIMARY KEY
            auto_increment = (
                has_autoincrement
                and is_primary
                and pk_count == 1
                and base_type.upper() == 'INTEGER'
            )

            columns.append(Column(
                name=row['name'],
                type=base_type,
                nullable=not row['notnull'] and not is_primary,
                primary=is_primary,
                auto_increment=auto_increment,
                default=row['dflt_value'],
                length=length if scale is None else None,
                precision=length if scale is not None else None,
                scale=scale,
            ))

        logger.debug(f"Read {len(columns)} columns from {table}")
        return columns

    @staticmethod
    def _split_type(declared: str):
        """Split 'VARCHAR(255)' / 'DECIMAL(10,2)' into base type and sizes."""
        match = _TYPE_ARGS.match(declared)
        if not match:
            return declared, None, None
        base, first, second = match.groups()
        return base, int(first), int(second) if second is not None else None

    def indexes(self, table: str) -> List[Index]:
        """Indexes from PRAGMA index_list / index_info."""
        self._table_sql(table)

        with self._cursor() as cur:
            cur.execute(f"PRAGMA index_list({self._quote(table)})")
            index_rows = cur.fetchall()

            indexes = []
            for row in index_rows:
                cur.execute(f"PRAGMA index_info({self._quote(row['name'])})")
                info = sorted(cur.fetchall(), key=lambda r: r['seqno'])
                indexes.append(Index(
                    name=row['name'],
                    columns=[r['name'] for r in info],
                    unique=bool(row['unique']),
                    primary=row['origin'] == 'pk',
                ))

        return indexes

    def foreign_keys(self, table: str) -> List[ForeignKey]:
        """Foreign keys from PRAGMA foreign_key_list."""
        self._table_sql(table)

        with self._cursor() as cur:
            cur.execute(f"PRAGMA foreign_key_list({self._quote(table)})")
            rows = sorted(cur.fetchall(), key=lambda r: (r['id'], r['seq']))

        foreign_keys = []
        for row in rows:
            # 'to' is NULL when the reference targets the parent's primary key
            ref_column = row['to'] or self._primary_key_of(row['table'])
            foreign_keys.append(ForeignKey(
                constraint_col=row['from'],
                ref_container=row['table'],
                ref_column=ref_column,
                on_delete=self._action(row['on_delete']),
                on_update=self._action(row['on_update']),
            ))
        return foreign_keys

    def _primary_key_of(self, table: str) -> str:
        with self._cursor() as cur:
            cur.execute(f"PRAGMA table_info({self._quote(table)})")
            pk_rows = sorted((r for r in cur.fetchall() if r['pk']), key=lambda r: r['pk'])
        return pk_rows[0]['name'] if pk_rows else 'rowid'

    @staticmethod
    def _action(action: Optional[str]) -> Optional[str]:
        if not action or action.upper() == _DEFAULT_ACTION:
            return None
        return action.upper()
