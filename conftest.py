"""
Shared fixtures for the schema exporter tests.
"""

import sqlite3
import sys
from datetime import datetime
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from dbschema_export.schema import Column, ForeignKey, Index, InMemorySchemaReader, Table


FIXED_NOW = datetime(2024, 1, 15, 10, 30, 0)


def mysql_tables():
    """users/orders as a MySQL information_schema reader reports them."""
    users = Table(
        name='users',
        columns=[
            Column(name='id', type='int', nullable=False, primary=True, auto_increment=True,
                   column_type='int(11)'),
            Column(name='email', type='varchar', nullable=False, column_type='varchar(255)',
                   length=255),
            Column(name='status', type='enum', nullable=False, default='active',
                   column_type="enum('active','inactive','pending')"),
            Column(name='created_at', type='timestamp', default='CURRENT_TIMESTAMP',
                   column_type='timestamp'),
        ],
        indexes=[
            Index(name='PRIMARY', columns=['id'], unique=True),
            Index(name='users_email_unique', columns=['email'], unique=True),
        ],
    )
    orders = Table(
        name='orders',
        columns=[
            Column(name='id', type='int', nullable=False, primary=True, auto_increment=True,
                   column_type='int(11)'),
            Column(name='user_id', type='int', nullable=False, column_type='int(11)'),
            Column(name='total', type='decimal', default='0.00', column_type='decimal(10,2)',
                   precision=10, scale=2),
        ],
        indexes=[
            Index(name='PRIMARY', columns=['id'], unique=True),
            Index(name='orders_user_id_index', columns=['user_id']),
        ],
        foreign_keys=[
            ForeignKey(constraint_col='user_id', ref_container='users', ref_column='id',
                       on_delete='CASCADE'),
        ],
    )
    return [users, orders]


def pgsql_tables():
    """Tables as a PostgreSQL information_schema reader reports them."""
    accounts = Table(
        name='accounts',
        columns=[
            Column(name='id', type='integer', nullable=False, primary=True, auto_increment=True,
                   udt_name='int4', default="nextval('accounts_id_seq'::regclass)"),
            Column(name='big_ref', type='bigint', udt_name='int8'),
            Column(name='email', type='character varying', nullable=False, udt_name='varchar',
                   length=255),
            Column(name='data', type='jsonb', udt_name='jsonb'),
            Column(name='tags', type='ARRAY', udt_name='_text'),
            Column(name='amount', type='numeric', udt_name='numeric', precision=10, scale=2),
            Column(name='state', type='USER-DEFINED', udt_name='account_state',
                   default="'open'::account_state"),
        ],
        indexes=[
            Index(name='accounts_pkey', columns=['id'], unique=True),
            Index(name='accounts_email_idx', columns=['email']),
        ],
    )
    events = Table(
        name='events',
        columns=[
            Column(name='id', type='bigint', nullable=False, primary=True, auto_increment=True,
                   udt_name='int8'),
            Column(name='account_id', type='integer', nullable=False, udt_name='int4'),
        ],
        foreign_keys=[
            ForeignKey(constraint_col='account_id', ref_container='accounts', ref_column='id',
                       on_delete='SET DEFAULT', on_update='CASCADE'),
        ],
    )
    return [accounts, events]


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def make_reader():
    """Factory building an in-memory reader over the MySQL-style tables."""
    def _make(driver='mysql', tables=None):
        return InMemorySchemaReader(driver, tables if tables is not None else mysql_tables())
    return _make


@pytest.fixture
def mysql_reader(make_reader):
    return make_reader('mysql')


@pytest.fixture
def pgsql_reader():
    return InMemorySchemaReader('pgsql', pgsql_tables())


SQLITE_SCHEMA = """
CREATE TABLE users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    email VARCHAR(255) NOT NULL UNIQUE,
    name TEXT,
    balance DECIMAL(10,2) DEFAULT 0,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE orders (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    price REAL,
    count INTEGER
);

CREATE INDEX idx_orders_user_id ON orders(user_id);
"""


@pytest.fixture
def sqlite_db(tmp_path):
    """Path to a SQLite database holding users/orders."""
    path = tmp_path / 'app.db'
    conn = sqlite3.connect(str(path))
    try:
        conn.executescript(SQLITE_SCHEMA)
        conn.commit()
    finally:
        conn.close()
    return path
