"""
Tests for the SQL dialects.
"""

import pytest

from dbschema_export.errors import ConfigurationError, UnsupportedDriverError
from dbschema_export.exporters.ddl import (
    DIALECTS,
    SUPPORTED_DRIVERS,
    MySqlDialect,
    PostgresDialect,
    SqliteDialect,
    get_dialect,
)
from dbschema_export.schema import Column, ForeignKey, Index


def test_get_dialect():
    assert isinstance(get_dialect('mysql'), MySqlDialect)
    assert isinstance(get_dialect('pgsql'), PostgresDialect)
    assert isinstance(get_dialect('sqlite'), SqliteDialect)
    assert SUPPORTED_DRIVERS == ('mysql', 'pgsql', 'sqlite')
    assert set(DIALECTS) == set(SUPPORTED_DRIVERS)


@pytest.mark.parametrize('driver', ['oracle', 'MySQL', 'postgres', '', None])
def test_get_dialect_unsupported(driver):
    with pytest.raises(UnsupportedDriverError) as exc_info:
        get_dialect(driver)

    assert exc_info.value.driver == str(driver)
    assert exc_info.value.supported == SUPPORTED_DRIVERS
    assert 'Unsupported database driver' in str(exc_info.value)
    # Also catchable as a configuration problem
    assert isinstance(exc_info.value, ConfigurationError)


def test_transaction_statements():
    assert MySqlDialect().transaction_open_statement() == "START TRANSACTION;"
    assert PostgresDialect().transaction_open_statement() == "BEGIN;"
    assert SqliteDialect().transaction_open_statement() == "BEGIN TRANSACTION;"
    for dialect in (MySqlDialect(), PostgresDialect(), SqliteDialect()):
        assert dialect.transaction_commit_statement() == "COMMIT;"


def test_quote_identifier():
    assert MySqlDialect().quote_identifier('users') == '`users`'
    assert MySqlDialect().quote_identifier('we`ird') == '`we``ird`'
    assert PostgresDialect().quote_identifier('users') == '"users"'
    assert SqliteDialect().quote_identifier('say "hi"') == '"say ""hi"""'


def test_mysql_auto_increment_column():
    column = Column(name='id', type='int', nullable=False, primary=True, auto_increment=True,
                    column_type='int(11)')
    assert MySqlDialect().render_column(column) == '`id` INT(11) NOT NULL AUTO_INCREMENT'


def test_mysql_keeps_enum_values_verbatim():
    column = Column(name='status', type='enum', column_type="enum('Active','Closed')",
                    default='Active')
    assert MySqlDialect().render_column(column) == \
        "`status` enum('Active','Closed') DEFAULT 'Active'"


def test_mysql_enum_without_column_type():
    column = Column(name='status', type='enum', enum_values=['a', 'b'])
    assert MySqlDialect().render_type(column) == "ENUM('a', 'b')"


def test_postgres_serial_types():
    dialect = PostgresDialect()
    integer = Column(name='id', type='integer', udt_name='int4', nullable=False,
                     primary=True, auto_increment=True,
                     default="nextval('t_id_seq'::regclass)")
    bigint = Column(name='id', type='bigint', udt_name='int8', auto_increment=True)
    smallint = Column(name='id', type='smallint', udt_name='int2', auto_increment=True)

    # The sequence default is implied by SERIAL
    assert dialect.render_column(integer) == '"id" SERIAL NOT NULL'
    assert dialect.render_type(bigint) == 'BIGSERIAL'
    assert dialect.render_type(smallint) == 'SMALLSERIAL'


def test_postgres_special_types():
    dialect = PostgresDialect()
    assert dialect.render_type(Column(name='tags', type='ARRAY', udt_name='_text')) == 'TEXT[]'
    assert dialect.render_type(Column(name='s', type='USER-DEFINED', udt_name='mood')) == '"mood"'
    assert dialect.render_type(Column(name='e', type='character varying', length=40)) == \
        'CHARACTER VARYING(40)'
    assert dialect.render_type(Column(name='n', type='numeric', precision=12, scale=4)) == \
        'NUMERIC(12,4)'


def test_enum_check_constraint():
    column = Column(name='status', type='enum', nullable=False,
                    column_type="enum('active','inactive')")
    expected = "\"status\" VARCHAR(255) NOT NULL CHECK (\"status\" IN ('active', 'inactive'))"
    assert PostgresDialect().render_column(column) == expected
    assert SqliteDialect().render_column(column) == expected


def test_sqlite_auto_increment_primary_key():
    dialect = SqliteDialect()
    column = Column(name='id', type='int', nullable=False, primary=True, auto_increment=True)

    assert dialect.render_column(column) == '"id" INTEGER PRIMARY KEY AUTOINCREMENT'
    # The key is already declared on the column
    assert dialect.render_primary_key([column]) is None


def test_sqlite_drops_auto_increment_off_primary_key():
    column = Column(name='seq', type='integer', auto_increment=True)
    assert SqliteDialect().render_column(column) == '"seq" INTEGER'


def test_sqlite_renames_internal_indexes():
    dialect = SqliteDialect()
    internal = Index(name='sqlite_autoindex_users_1', columns=['email'], unique=True)
    named = Index(name='idx_users_name', columns=['name'])

    assert dialect.index_name('users', internal) == 'users_email_key'
    assert dialect.index_name('users', named) == 'idx_users_name'
    assert dialect.render_index('users', internal) == \
        'CREATE UNIQUE INDEX "users_email_key" ON "users" ("email");'


def test_primary_key_clause():
    columns = [
        Column(name='order_id', type='int', primary=True),
        Column(name='line_no', type='int', primary=True),
    ]
    assert MySqlDialect().render_primary_key(columns) == 'PRIMARY KEY (`order_id`, `line_no`)'
    assert SqliteDialect().render_primary_key(columns) == 'PRIMARY KEY ("order_id", "line_no")'
    assert PostgresDialect().render_primary_key([]) is None


def test_foreign_key_clause():
    fk = ForeignKey(constraint_col='user_id', ref_container='users', ref_column='id')
    assert MySqlDialect().render_foreign_key(fk) == \
        'FOREIGN KEY (`user_id`) REFERENCES `users`(`id`)'
    assert PostgresDialect().render_foreign_key(fk) == \
        'FOREIGN KEY ("user_id") REFERENCES "users"("id")'


def test_foreign_key_actions_and_name():
    fk = ForeignKey(constraint_col='user_id', ref_container='users', ref_column='id',
                    on_delete='set null', on_update='CASCADE', name='fk_orders_user')
    assert PostgresDialect().render_foreign_key(fk) == (
        'CONSTRAINT "fk_orders_user" FOREIGN KEY ("user_id") REFERENCES "users"("id") '
        'ON DELETE SET NULL ON UPDATE CASCADE'
    )


def test_unsupported_action_is_dropped():
    fk = ForeignKey(constraint_col='user_id', ref_container='users', ref_column='id',
                    on_delete='SET DEFAULT')
    assert MySqlDialect().render_foreign_key(fk) == \
        'FOREIGN KEY (`user_id`) REFERENCES `users`(`id`)'
    assert PostgresDialect().render_foreign_key(fk).endswith('ON DELETE SET DEFAULT')


@pytest.mark.parametrize('column, expected', [
    (Column(name='c', type='int', default='0'), '0'),
    (Column(name='c', type='decimal', default='1.50'), '1.50'),
    (Column(name='c', type='varchar', default='42'), "'42'"),
    (Column(name='c', type='varchar', default="it's"), "'it''s'"),
    (Column(name='c', type='timestamp', default='current_timestamp'), 'CURRENT_TIMESTAMP'),
    (Column(name='c', type='boolean', default='true'), 'TRUE'),
    (Column(name='c', type='uuid', default='gen_random_uuid()'), 'gen_random_uuid()'),
    (Column(name='c', type='text', default="'x'::text"), "'x'::text"),
    (Column(name='c', type='varchar', default="'quoted'"), "'quoted'"),
    (Column(name='c', type='int'), None),
])
def test_render_default(column, expected):
    assert PostgresDialect().render_default(column) == expected


def test_mysql_not_null_default_order():
    column = Column(name='total', type='decimal', nullable=False, default='0.00',
                    column_type='decimal(10,2)')
    assert MySqlDialect().render_column(column) == '`total` DECIMAL(10,2) NOT NULL DEFAULT 0.00'


@pytest.mark.parametrize('dialect, native_type, expected', [
    (MySqlDialect(), 'jsonb', 'JSON'),
    (MySqlDialect(), 'timestamp without time zone', 'DATETIME'),
    (MySqlDialect(), 'bytea', 'LONGBLOB'),
    (MySqlDialect(), 'int4', 'INT'),
    # Neither native nor listed: chosen from the logical type
    (MySqlDialect(), 'timestamp(3) with local time zone', 'DATETIME'),
    (PostgresDialect(), 'datetime', 'TIMESTAMP'),
    (PostgresDialect(), 'double', 'DOUBLE PRECISION'),
    (PostgresDialect(), 'tinyint(1)', 'SMALLINT'),
    (PostgresDialect(), 'longblob', 'BYTEA'),
    (PostgresDialect(), 'int unsigned', None),
    (MySqlDialect(), 'varchar', None),
    (PostgresDialect(), 'jsonb', None),
    (SqliteDialect(), 'USER-DEFINED', 'TEXT'),
    (SqliteDialect(), 'jsonb', None),
])
def test_translate_type(dialect, native_type, expected):
    assert dialect.translate_type(native_type) == expected


def test_untranslatable_type_is_kept(caplog):
    with caplog.at_level('WARNING'):
        rendered = MySqlDialect().render_type(Column(name='doc', type='tsvector'))

    assert rendered == 'TSVECTOR'
    assert "No MySQL equivalent for type 'tsvector'" in caplog.text


def test_mysql_translated_sizes():
    dialect = MySqlDialect()
    assert dialect.render_type(Column(name='e', type='character varying', length=40)) == \
        'VARCHAR(40)'
    assert dialect.render_type(Column(name='e', type='character varying')) == 'TEXT'
    assert dialect.render_type(Column(name='u', type='uuid')) == 'CHAR(36)'
    # A foreign column_type does not win over the translation
    assert dialect.render_type(Column(name='t', type='timestamp with time zone',
                                      column_type='timestamptz')) == 'DATETIME'


@pytest.mark.parametrize('dialect, expected', [
    (MySqlDialect(), "'open'"),
    (SqliteDialect(), "'open'"),
    (PostgresDialect(), "'open'::account_state"),
])
def test_cast_removed_outside_postgres(dialect, expected):
    column = Column(name='state', type='USER-DEFINED', udt_name='account_state',
                    default="'open'::account_state")
    assert dialect.render_default(column) == expected
