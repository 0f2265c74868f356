"""
Schema Export CLI

Usage:
    dbschema-export --sqlite app.db --all
    dbschema-export --sqlite app.db --tables users,orders --output schema.sql
    dbschema-export --sqlite app.db --all --format json --pretty
    dbschema-export --snapshot schema.json --driver pgsql --all
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import get_config
from .errors import SchemaExportError
from .exporter import DbSchemaExporter
from .exporters.ddl import SUPPORTED_DRIVERS
from .schema.reader import InMemorySchemaReader, SchemaReader
from .schema.sqlite_reader import SqliteSchemaReader

logger = logging.getLogger(__name__)

FORMATS = ('sql', 'json')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='dbschema-export',
        description='Export database table metadata as SQL DDL or JSON',
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--sqlite', metavar='PATH', help='SQLite database to introspect')
    source.add_argument('--snapshot', metavar='FILE',
                        help='Previous JSON/YAML export to re-render')

    parser.add_argument('--driver', choices=SUPPORTED_DRIVERS,
                        help='Driver to render the snapshot for (required with --snapshot)')

    tables = parser.add_mutually_exclusive_group(required=True)
    tables.add_argument('--tables', help='Comma-separated table names, in creation order')
    tables.add_argument('--all', action='store_true', help='Export every table of the source')

    parser.add_argument('--format', choices=FORMATS, default=None,
                        help='Output format (default: from config, else sql)')
    parser.add_argument('--pretty', action='store_true', default=None,
                        help='Pretty-print JSON output')
    parser.add_argument('--output', '-o', metavar='FILE', help='Write to file instead of stdout')
    parser.add_argument('--config', metavar='FILE', help='Configuration file (YAML)')
    parser.add_argument('--debug', action='store_true', help='Debug logging and tracebacks')
    return parser


def _open_reader(args: argparse.Namespace) -> SchemaReader:
    if args.sqlite:
        if not Path(args.sqlite).exists():
            raise FileNotFoundError(f"Database not found: {args.sqlite}")
        return SqliteSchemaReader(args.sqlite)
    return InMemorySchemaReader.from_file(args.snapshot, args.driver)


def _table_list(args: argparse.Namespace, reader: SchemaReader) -> List[str]:
    if args.all:
        return reader.table_names()
    return [t.strip() for t in args.tables.split(',') if t.strip()]


def run(args: argparse.Namespace) -> str:
    """Run one export and return the rendered text."""
    export_config = get_config().export
    output_format = args.format or export_config.get('format', 'sql')
    pretty = args.pretty if args.pretty is not None else export_config.get('pretty_print', False)

    reader = _open_reader(args)
    try:
        tables = _table_list(args, reader)
        logger.info(f"Exporting {len(tables)} tables as {output_format}")

        exporter = DbSchemaExporter(reader, indent=export_config.get('indent', 4))
        if output_format == 'json':
            return exporter.to_json(tables, pretty_print=pretty)
        return exporter.to_sql(tables)
    finally:
        if isinstance(reader, SqliteSchemaReader):
            reader.close()


def _log_level(value) -> int:
    """Resolve a configured log level given as a name in any case or a number."""
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value).strip().upper())
    if isinstance(level, int):
        return level
    print(f"⚠️  Unknown log level '{value}' in config, using INFO", file=sys.stderr)
    return logging.INFO


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.snapshot and not args.driver:
        parser.error('--driver is required with --snapshot')
    if args.sqlite and args.driver:
        parser.error('--driver only applies to --snapshot; SQLite sources are always sqlite')

    config = get_config()
    if args.config:
        config.reload(Path(args.config))

    level = logging.DEBUG if args.debug else _log_level(config.logging_config.get('level', 'INFO'))
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')

    try:
        text = run(args)
    except (SchemaExportError, FileNotFoundError) as e:
        print(f"❌ Export failed: {e}", file=sys.stderr)
        if args.debug:
            import traceback
            traceback.print_exc()
        return 1

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text + '\n', encoding='utf-8')
        print(f"📄 Schema exported to: {output_path}", file=sys.stderr)
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
