#!/usr/bin/env python3
"""
Database Schema Export

Exports table metadata from a SQLite database or a previous JSON export as
SQL DDL (MySQL, PostgreSQL, SQLite) or versioned JSON.

Usage:
    python export_schema.py --sqlite app.db --all
    python export_schema.py --sqlite app.db --tables users,orders --format json --pretty
    python export_schema.py --snapshot schema.json --driver mysql --all -o schema.sql
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from dbschema_export.cli import main


if __name__ == "__main__":
    sys.exit(main())
