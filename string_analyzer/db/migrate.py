"""Schema migrations for the `strings` table.

Each `.sql` file under `string_analyzer/db/migrations/` runs once, in filename order, inside its
own transaction. The `schema_migrations` ledger records which files have run, so `string-analyzer-
migrate` is safe to repeat. `--recreate` drops the table and the ledger first.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import LiteralString, cast

import psycopg

from string_analyzer.config.logging import configure_logging
from string_analyzer.config.settings import Settings, load_settings

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"

_LEDGER_DDL = (
    "CREATE TABLE IF NOT EXISTS schema_migrations "
    "(filename TEXT PRIMARY KEY, applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW())"
)
_DROP_ALL = "DROP TABLE IF EXISTS strings; DROP TABLE IF EXISTS schema_migrations;"

logger = logging.getLogger(__name__)


def open_connection(database_url: str) -> psycopg.Connection:
    """Open an autocommit connection with the session pinned to UTC.

    `apply_migrations` opens an explicit transaction per file.
    """

    return psycopg.connect(database_url, autocommit=True, options="-c TimeZone=UTC")


def migration_files(directory: Path = MIGRATIONS_DIR) -> list[Path]:
    files = sorted(directory.glob("*.sql"))
    if not files:
        raise RuntimeError(f"no migrations found in {directory}")
    return files


def apply_migrations(conn: psycopg.Connection, *, recreate: bool = False) -> list[str]:
    """Run every migration not yet in the ledger and return the names of those applied."""

    if recreate:
        logger.warning("recreate requested: dropping strings and schema_migrations")
        conn.execute(_DROP_ALL, prepare=False)
    conn.execute(_LEDGER_DDL, prepare=False)

    done = {row[0] for row in conn.execute("SELECT filename FROM schema_migrations").fetchall()}
    pending = [path for path in migration_files() if path.name not in done]

    for path in pending:
        with conn.transaction():
            conn.execute(cast(LiteralString, path.read_text(encoding="utf-8")), prepare=False)
            conn.execute("INSERT INTO schema_migrations (filename) VALUES (%s)", (path.name,))
        logger.info("applied migration %s", path.name)

    return [path.name for path in pending]


def migrate(settings: Settings, *, recreate: bool = False) -> list[str]:
    with open_connection(settings.database_url) as conn:
        return apply_migrations(conn, recreate=recreate)


def main() -> None:
    """CLI entry point for applying migrations."""

    parser = argparse.ArgumentParser(description="Create or upgrade the string analyzer schema.")
    parser.add_argument(
        "--recreate",
        action="store_true",
        help="Drop the strings table and re-apply every migration (destructive).",
    )
    args = parser.parse_args()

    settings = load_settings()
    configure_logging(settings.log_level)
    if not migrate(settings, recreate=args.recreate):
        logger.info("schema is up to date")


if __name__ == "__main__":
    main()
