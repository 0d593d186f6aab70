"""Command-line entry point for the PostgreSQL -> MySQL migration.

Usage:
    orbit-migrate [--tables users courses ...] [--batch-size N]
                  [--log-file PATH] [--dry-run] [--verbose]

Exit codes:
    0: Every table migrated
    1: One or more tables failed, or the run was aborted
    2: Required configuration is missing
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from sqlalchemy import create_engine

from orbit.config import get_config, normalize_url, require_source_url, require_target_url
from orbit.errors import ConfigError, DependencyGraphError, MigrationAbortedError
from orbit.migration.migrator import Migrator
from orbit.migration.source import PostgresSource
from orbit.migration.tables import TABLE_DEPENDENCIES
from orbit.migration.target import MySqlTarget

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="orbit-migrate",
        description="Copy the institute database from PostgreSQL to MySQL",
    )
    parser.add_argument(
        "--tables",
        nargs="+",
        metavar="TABLE",
        help=f"Tables to migrate (default: all {len(TABLE_DEPENDENCIES)} known tables)",
    )
    parser.add_argument("--batch-size", type=int, help="Rows per INSERT (default: MIGRATION_BATCH_SIZE or 100)")
    parser.add_argument("--log-file", type=Path, help="Audit log path (default: MIGRATION_LOG_FILE or migration_log.txt)")
    parser.add_argument("--dry-run", action="store_true", help="Log the DDL without touching the target")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def configure_logging(log_file: Path, verbose: bool = False) -> None:
    """Send log records to stderr and to the audit log file."""
    formatter = logging.Formatter(LOG_FORMAT)
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    file_handler = logging.FileHandler(log_file, mode="w")
    file_handler.setFormatter(formatter)

    root.addHandler(stream_handler)
    root.addHandler(file_handler)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = get_config(reload=True)
        source_url = require_source_url(config)
        target_url = None if args.dry_run else require_target_url(config)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    batch_size = args.batch_size if args.batch_size is not None else config.migration_batch_size
    if batch_size < 1:
        print(f"Configuration error: --batch-size must be positive, got {batch_size}", file=sys.stderr)
        return 2

    configure_logging(args.log_file or config.migration_log_path, args.verbose)

    source_engine = create_engine(normalize_url(source_url), pool_pre_ping=True)
    target_engine = create_engine(normalize_url(target_url), pool_pre_ping=True) if target_url else None
    try:
        migrator = Migrator(
            PostgresSource(source_engine),
            MySqlTarget(target_engine) if target_engine is not None else None,
            batch_size=batch_size,
            dry_run=args.dry_run,
        )
        report = migrator.run(args.tables)
    except (DependencyGraphError, MigrationAbortedError) as e:
        logger.error("Migration aborted: %s", e)
        return 1
    finally:
        source_engine.dispose()
        if target_engine is not None:
            target_engine.dispose()

    logger.info(
        "%d of %d tables migrated, %d rows",
        len(report.tables) - len(report.failed),
        len(report.tables),
        report.total_rows,
    )
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
