"""Table-by-table PostgreSQL -> MySQL migration.

Tables are processed in dependency order. Each table is dropped and
recreated on the target, then copied in batches of multi-row INSERTs.
A failure inside one table is recorded in the report and the run moves
on to the next table; only an unreachable database aborts the run.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator

from orbit.config import DEFAULT_BATCH_SIZE
from orbit.errors import MigrationAbortedError, TableNotFoundError
from orbit.migration.ddl import build_create_table
from orbit.migration.source import SourceDatabase
from orbit.migration.tables import migration_order
from orbit.migration.target import TargetDatabase
from orbit.migration.types import is_integer_column
from orbit.models.domain import MigrationReport, TableResult, TableSchema

logger = logging.getLogger(__name__)


def batched(rows: list[dict[str, Any]], size: int) -> Iterator[list[dict[str, Any]]]:
    """Yield consecutive slices of at most size rows."""
    for offset in range(0, len(rows), size):
        yield rows[offset : offset + size]


class Migrator:
    """Copies tables from a source database to a target database."""

    def __init__(
        self,
        source: SourceDatabase,
        target: TargetDatabase | None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        dry_run: bool = False,
    ):
        """Initialize migrator.

        Args:
            source: Database to read from.
            target: Database to write to. May be None for a dry run.
            batch_size: Rows per INSERT statement.
            dry_run: Only log the DDL that would be executed.
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        if target is None and not dry_run:
            raise ValueError("a target database is required unless dry_run is set")
        self.source = source
        self.target = target
        self.batch_size = batch_size
        self.dry_run = dry_run

    def run(self, tables: Iterable[str] | None = None) -> MigrationReport:
        """Migrate tables in dependency order.

        Args:
            tables: Subset of tables to migrate. Defaults to all known tables.

        Returns:
            MigrationReport with one TableResult per table.

        Raises:
            DependencyGraphError: If tables names an unknown table.
            MigrationAbortedError: If a database cannot be reached.
        """
        order = migration_order(tables)
        self._check_connections()

        report = MigrationReport(dry_run=self.dry_run)
        logger.info("Starting migration of %d tables%s", len(order), " (dry run)" if self.dry_run else "")
        for name in order:
            report.tables.append(self.migrate_table(name))

        logger.info("Migration complete! Total rows migrated: %d", report.total_rows)
        for result in report.failed:
            logger.error("Table %s failed: %s", result.table, result.error)
        return report

    def migrate_table(self, name: str) -> TableResult:
        """Migrate one table, recording any failure in the result."""
        result = TableResult(table=name)
        logger.info("--- Migrating table: %s ---", name)
        try:
            schema = self.source.describe_table(name)
            if not schema.columns:
                raise TableNotFoundError(f"table {name} does not exist in the source database")

            if self.dry_run:
                logger.info("Would execute:\n%s", build_create_table(schema))
                return result

            self.target.recreate_table(schema)
            logger.info("Created table %s", name)

            rows = self.source.fetch_rows(schema)
            if not rows:
                logger.info("No data to migrate for table %s", name)
                return result

            columns = [col.name for col in schema.columns]
            for batch in batched(rows, self.batch_size):
                self.target.insert_batch(name, columns, batch)
                result.batches += 1
                result.rows += len(batch)
            logger.info("Migrated %d rows to %s in %d batches", result.rows, name, result.batches)

            result.auto_increment = self._advance_auto_increment(schema)
        except Exception as e:
            logger.exception("Error migrating table %s", name)
            result.error = str(e)
        return result

    def _check_connections(self) -> None:
        """Ping both databases before any table is touched."""
        try:
            self.source.ping()
        except Exception as e:
            raise MigrationAbortedError(f"cannot connect to source database: {e}") from e
        logger.info("Connected to source database")

        if self.dry_run:
            return
        try:
            self.target.ping()
        except Exception as e:
            raise MigrationAbortedError(f"cannot connect to target database: {e}") from e
        logger.info("Connected to target database")

    def _advance_auto_increment(self, schema: TableSchema) -> int | None:
        """Move the target's next identity past the largest copied key.

        Only applies to a single-column integer primary key.

        Returns:
            The AUTO_INCREMENT value set, or None if not applicable.
        """
        if len(schema.primary_key) != 1:
            return None
        key = schema.column(schema.primary_key[0])
        if key is None or not is_integer_column(key):
            return None

        max_id = self.target.max_value(schema.name, key.name)
        if max_id is None or int(max_id) < 1:
            return None

        next_id = int(max_id) + 1
        self.target.set_auto_increment(schema.name, next_id)
        logger.info("Set AUTO_INCREMENT for %s to %d", schema.name, next_id)
        return next_id
