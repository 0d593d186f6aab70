"""Migration target interface and the MySQL implementation."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any

from sqlalchemy import Engine, column, func, insert, select, table, text

from orbit.migration.ddl import build_create_table, build_drop_table, quote_identifier
from orbit.models.domain import TableSchema

logger = logging.getLogger(__name__)


def to_target_value(value: Any) -> Any:
    """Convert a source value into something the MySQL driver can bind.

    Structured values (json/jsonb documents, arrays) are stored as JSON text.
    """
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, default=str)
    if isinstance(value, memoryview):
        return value.tobytes()
    return value


class TargetDatabase(ABC):
    """Abstract base class for migration targets."""

    @abstractmethod
    def ping(self) -> None:
        """Check connectivity. Raises on failure."""

    @abstractmethod
    def recreate_table(self, schema: TableSchema) -> None:
        """Drop the table if present and create it from schema."""

    @abstractmethod
    def insert_batch(self, name: str, columns: list[str], rows: list[dict[str, Any]]) -> None:
        """Insert rows with a single multi-row INSERT."""

    @abstractmethod
    def max_value(self, name: str, column_name: str) -> Any:
        """Return MAX(column) of a table, or None when it is empty."""

    @abstractmethod
    def set_auto_increment(self, name: str, value: int) -> None:
        """Set the next AUTO_INCREMENT value of a table."""


class MySqlTarget(TargetDatabase):
    """Writes migrated tables into a MySQL database."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def ping(self) -> None:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def _driver_sql(self, statement: str) -> str:
        """Escape literal percent signs for format-style DBAPI drivers.

        exec_driver_sql still hands the driver a parameter set, so PyMySQL
        runs statement % params and a bare % in a default would raise.
        """
        if self.engine.dialect.paramstyle in ("format", "pyformat"):
            return statement.replace("%", "%%")
        return statement

    def recreate_statements(self, schema: TableSchema) -> list[str]:
        """Driver-ready statements that drop and recreate a table."""
        return [
            self._driver_sql(statement)
            for statement in (
                "SET FOREIGN_KEY_CHECKS = 0",
                build_drop_table(schema.name),
                build_create_table(schema),
                "SET FOREIGN_KEY_CHECKS = 1",
            )
        ]

    def auto_increment_statement(self, name: str, value: int) -> str:
        return self._driver_sql(f"ALTER TABLE {quote_identifier(name)} AUTO_INCREMENT = {int(value)}")

    def recreate_table(self, schema: TableSchema) -> None:
        statements = self.recreate_statements(schema)
        logger.debug("Creating table %s:\n%s", schema.name, build_create_table(schema))
        with self.engine.begin() as conn:
            for statement in statements:
                conn.exec_driver_sql(statement)

    def insert_batch(self, name: str, columns: list[str], rows: list[dict[str, Any]]) -> None:
        if not rows:
            return
        target = table(name, *[column(c) for c in columns])
        values = [{c: to_target_value(row.get(c)) for c in columns} for row in rows]
        with self.engine.begin() as conn:
            conn.execute(insert(target).values(values))

    def max_value(self, name: str, column_name: str) -> Any:
        stmt = select(func.max(column(column_name))).select_from(table(name))
        with self.engine.connect() as conn:
            return conn.execute(stmt).scalar()

    def set_auto_increment(self, name: str, value: int) -> None:
        with self.engine.begin() as conn:
            conn.exec_driver_sql(self.auto_increment_statement(name, value))
