"""Migration source interface and the PostgreSQL implementation.

Sources only read: they describe tables and return their rows. They
never write and never decide what gets migrated.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from sqlalchemy import Engine, column, literal_column, select, table, text
from sqlalchemy.sql import Select

from orbit.models.domain import ColumnInfo, TableSchema


class SourceDatabase(ABC):
    """Abstract base class for migration sources."""

    @abstractmethod
    def ping(self) -> None:
        """Check connectivity. Raises on failure."""

    @abstractmethod
    def describe_table(self, name: str) -> TableSchema:
        """Introspect a table.

        Args:
            name: Table name.

        Returns:
            TableSchema; columns is empty when the table does not exist.
        """

    @abstractmethod
    def fetch_rows(self, schema: TableSchema) -> list[dict[str, Any]]:
        """Read every row of a table, ordered by primary key when it has one."""


_COLUMNS_SQL = text(
    """
    SELECT column_name, data_type, is_nullable, column_default,
           character_maximum_length, numeric_precision, numeric_scale, is_identity
    FROM information_schema.columns
    WHERE table_schema = :schema AND table_name = :table
    ORDER BY ordinal_position
    """
)

_PRIMARY_KEY_SQL = text(
    """
    SELECT a.attname
    FROM pg_index i
    JOIN pg_attribute a ON a.attrelid = i.indrelid AND a.attnum = ANY(i.indkey)
    WHERE i.indrelid = CAST(:qualified AS regclass) AND i.indisprimary
    ORDER BY array_position(CAST(i.indkey AS int2[]), a.attnum)
    """
)


class PostgresSource(SourceDatabase):
    """Reads tables from a PostgreSQL database via information_schema."""

    def __init__(self, engine: Engine, schema: str = "public"):
        self.engine = engine
        self.schema = schema

    def ping(self) -> None:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def describe_table(self, name: str) -> TableSchema:
        with self.engine.connect() as conn:
            rows = conn.execute(_COLUMNS_SQL, {"schema": self.schema, "table": name}).all()
            if not rows:
                return TableSchema(name=name, columns=[])
            primary_key = conn.execute(
                _PRIMARY_KEY_SQL, {"qualified": f'"{self.schema}"."{name}"'}
            ).scalars().all()

        columns = [
            ColumnInfo(
                name=row.column_name,
                data_type=row.data_type,
                is_nullable=row.is_nullable == "YES",
                default=row.column_default,
                character_maximum_length=row.character_maximum_length,
                numeric_precision=row.numeric_precision,
                numeric_scale=row.numeric_scale,
                is_identity=row.is_identity == "YES",
            )
            for row in rows
        ]
        return TableSchema(name=name, columns=columns, primary_key=list(primary_key))

    def rows_query(self, schema: TableSchema) -> Select:
        """SELECT * for a table, ordered by its primary key when it has one."""
        stmt = select(literal_column("*")).select_from(table(schema.name, schema=self.schema))
        if schema.primary_key:
            stmt = stmt.order_by(*[column(name) for name in schema.primary_key])
        return stmt

    def fetch_rows(self, schema: TableSchema) -> list[dict[str, Any]]:
        with self.engine.connect() as conn:
            return [dict(row) for row in conn.execute(self.rows_query(schema)).mappings()]
