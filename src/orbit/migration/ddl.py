"""MySQL DDL generation from introspected source tables."""

from __future__ import annotations

from orbit.migration.types import INTEGER_TYPES, translate_default, translate_type
from orbit.models.domain import ColumnInfo, TableSchema

TABLE_OPTIONS = "ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_ci"


def quote_identifier(name: str) -> str:
    """Quote a MySQL identifier with backticks."""
    return "`" + name.replace("`", "``") + "`"


def column_definition(column: ColumnInfo, auto_increment: bool = False) -> str:
    """Render one column clause of a CREATE TABLE statement.

    Args:
        column: Introspected source column.
        auto_increment: Mark the column AUTO_INCREMENT (implies NOT NULL, no default).

    Returns:
        Column clause such as "`name` VARCHAR(255) NOT NULL DEFAULT 'x'".
    """
    target_type = translate_type(column).target_type
    parts = [quote_identifier(column.name), target_type]

    if auto_increment:
        parts.extend(["NOT NULL", "AUTO_INCREMENT"])
        return " ".join(parts)

    parts.append("NULL" if column.is_nullable else "NOT NULL")
    default = translate_default(column, target_type)
    if default is not None:
        parts.append(f"DEFAULT {default}")
    return " ".join(parts)


def build_create_table(table: TableSchema) -> str:
    """Render CREATE TABLE for a source table.

    The primary key column is AUTO_INCREMENT when the source generated it
    from a sequence and it translates to an integer type.

    Args:
        table: Introspected source table.

    Returns:
        CREATE TABLE statement (no trailing semicolon).
    """
    identity = table.identity_column
    if identity is not None and translate_type(identity).target_type not in INTEGER_TYPES:
        identity = None

    clauses = [
        column_definition(col, auto_increment=identity is not None and col.name == identity.name)
        for col in table.columns
    ]
    if table.primary_key:
        keys = ", ".join(quote_identifier(name) for name in table.primary_key)
        clauses.append(f"PRIMARY KEY ({keys})")

    body = ",\n  ".join(clauses)
    return f"CREATE TABLE {quote_identifier(table.name)} (\n  {body}\n) {TABLE_OPTIONS}"


def build_drop_table(name: str) -> str:
    """Render DROP TABLE IF EXISTS for a table."""
    return f"DROP TABLE IF EXISTS {quote_identifier(name)}"
