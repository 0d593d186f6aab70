"""PostgreSQL -> MySQL column type and default translation.

TYPE_MAP enumerates every source type the migrator knows. Anything else
maps to FALLBACK_TYPE and is reported, so unknown types are visible in
the migration log instead of silently becoming text.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from orbit.models.domain import ColumnInfo

logger = logging.getLogger(__name__)

FALLBACK_TYPE = "TEXT"

# Unconstrained PostgreSQL numeric has no MySQL equivalent
UNCONSTRAINED_DECIMAL = "DECIMAL(18,4)"

DEFAULT_VARCHAR_LENGTH = 255

TYPE_MAP: dict[str, str] = {
    "smallint": "SMALLINT",
    "integer": "INT",
    "bigint": "BIGINT",
    "real": "FLOAT",
    "double precision": "DOUBLE",
    "numeric": "DECIMAL",
    "money": "DECIMAL(19,2)",
    "boolean": "TINYINT(1)",
    "text": "LONGTEXT",
    "character varying": "VARCHAR",
    "character": "CHAR",
    "uuid": "CHAR(36)",
    "inet": "VARCHAR(45)",
    "date": "DATE",
    "time without time zone": "TIME",
    "time with time zone": "TIME",
    "timestamp without time zone": "DATETIME",
    "timestamp with time zone": "DATETIME",
    "json": "JSON",
    "jsonb": "JSON",
    "ARRAY": "JSON",
    "bytea": "LONGBLOB",
}

INTEGER_TYPES = frozenset({"SMALLINT", "INT", "BIGINT"})

# MySQL only accepts expression defaults, "(...)", on these
_EXPRESSION_DEFAULT_TYPES = ("TEXT", "LONGTEXT", "JSON", "LONGBLOB", "BLOB")

_CAST_SUFFIX = re.compile(r"::[A-Za-z_][\w ]*(\[\])?(\(\d+(,\s*\d+)?\))?$")
_NUMBER = re.compile(r"^-?\d+(\.\d+)?$")


@dataclass(frozen=True)
class TypeTranslation:
    """Result of translating one column type."""

    target_type: str
    fallback: bool = False


def translate_type(column: ColumnInfo) -> TypeTranslation:
    """Translate a source column type to a MySQL column type.

    Args:
        column: Introspected source column.

    Returns:
        TypeTranslation; fallback is True when the type was not in TYPE_MAP.
    """
    base = TYPE_MAP.get(column.data_type)
    if base is None:
        logger.warning(
            "No mapping for type %r of column %s, using %s",
            column.data_type,
            column.name,
            FALLBACK_TYPE,
        )
        return TypeTranslation(FALLBACK_TYPE, fallback=True)

    if base == "VARCHAR":
        return TypeTranslation(f"VARCHAR({column.character_maximum_length or DEFAULT_VARCHAR_LENGTH})")
    if base == "CHAR":
        return TypeTranslation(f"CHAR({column.character_maximum_length or 1})")
    if base == "DECIMAL":
        if column.numeric_precision:
            return TypeTranslation(
                f"DECIMAL({column.numeric_precision},{column.numeric_scale or 0})"
            )
        return TypeTranslation(UNCONSTRAINED_DECIMAL)
    return TypeTranslation(base)


def is_integer_column(column: ColumnInfo) -> bool:
    """True when the column translates to a MySQL integer type."""
    return translate_type(column).target_type in INTEGER_TYPES


def _strip_casts(expression: str) -> str:
    """Remove trailing ::type casts and wrapping parentheses."""
    value = expression.strip()
    while True:
        stripped = _CAST_SUFFIX.sub("", value).strip()
        if stripped.startswith("(") and stripped.endswith(")"):
            stripped = stripped[1:-1].strip()
        if stripped == value:
            return value
        value = stripped


def _quote(literal: str) -> str:
    return "'" + literal.replace("\\", "\\\\").replace("'", "''") + "'"


def translate_default(column: ColumnInfo, target_type: str) -> str | None:
    """Translate a source default expression to a MySQL DEFAULT clause body.

    Args:
        column: Introspected source column.
        target_type: The column's translated MySQL type.

    Returns:
        Text to place after DEFAULT, or None for no default clause.
    """
    if column.default is None or column.is_sequence_derived:
        return None

    value = _strip_casts(column.default)
    lowered = value.lower()

    # MySQL rejects CURRENT_TIMESTAMP as a DATE default
    if lowered in ("now()", "current_timestamp", "localtimestamp"):
        return "(CURRENT_DATE)" if target_type == "DATE" else "CURRENT_TIMESTAMP"
    if lowered == "current_date":
        return "(CURRENT_DATE)"
    if lowered in ("gen_random_uuid()", "uuid_generate_v4()"):
        return "(UUID())"
    if lowered == "null":
        return None
    if lowered in ("true", "'true'"):
        return "1"
    if lowered in ("false", "'false'"):
        return "0"

    if len(value) >= 2 and value.startswith("'") and value.endswith("'"):
        literal = value[1:-1].replace("''", "'")
    elif _NUMBER.match(value):
        literal = value
    else:
        logger.warning(
            "Dropping unsupported default %r on column %s", column.default, column.name
        )
        return None

    quoted = _quote(literal)
    if target_type.startswith(_EXPRESSION_DEFAULT_TYPES):
        return f"({quoted})"
    return quoted
