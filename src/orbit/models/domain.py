"""Domain models for Orbit.

Pure Python dataclasses representing domain entities.
These models are independent of SQLAlchemy and used throughout
the application for clean separation from the database layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal


# ============================================================================
# Reporting Periods
# ============================================================================


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar-date range used to narrow analytics queries."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"start {self.start} is after end {self.end}")


@dataclass(frozen=True)
class MonthWindow:
    """One calendar month, from its first to its last instant."""

    start: datetime
    end: datetime


# ============================================================================
# Institute Domain
# ============================================================================


@dataclass
class CourseEntity:
    """Domain model for a course."""

    id: int
    name: str
    description: str
    fee: Decimal


@dataclass
class StudentEntity:
    """Domain model for a student as listed on the dashboard."""

    id: int
    student_id: str
    first_name: str
    last_name: str
    email: str
    phone_no: str
    nationality: str | None
    class_type: str | None
    registration_date: datetime
    payment_status: str | None


# ============================================================================
# Migration Domain
# ============================================================================


@dataclass(frozen=True)
class ColumnInfo:
    """One source column as reported by information_schema.columns."""

    name: str
    data_type: str
    is_nullable: bool = True
    default: str | None = None
    character_maximum_length: int | None = None
    numeric_precision: int | None = None
    numeric_scale: int | None = None
    is_identity: bool = False

    @property
    def is_sequence_derived(self) -> bool:
        """True when the source assigns values from a sequence."""
        return self.is_identity or "nextval(" in (self.default or "")


@dataclass(frozen=True)
class TableSchema:
    """Introspected source table: ordered columns plus primary key."""

    name: str
    columns: list[ColumnInfo]
    primary_key: list[str] = field(default_factory=list)

    def column(self, name: str) -> ColumnInfo | None:
        """Look up a column by name."""
        for col in self.columns:
            if col.name == name:
                return col
        return None

    @property
    def identity_column(self) -> ColumnInfo | None:
        """Single-column primary key whose values the source generated."""
        if len(self.primary_key) != 1:
            return None
        col = self.column(self.primary_key[0])
        if col is not None and col.is_sequence_derived:
            return col
        return None


@dataclass
class TableResult:
    """Outcome of migrating one table."""

    table: str
    rows: int = 0
    batches: int = 0
    auto_increment: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class MigrationReport:
    """Outcome of a migration run."""

    tables: list[TableResult] = field(default_factory=list)
    dry_run: bool = False

    @property
    def total_rows(self) -> int:
        return sum(t.rows for t in self.tables)

    @property
    def failed(self) -> list[TableResult]:
        return [t for t in self.tables if not t.ok]

    @property
    def ok(self) -> bool:
        return not self.failed
