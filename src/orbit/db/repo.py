"""Repository pattern for database operations.

Encapsulates all SQLAlchemy queries, keeping analytics logic pure.
Returns domain models or plain tuples (not SQLAlchemy entities) to
external callers.
"""

from __future__ import annotations

from datetime import datetime, time
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from sqlalchemy import func, select
from sqlalchemy.orm import InstrumentedAttribute, Session
from sqlalchemy.sql import Select

from orbit.db.schema import (
    Course,
    FollowUp,
    Invoice,
    Lead,
    RegistrationCourse,
    Schedule,
    Student,
)
from orbit.models.domain import CourseEntity, DateRange, StudentEntity

if TYPE_CHECKING:
    from sqlalchemy.orm import Session as DbSession
else:
    DbSession = Session

# Re-export for external use
__all__ = ["DbSession"]


# ============================================================================
# Converters: SQLAlchemy -> Domain
# ============================================================================


def _course_to_entity(course: Course) -> CourseEntity:
    """Convert SQLAlchemy Course to domain entity."""
    return CourseEntity(
        id=course.id,
        name=course.name,
        description=course.description,
        fee=course.fee,
    )


def _student_to_entity(student: Student) -> StudentEntity:
    """Convert SQLAlchemy Student to domain entity."""
    return StudentEntity(
        id=student.id,
        student_id=student.student_id,
        first_name=student.first_name,
        last_name=student.last_name,
        email=student.email,
        phone_no=student.phone_no,
        nationality=student.nationality,
        class_type=student.class_type,
        registration_date=student.registration_date,
        payment_status=student.payment_status,
    )


# ============================================================================
# Query helpers
# ============================================================================


def _within(stmt: Select, column: InstrumentedAttribute, date_range: DateRange | None) -> Select:
    """Restrict stmt to rows whose column falls inside date_range (inclusive)."""
    if date_range is None:
        return stmt
    return stmt.where(
        column >= datetime.combine(date_range.start, time.min),
        column <= datetime.combine(date_range.end, time.max),
    )


def count_rows(
    session: DbSession,
    model: type,
    date_column: InstrumentedAttribute | None = None,
    date_range: DateRange | None = None,
) -> int:
    """Count rows of a table, optionally inside a date range."""
    stmt = select(func.count()).select_from(model)
    if date_column is not None:
        stmt = _within(stmt, date_column, date_range)
    return session.execute(stmt).scalar_one()


def count_grouped(
    session: DbSession,
    column: InstrumentedAttribute,
    *,
    date_column: InstrumentedAttribute | None = None,
    date_range: DateRange | None = None,
    exclude_null: bool = True,
    order_by_count: bool = False,
    limit: int | None = None,
) -> list[tuple[Any, int]]:
    """Count rows per distinct value of column.

    Args:
        session: Database session.
        column: Column to group by.
        date_column: Column the optional date range applies to.
        date_range: Optional inclusive date range.
        exclude_null: Drop the NULL group.
        order_by_count: Order groups by count descending (ties by value).
        limit: Keep only the first N groups.

    Returns:
        List of (value, count) tuples.
    """
    stmt = select(column, func.count()).group_by(column)
    if exclude_null:
        stmt = stmt.where(column.is_not(None))
    if date_column is not None:
        stmt = _within(stmt, date_column, date_range)
    if order_by_count:
        stmt = stmt.order_by(func.count().desc(), column)
    if limit is not None:
        stmt = stmt.limit(limit)
    return [(value, count) for value, count in session.execute(stmt).all()]


# ============================================================================
# Student Repository
# ============================================================================


def count_students_registered_between(
    session: DbSession, start: datetime, end: datetime
) -> int:
    """Count students whose registration date lies in [start, end]."""
    stmt = (
        select(func.count())
        .select_from(Student)
        .where(Student.registration_date >= start, Student.registration_date <= end)
    )
    return session.execute(stmt).scalar_one()


def get_recent_students(
    session: DbSession, limit: int = 5, date_range: DateRange | None = None
) -> list[StudentEntity]:
    """Get the most recently registered students."""
    stmt = select(Student).order_by(Student.registration_date.desc(), Student.id.desc())
    stmt = _within(stmt, Student.registration_date, date_range).limit(limit)
    return [_student_to_entity(s) for s in session.execute(stmt).scalars()]


# ============================================================================
# Course Repository
# ============================================================================


def get_courses_by_ids(session: DbSession, course_ids: list[int]) -> dict[int, CourseEntity]:
    """Get courses keyed by id in a single query."""
    if not course_ids:
        return {}
    stmt = select(Course).where(Course.id.in_(set(course_ids)))
    return {c.id: _course_to_entity(c) for c in session.execute(stmt).scalars()}


def get_enrollment_counts(
    session: DbSession, limit: int | None = None, date_range: DateRange | None = None
) -> list[tuple[int, int]]:
    """Get (course_id, enrollments) ordered by enrollments descending."""
    return count_grouped(
        session,
        RegistrationCourse.course_id,
        date_column=RegistrationCourse.created_at,
        date_range=date_range,
        order_by_count=True,
        limit=limit,
    )


def get_course_revenue_totals(
    session: DbSession, limit: int | None = None, date_range: DateRange | None = None
) -> list[tuple[int, Decimal]]:
    """Get (course_id, summed registration price) ordered by total descending."""
    total = func.sum(RegistrationCourse.price)
    stmt = (
        select(RegistrationCourse.course_id, total)
        .group_by(RegistrationCourse.course_id)
        .order_by(total.desc(), RegistrationCourse.course_id)
    )
    stmt = _within(stmt, RegistrationCourse.created_at, date_range)
    if limit is not None:
        stmt = stmt.limit(limit)
    return [(course_id, amount or Decimal(0)) for course_id, amount in session.execute(stmt).all()]


def get_schedule_start_times(
    session: DbSession, date_range: DateRange | None = None
) -> list[datetime]:
    """Get start times of all schedules that have one."""
    stmt = select(Schedule.start_time).where(Schedule.start_time.is_not(None)).order_by(Schedule.id)
    stmt = _within(stmt, Schedule.start_time, date_range)
    return list(session.execute(stmt).scalars())


# ============================================================================
# Invoice Repository
# ============================================================================


def sum_invoice_amounts(
    session: DbSession,
    start: datetime | None = None,
    end: datetime | None = None,
    date_range: DateRange | None = None,
) -> Decimal:
    """Sum invoice amounts, optionally for payments in [start, end]."""
    stmt = select(func.sum(Invoice.amount))
    if start is not None:
        stmt = stmt.where(Invoice.payment_date >= start)
    if end is not None:
        stmt = stmt.where(Invoice.payment_date <= end)
    stmt = _within(stmt, Invoice.payment_date, date_range)
    return session.execute(stmt).scalar_one() or Decimal(0)


def get_invoice_totals_by_payment_mode(
    session: DbSession, date_range: DateRange | None = None
) -> list[tuple[str, int, Decimal]]:
    """Get (payment_mode, invoice count, summed amount) per payment mode."""
    stmt = (
        select(Invoice.payment_mode, func.count(), func.sum(Invoice.amount))
        .group_by(Invoice.payment_mode)
        .order_by(Invoice.payment_mode)
    )
    stmt = _within(stmt, Invoice.payment_date, date_range)
    return [
        (mode, count, amount or Decimal(0)) for mode, count, amount in session.execute(stmt).all()
    ]


def get_invoice_summary_for_status(
    session: DbSession, status: str, date_range: DateRange | None = None
) -> tuple[int, Decimal]:
    """Get (count, summed amount) of invoices with the given status."""
    stmt = select(func.count(), func.sum(Invoice.amount)).where(Invoice.status == status)
    stmt = _within(stmt, Invoice.payment_date, date_range)
    count, amount = session.execute(stmt).one()
    return count, amount or Decimal(0)


# ============================================================================
# CRM Repository
# ============================================================================


def count_leads(
    session: DbSession, status: str | None = None, date_range: DateRange | None = None
) -> int:
    """Count leads, optionally only those with a given status."""
    stmt = select(func.count()).select_from(Lead)
    if status is not None:
        stmt = stmt.where(Lead.status == status)
    stmt = _within(stmt, Lead.created_at, date_range)
    return session.execute(stmt).scalar_one()


def count_follow_ups(session: DbSession, date_range: DateRange | None = None) -> int:
    """Count follow-up records."""
    return count_rows(session, FollowUp, FollowUp.contact_date, date_range)
