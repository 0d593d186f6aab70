"""Dashboard summary statistics."""

from __future__ import annotations

import logging
from datetime import datetime

from orbit.analytics.formatting import format_currency
from orbit.analytics.lookups import resolve_courses
from orbit.analytics.periods import month_window
from orbit.analytics.trends import get_monthly_registrations
from orbit.db import repo
from orbit.db.repo import DbSession
from orbit.db.schema import Course, Lead, Student, Trainer
from orbit.models.domain import DateRange
from orbit.models.types import (
    DashboardStats,
    EntityCounts,
    RevenueSummary,
    StatusCount,
    StudentSummary,
    TopCourse,
)

logger = logging.getLogger(__name__)

RECENT_STUDENTS = 5
TOP_COURSES = 5
TREND_MONTHS = 6


def get_dashboard_stats(
    session: DbSession,
    date_range: DateRange | None = None,
    now: datetime | None = None,
) -> DashboardStats:
    """Compute the dashboard summary.

    Entity counts, total and current-month revenue, six months of
    registrations, the newest students, payment status distribution and the
    most enrolled courses.

    Args:
        session: Database session.
        date_range: Optional range narrowing students, leads and invoices.
        now: Reference instant. Defaults to datetime.now().

    Returns:
        DashboardStats payload.
    """
    now = now or datetime.now()

    counts = EntityCounts(
        students=repo.count_rows(session, Student, Student.registration_date, date_range),
        courses=repo.count_rows(session, Course),
        trainers=repo.count_rows(session, Trainer),
        leads=repo.count_leads(session, date_range=date_range),
    )

    current = month_window(now.year, now.month)
    revenue = RevenueSummary(
        total=format_currency(repo.sum_invoice_amounts(session, date_range=date_range)),
        current_month=format_currency(
            repo.sum_invoice_amounts(session, start=current.start, end=current.end)
        ),
    )

    recent_students = [
        StudentSummary(**vars(student))
        for student in repo.get_recent_students(session, RECENT_STUDENTS, date_range)
    ]

    status_distribution = [
        StatusCount(status=status, count=count)
        for status, count in repo.count_grouped(
            session,
            Student.payment_status,
            date_column=Student.registration_date,
            date_range=date_range,
        )
    ]

    enrollments = repo.get_enrollment_counts(session, limit=TOP_COURSES, date_range=date_range)
    courses = resolve_courses(session, [course_id for course_id, _ in enrollments])
    top_courses = [
        TopCourse(id=course_id, name=courses[course_id].name, count=count)
        for course_id, count in enrollments
    ]

    logger.debug("Dashboard stats computed for %d students", counts.students)

    return DashboardStats(
        counts=counts,
        revenue=revenue,
        monthly_registrations=get_monthly_registrations(session, TREND_MONTHS, now),
        recent_students=recent_students,
        payment_status_distribution=status_distribution,
        top_courses=top_courses,
    )
