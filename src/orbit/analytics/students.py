"""Student analytics: registration trend and demographic distributions."""

from __future__ import annotations

from datetime import datetime

from orbit.analytics.lookups import resolve_courses
from orbit.analytics.trends import get_monthly_registrations
from orbit.db import repo
from orbit.db.repo import DbSession
from orbit.db.schema import Student
from orbit.models.domain import DateRange
from orbit.models.types import (
    ClassTypeCount,
    CourseEnrollment,
    EmiratesCount,
    NationalityCount,
    PaymentModeCount,
    StudentAnalytics,
)

TREND_MONTHS = 12
TOP_NATIONALITIES = 10


def get_student_analytics(
    session: DbSession,
    date_range: DateRange | None = None,
    now: datetime | None = None,
) -> StudentAnalytics:
    """Compute student analytics.

    Args:
        session: Database session.
        date_range: Optional range on registration date for the distributions.
        now: Reference instant for the 12-month trend.

    Returns:
        StudentAnalytics payload.
    """
    enrollments = repo.get_enrollment_counts(session, date_range=date_range)
    courses = resolve_courses(session, [course_id for course_id, _ in enrollments])

    def distribution(column, limit=None):
        return repo.count_grouped(
            session,
            column,
            date_column=Student.registration_date,
            date_range=date_range,
            order_by_count=limit is not None,
            limit=limit,
        )

    return StudentAnalytics(
        registration_trends=get_monthly_registrations(session, TREND_MONTHS, now),
        course_enrollments=[
            CourseEnrollment(course=courses[course_id].name, students=count)
            for course_id, count in enrollments
        ],
        payment_method_distribution=[
            PaymentModeCount(payment_mode=mode, count=count)
            for mode, count in distribution(Student.payment_mode)
        ],
        class_type_distribution=[
            ClassTypeCount(class_type=class_type, count=count)
            for class_type, count in distribution(Student.class_type)
        ],
        nationality_distribution=[
            NationalityCount(nationality=nationality, count=count)
            for nationality, count in distribution(Student.nationality, TOP_NATIONALITIES)
        ],
        emirates_distribution=[
            EmiratesCount(emirates=emirates, count=count)
            for emirates, count in distribution(Student.emirates)
        ],
    )
