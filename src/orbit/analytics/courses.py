"""Course analytics: enrollments per course and popular time slots."""

from __future__ import annotations

from datetime import datetime

from orbit.analytics.formatting import format_currency
from orbit.analytics.lookups import resolve_courses
from orbit.db import repo
from orbit.db.repo import DbSession
from orbit.models.domain import DateRange
from orbit.models.types import CourseAnalytics, CourseStat, TimeSlotCount


def bucket_time_slots(start_times: list[datetime]) -> list[TimeSlotCount]:
    """Histogram of start times by hour of day.

    Pure function - no database access.

    Args:
        start_times: Session start times.

    Returns:
        Hour buckets labelled "H:00 - H+1:00", most frequent first. Buckets
        with equal counts keep the order in which they were first seen.
    """
    slots: dict[str, int] = {}
    for start in start_times:
        label = f"{start.hour}:00 - {start.hour + 1}:00"
        slots[label] = slots.get(label, 0) + 1

    ranked = sorted(slots.items(), key=lambda item: item[1], reverse=True)
    return [TimeSlotCount(time_slot=label, count=count) for label, count in ranked]


def get_course_analytics(
    session: DbSession, date_range: DateRange | None = None
) -> CourseAnalytics:
    """Compute course analytics.

    Args:
        session: Database session.
        date_range: Optional range on enrollment date and schedule start.

    Returns:
        CourseAnalytics payload.
    """
    enrollments = repo.get_enrollment_counts(session, date_range=date_range)
    courses = resolve_courses(session, [course_id for course_id, _ in enrollments])

    course_stats = []
    for course_id, count in enrollments:
        course = courses[course_id]
        course_stats.append(
            CourseStat(
                id=course.id,
                name=course.name,
                description=course.description,
                fee=format_currency(course.fee),
                enrollments=count,
            )
        )

    return CourseAnalytics(
        course_stats=course_stats,
        popular_time_slots=bucket_time_slots(repo.get_schedule_start_times(session, date_range)),
    )
