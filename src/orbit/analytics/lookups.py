"""Batched display-name resolution for aggregated groups."""

from __future__ import annotations

from orbit.db import repo
from orbit.db.repo import DbSession
from orbit.errors import MissingReferenceError
from orbit.models.domain import CourseEntity


def resolve_courses(session: DbSession, course_ids: list[int]) -> dict[int, CourseEntity]:
    """Fetch the courses referenced by aggregated groups in one query.

    Args:
        session: Database session.
        course_ids: Course ids taken from grouped rows (duplicates allowed).

    Returns:
        Mapping of course id to CourseEntity.

    Raises:
        MissingReferenceError: If any id has no course row.
    """
    courses = repo.get_courses_by_ids(session, course_ids)
    missing = sorted({cid for cid in course_ids if cid not in courses})
    if missing:
        raise MissingReferenceError("courses", missing)
    return courses
