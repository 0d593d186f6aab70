"""Analytics API endpoints.

GET /api/analytics/dashboard      - Dashboard summary
GET /api/analytics/registrations  - Monthly registration counts
GET /api/analytics/students       - Student analytics
GET /api/analytics/financial      - Financial analytics
GET /api/analytics/courses        - Course analytics
GET /api/analytics/crm            - CRM analytics
GET /api/analytics/hrm            - HRM analytics (sample data)

Every endpoint except hrm and registrations accepts optional start/end
dates (ISO format, both or neither).
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse

from orbit import analytics
from orbit.api.app import get_db_session
from orbit.db.repo import DbSession
from orbit.models.domain import DateRange
from orbit.models.types import (
    CourseAnalytics,
    CrmAnalytics,
    DashboardStats,
    FinancialAnalytics,
    HrmAnalytics,
    MonthlyCount,
    StudentAnalytics,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics"])

T = TypeVar("T")


def get_date_range(
    start: date | None = Query(None, description="First day of the range (inclusive)"),
    end: date | None = Query(None, description="Last day of the range (inclusive)"),
) -> DateRange | None:
    """Dependency building an optional DateRange from query parameters.

    Raises:
        HTTPException: 422 if only one bound is given or start is after end.
    """
    if start is None and end is None:
        return None
    if start is None or end is None:
        raise HTTPException(status_code=422, detail="start and end must be given together")
    try:
        return DateRange(start=start, end=end)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


def _respond(area: str, compute: Callable[[], T]) -> T | JSONResponse:
    """Run an aggregator, mapping any failure to a generic 500."""
    try:
        return compute()
    except Exception:
        logger.exception("Error fetching %s analytics", area)
        return JSONResponse(
            status_code=500, content={"message": f"Failed to fetch {area} analytics"}
        )


@router.get("/dashboard", response_model=DashboardStats)
def dashboard(
    date_range: DateRange | None = Depends(get_date_range),
    session: DbSession = Depends(get_db_session),
):
    """Dashboard summary statistics."""
    return _respond("dashboard", lambda: analytics.get_dashboard_stats(session, date_range))


@router.get("/registrations", response_model=list[MonthlyCount])
def registrations(
    months: int = Query(6, ge=1, le=60),
    session: DbSession = Depends(get_db_session),
):
    """Monthly registration counts, oldest month first."""
    return _respond(
        "registration", lambda: analytics.get_monthly_registrations(session, months)
    )


@router.get("/students", response_model=StudentAnalytics)
def students(
    date_range: DateRange | None = Depends(get_date_range),
    session: DbSession = Depends(get_db_session),
):
    """Student analytics."""
    return _respond("student", lambda: analytics.get_student_analytics(session, date_range))


@router.get("/financial", response_model=FinancialAnalytics)
def financial(
    date_range: DateRange | None = Depends(get_date_range),
    session: DbSession = Depends(get_db_session),
):
    """Financial analytics."""
    return _respond("financial", lambda: analytics.get_financial_analytics(session, date_range))


@router.get("/courses", response_model=CourseAnalytics)
def courses(
    date_range: DateRange | None = Depends(get_date_range),
    session: DbSession = Depends(get_db_session),
):
    """Course analytics."""
    return _respond("course", lambda: analytics.get_course_analytics(session, date_range))


@router.get("/crm", response_model=CrmAnalytics)
def crm(
    date_range: DateRange | None = Depends(get_date_range),
    session: DbSession = Depends(get_db_session),
):
    """CRM analytics."""
    return _respond("CRM", lambda: analytics.get_crm_analytics(session, date_range))


@router.get("/hrm", response_model=HrmAnalytics)
def hrm():
    """HRM analytics (sample data)."""
    return _respond("HRM", analytics.get_hrm_analytics)
