"""Financial analytics: revenue trend, payment modes, course revenue."""

from __future__ import annotations

from datetime import datetime

from orbit.analytics.formatting import format_currency
from orbit.analytics.lookups import resolve_courses
from orbit.analytics.trends import get_monthly_revenue
from orbit.db import repo
from orbit.db.repo import DbSession
from orbit.models.domain import DateRange
from orbit.models.types import (
    CourseRevenue,
    FinancialAnalytics,
    PaymentModeRevenue,
    UnpaidInvoices,
)

TREND_MONTHS = 12
TOP_COURSES = 10
UNPAID_STATUS = "pending"


def get_financial_analytics(
    session: DbSession,
    date_range: DateRange | None = None,
    now: datetime | None = None,
) -> FinancialAnalytics:
    """Compute financial analytics.

    Course revenue sums the price agreed at registration, not invoices.

    Args:
        session: Database session.
        date_range: Optional range on payment / registration dates.
        now: Reference instant for the 12-month trend.

    Returns:
        FinancialAnalytics payload.
    """
    course_totals = repo.get_course_revenue_totals(session, TOP_COURSES, date_range)
    courses = resolve_courses(session, [course_id for course_id, _ in course_totals])

    unpaid_count, unpaid_total = repo.get_invoice_summary_for_status(
        session, UNPAID_STATUS, date_range
    )

    return FinancialAnalytics(
        monthly_revenue=get_monthly_revenue(session, TREND_MONTHS, now),
        payment_method_distribution=[
            PaymentModeRevenue(payment_mode=mode, count=count, total=float(total))
            for mode, count, total in repo.get_invoice_totals_by_payment_mode(session, date_range)
        ],
        course_revenue=[
            CourseRevenue(course=courses[course_id].name, revenue=format_currency(total))
            for course_id, total in course_totals
        ],
        unpaid_invoices=UnpaidInvoices(count=unpaid_count, total=format_currency(unpaid_total)),
    )
