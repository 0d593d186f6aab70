"""Monthly trend series.

Registrations and revenue share one bucketing algorithm: one bounded
aggregate query per calendar month, oldest month first.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, TypeVar

from orbit.analytics.periods import month_label, month_windows
from orbit.db import repo
from orbit.db.repo import DbSession
from orbit.models.types import MonthlyCount, MonthlyRevenue

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _monthly_series(
    months: int,
    now: datetime | None,
    aggregate: Callable[[datetime, datetime], T],
) -> list[tuple[str, T]]:
    """Run aggregate(start, end) for each of the last `months` months."""
    return [
        (month_label(window.start), aggregate(window.start, window.end))
        for window in month_windows(months, now)
    ]


def get_monthly_registrations(
    session: DbSession, months: int = 6, now: datetime | None = None
) -> list[MonthlyCount]:
    """Count student registrations per month for the last `months` months.

    Args:
        session: Database session.
        months: Number of months, including the current one.
        now: Reference instant. Defaults to datetime.now().

    Returns:
        One MonthlyCount per month, oldest first.
    """
    series = _monthly_series(
        months,
        now,
        lambda start, end: repo.count_students_registered_between(session, start, end),
    )
    logger.debug("Computed %d months of registrations", len(series))
    return [MonthlyCount(month=label, count=count) for label, count in series]


def get_monthly_revenue(
    session: DbSession, months: int = 12, now: datetime | None = None
) -> list[MonthlyRevenue]:
    """Sum invoice amounts per month for the last `months` months.

    Args:
        session: Database session.
        months: Number of months, including the current one.
        now: Reference instant. Defaults to datetime.now().

    Returns:
        One MonthlyRevenue per month, oldest first.
    """
    series = _monthly_series(
        months,
        now,
        lambda start, end: repo.sum_invoice_amounts(session, start=start, end=end),
    )
    logger.debug("Computed %d months of revenue", len(series))
    return [MonthlyRevenue(month=label, revenue=float(total)) for label, total in series]
