"""Calendar-month windows for trend series."""

from __future__ import annotations

from datetime import datetime, timedelta

from orbit.models.domain import MonthWindow


def _shift_month(year: int, month: int, back: int) -> tuple[int, int]:
    """Return (year, month) that lies `back` months before year/month."""
    index = year * 12 + (month - 1) - back
    return index // 12, index % 12 + 1


def month_window(year: int, month: int) -> MonthWindow:
    """Window covering the whole of year/month."""
    start = datetime(year, month, 1)
    next_year, next_month = _shift_month(year, month, -1)
    end = datetime(next_year, next_month, 1) - timedelta(microseconds=1)
    return MonthWindow(start=start, end=end)


def month_windows(months: int, now: datetime | None = None) -> list[MonthWindow]:
    """Windows for the last `months` months, oldest first.

    Walks backward from the month containing now and prepends each window,
    so the last entry is always the current month.

    Args:
        months: Number of months; values below 1 give an empty list.
        now: Reference instant. Defaults to datetime.now().

    Returns:
        Chronologically ordered list of MonthWindow.
    """
    now = now or datetime.now()
    windows: list[MonthWindow] = []
    for i in range(months):
        year, month = _shift_month(now.year, now.month, i)
        windows.insert(0, month_window(year, month))
    return windows


def month_label(moment: datetime) -> str:
    """Label a month as "MMM yyyy", e.g. "Oct 2026"."""
    return moment.strftime("%b %Y")
