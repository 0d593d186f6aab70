"""HRM analytics.

There are no HR tables yet, so this returns fixed sample figures that keep
the HR dashboard populated. The payload carries isSampleData=true so the UI
can label it.
"""

from __future__ import annotations

import logging

from orbit.models.types import (
    AttendanceStats,
    DepartmentCount,
    EmployeeStats,
    HrmAnalytics,
    RecentHire,
    UpcomingLeave,
)

logger = logging.getLogger(__name__)

_DEPARTMENTS = [
    ("Administration", 8),
    ("Training", 15),
    ("Marketing", 7),
    ("Sales", 9),
    ("IT", 4),
    ("Finance", 5),
]

_RECENT_HIRES = [
    (1, "Aisha Khan", "Training Specialist", "Training", "2025-04-01"),
    (2, "Mohammed Rahman", "Digital Marketing Expert", "Marketing", "2025-03-15"),
    (3, "Sara Al Jaber", "Administrative Assistant", "Administration", "2025-03-10"),
    (4, "Rahul Patel", "Full Stack Developer", "IT", "2025-03-05"),
    (5, "Fatima Ali", "Course Advisor", "Sales", "2025-03-01"),
]

_UPCOMING_LEAVES = [
    (1, "Ahmed Al Mansouri", "Annual", "2025-04-25", "2025-05-05", "Approved"),
    (2, "Laila Mahmood", "Sick", "2025-04-22", "2025-04-24", "Approved"),
    (3, "Hassan Ali", "Annual", "2025-05-10", "2025-05-20", "Pending"),
]


def get_hrm_analytics() -> HrmAnalytics:
    """Return the sample HRM payload."""
    logger.warning("HRM analytics served from sample data, not live tables")
    return HrmAnalytics(
        employee_stats=EmployeeStats(
            total_employees=48, active_employees=45, on_leave=3, new_hires=5
        ),
        departments=[DepartmentCount(name=name, count=count) for name, count in _DEPARTMENTS],
        recent_hires=[
            RecentHire(id=i, name=name, position=position, department=dept, join_date=joined)
            for i, name, position, dept, joined in _RECENT_HIRES
        ],
        upcoming_leaves=[
            UpcomingLeave(
                id=i,
                employee_name=name,
                leave_type=kind,
                start_date=start,
                end_date=end,
                status=status,
            )
            for i, name, kind, start, end, status in _UPCOMING_LEAVES
        ],
        attendance_stats=AttendanceStats(
            present=42, absent=1, late=2, on_leave=3, present_percentage="87.5%"
        ),
        is_sample_data=True,
    )
