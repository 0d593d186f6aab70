"""Analytics module for dashboard and report statistics.

Reads the current table state and produces summaries:
- counts, sums and grouped distributions via orbit.db.repo
- monthly trend series (registrations, revenue)
- display formatting (AED currency, percentages)
Forbidden: writes of any kind, cached or materialised stats.
"""

from orbit.analytics.courses import get_course_analytics
from orbit.analytics.crm import get_crm_analytics
from orbit.analytics.dashboard import get_dashboard_stats
from orbit.analytics.financial import get_financial_analytics
from orbit.analytics.hrm import get_hrm_analytics
from orbit.analytics.students import get_student_analytics
from orbit.analytics.trends import get_monthly_registrations, get_monthly_revenue

__all__ = [
    "get_course_analytics",
    "get_crm_analytics",
    "get_dashboard_stats",
    "get_financial_analytics",
    "get_hrm_analytics",
    "get_monthly_registrations",
    "get_monthly_revenue",
    "get_student_analytics",
]
