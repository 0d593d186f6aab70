"""CRM analytics: lead conversion, sources, statuses and follow-up effort."""

from __future__ import annotations

from orbit.analytics.formatting import format_percentage, format_ratio
from orbit.db import repo
from orbit.db.repo import DbSession
from orbit.db.schema import Lead
from orbit.models.domain import DateRange
from orbit.models.types import (
    CrmAnalytics,
    FollowUpStats,
    LeadStats,
    SourceCount,
    StatusCount,
)

CONVERTED_STATUS = "Converted"


def get_crm_analytics(session: DbSession, date_range: DateRange | None = None) -> CrmAnalytics:
    """Compute CRM analytics.

    Conversion rate and follow-ups per lead are "0.00%" / "0.00" when there
    are no leads.

    Args:
        session: Database session.
        date_range: Optional range on lead creation / follow-up contact dates.

    Returns:
        CrmAnalytics payload.
    """
    total = repo.count_leads(session, date_range=date_range)
    converted = repo.count_leads(session, status=CONVERTED_STATUS, date_range=date_range)
    follow_ups = repo.count_follow_ups(session, date_range)

    def by(column):
        return repo.count_grouped(
            session, column, date_column=Lead.created_at, date_range=date_range
        )

    return CrmAnalytics(
        lead_stats=LeadStats(
            total=total,
            converted=converted,
            conversion_rate=format_percentage(converted, total),
        ),
        lead_sources=[SourceCount(source=source, count=count) for source, count in by(Lead.source)],
        lead_status=[StatusCount(status=status, count=count) for status, count in by(Lead.status)],
        follow_up_stats=FollowUpStats(
            total_follow_ups=follow_ups,
            avg_follow_ups_per_lead=format_ratio(follow_ups, total),
        ),
    )
