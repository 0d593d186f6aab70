"""Pydantic models for the analytics API.

Field names are snake_case in Python and serialised as camelCase; the
serialised shape is what the dashboard UI consumes.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for API payloads (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Shared shapes
# ============================================================================


class MonthlyCount(WireModel):
    """Registrations in one calendar month."""

    month: str  # "MMM yyyy"
    count: int


class MonthlyRevenue(WireModel):
    """Invoice amounts received in one calendar month."""

    month: str
    revenue: float


class StatusCount(WireModel):
    status: str
    count: int


class PaymentModeCount(WireModel):
    payment_mode: str
    count: int


# ============================================================================
# Dashboard
# ============================================================================


class EntityCounts(WireModel):
    students: int
    courses: int
    trainers: int
    leads: int


class RevenueSummary(WireModel):
    total: str
    current_month: str


class StudentSummary(WireModel):
    """Student row as shown in the recent registrations list."""

    id: int
    student_id: str
    first_name: str
    last_name: str
    email: str
    phone_no: str
    nationality: str | None
    class_type: str | None
    registration_date: datetime
    payment_status: str | None


class TopCourse(WireModel):
    id: int
    name: str
    count: int


class DashboardStats(WireModel):
    """Dashboard summary."""

    counts: EntityCounts
    revenue: RevenueSummary
    monthly_registrations: list[MonthlyCount]
    recent_students: list[StudentSummary]
    payment_status_distribution: list[StatusCount]
    top_courses: list[TopCourse]


# ============================================================================
# Students
# ============================================================================


class CourseEnrollment(WireModel):
    course: str
    students: int


class ClassTypeCount(WireModel):
    class_type: str
    count: int


class NationalityCount(WireModel):
    nationality: str
    count: int


class EmiratesCount(WireModel):
    emirates: str
    count: int


class StudentAnalytics(WireModel):
    registration_trends: list[MonthlyCount]
    course_enrollments: list[CourseEnrollment]
    payment_method_distribution: list[PaymentModeCount]
    class_type_distribution: list[ClassTypeCount]
    nationality_distribution: list[NationalityCount]
    emirates_distribution: list[EmiratesCount]


# ============================================================================
# Finance
# ============================================================================


class PaymentModeRevenue(WireModel):
    payment_mode: str
    count: int
    total: float


class CourseRevenue(WireModel):
    course: str
    revenue: str


class UnpaidInvoices(WireModel):
    count: int
    total: str


class FinancialAnalytics(WireModel):
    monthly_revenue: list[MonthlyRevenue]
    payment_method_distribution: list[PaymentModeRevenue]
    course_revenue: list[CourseRevenue]
    unpaid_invoices: UnpaidInvoices


# ============================================================================
# Courses
# ============================================================================


class CourseStat(WireModel):
    id: int
    name: str
    description: str
    fee: str
    enrollments: int


class TimeSlotCount(WireModel):
    time_slot: str  # "9:00 - 10:00"
    count: int


class CourseAnalytics(WireModel):
    course_stats: list[CourseStat]
    popular_time_slots: list[TimeSlotCount]


# ============================================================================
# CRM
# ============================================================================


class LeadStats(WireModel):
    total: int
    converted: int
    conversion_rate: str


class SourceCount(WireModel):
    source: str
    count: int


class FollowUpStats(WireModel):
    total_follow_ups: int
    avg_follow_ups_per_lead: str


class CrmAnalytics(WireModel):
    lead_stats: LeadStats
    lead_sources: list[SourceCount]
    lead_status: list[StatusCount]
    follow_up_stats: FollowUpStats


# ============================================================================
# HRM (sample data, see orbit.analytics.hrm)
# ============================================================================


class EmployeeStats(WireModel):
    total_employees: int
    active_employees: int
    on_leave: int
    new_hires: int


class DepartmentCount(WireModel):
    name: str
    count: int


class RecentHire(WireModel):
    id: int
    name: str
    position: str
    department: str
    join_date: str


class UpcomingLeave(WireModel):
    id: int
    employee_name: str
    leave_type: str
    start_date: str
    end_date: str
    status: str


class AttendanceStats(WireModel):
    present: int
    absent: int
    late: int
    on_leave: int
    present_percentage: str = Field(alias="present_percentage")


class HrmAnalytics(WireModel):
    employee_stats: EmployeeStats
    departments: list[DepartmentCount]
    recent_hires: list[RecentHire]
    upcoming_leaves: list[UpcomingLeave]
    attendance_stats: AttendanceStats
    is_sample_data: bool = True
