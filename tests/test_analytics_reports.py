"""Tests for student, financial, course, CRM and HRM analytics."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from orbit.analytics import (
    get_course_analytics,
    get_crm_analytics,
    get_financial_analytics,
    get_hrm_analytics,
    get_student_analytics,
)
from orbit.analytics.courses import bucket_time_slots
from orbit.db.schema import Invoice, RegistrationCourse
from orbit.errors import MissingReferenceError
from orbit.models.domain import DateRange


# ============================================================================
# Students
# ============================================================================


class TestStudentAnalytics:
    def test_registration_trend_covers_twelve_months(self, institute, now):
        result = get_student_analytics(institute, now=now)
        assert len(result.registration_trends) == 12
        assert result.registration_trends[-1].month == "Oct 2026"

    def test_course_enrollments(self, institute, now):
        result = get_student_analytics(institute, now=now)
        assert [(e.course, e.students) for e in result.course_enrollments] == [
            ("Python", 2),
            ("Excel", 1),
        ]

    def test_distributions(self, institute, now):
        result = get_student_analytics(institute, now=now)
        assert {d.payment_mode: d.count for d in result.payment_method_distribution} == {
            "Cash": 2,
            "Card": 1,
        }
        assert {d.class_type: d.count for d in result.class_type_distribution} == {
            "Online": 2,
            "Offline": 1,
        }
        assert {d.emirates: d.count for d in result.emirates_distribution} == {
            "Dubai": 2,
            "Sharjah": 1,
        }

    def test_nationalities_ranked(self, institute, now):
        result = get_student_analytics(institute, now=now)
        assert [(d.nationality, d.count) for d in result.nationality_distribution] == [
            ("UAE", 2),
            ("India", 1),
        ]

    def test_null_groups_are_excluded(self, institute, now, student_factory):
        institute.add(student_factory(10, datetime(2026, 10, 10)))
        institute.commit()
        result = get_student_analytics(institute, now=now)
        assert all(d.nationality is not None for d in result.nationality_distribution)
        assert sum(d.count for d in result.class_type_distribution) == 3

    def test_date_range(self, institute, now):
        october = DateRange(start=date(2026, 10, 1), end=date(2026, 10, 31))
        result = get_student_analytics(institute, october, now=now)
        assert [(e.course, e.students) for e in result.course_enrollments] == [("Excel", 1)]
        assert {d.emirates: d.count for d in result.emirates_distribution} == {"Sharjah": 1}


# ============================================================================
# Finance
# ============================================================================


class TestFinancialAnalytics:
    def test_monthly_revenue(self, institute, now):
        result = get_financial_analytics(institute, now=now)
        revenue = {m.month: m.revenue for m in result.monthly_revenue}
        assert len(result.monthly_revenue) == 12
        assert revenue["Aug 2026"] == pytest.approx(1000.0)
        assert revenue["Sep 2026"] == pytest.approx(250.0)
        assert revenue["Oct 2026"] == pytest.approx(500.5)
        assert revenue["Jul 2026"] == 0

    def test_payment_method_distribution(self, institute, now):
        result = get_financial_analytics(institute, now=now)
        by_mode = {d.payment_mode: (d.count, d.total) for d in result.payment_method_distribution}
        assert by_mode["Cash"][0] == 2
        assert by_mode["Cash"][1] == pytest.approx(1250.0)
        assert by_mode["Card"][0] == 1
        assert by_mode["Card"][1] == pytest.approx(500.5)

    def test_course_revenue_from_registration_prices(self, institute, now):
        result = get_financial_analytics(institute, now=now)
        assert [(c.course, c.revenue) for c in result.course_revenue] == [
            ("Python", "AED 2,900.00"),
            ("Excel", "AED 800.00"),
        ]

    def test_unpaid_invoices(self, institute, now):
        result = get_financial_analytics(institute, now=now)
        assert result.unpaid_invoices.count == 1
        assert result.unpaid_invoices.total == "AED 250.00"

    def test_no_pending_invoices(self, session, now):
        result = get_financial_analytics(session, now=now)
        assert result.unpaid_invoices.count == 0
        assert result.unpaid_invoices.total == "AED 0.00"
        assert result.course_revenue == []

    def test_revenue_bucket_boundary(self, institute, now):
        institute.add(
            Invoice(
                invoice_number="INV-EDGE",
                student_id=1,
                amount=Decimal("10.00"),
                payment_mode="Cash",
                payment_date=datetime(2026, 10, 1, 0, 0, 0),
                status="paid",
            )
        )
        institute.commit()
        revenue = {m.month: m.revenue for m in get_financial_analytics(institute, now=now).monthly_revenue}
        assert revenue["Oct 2026"] == pytest.approx(510.5)
        assert revenue["Sep 2026"] == pytest.approx(250.0)

    def test_missing_course_raises(self, institute, now):
        institute.add(RegistrationCourse(student_id=1, course_id=42, price=Decimal("5.00")))
        institute.commit()
        with pytest.raises(MissingReferenceError):
            get_financial_analytics(institute, now=now)


# ============================================================================
# Courses
# ============================================================================


class TestBucketTimeSlots:
    def test_groups_by_hour(self):
        slots = bucket_time_slots(
            [datetime(2026, 1, 1, 9, 0), datetime(2026, 1, 2, 9, 45), datetime(2026, 1, 3, 14, 0)]
        )
        assert [(s.time_slot, s.count) for s in slots] == [("9:00 - 10:00", 2), ("14:00 - 15:00", 1)]

    def test_ties_keep_first_seen_order(self):
        slots = bucket_time_slots([datetime(2026, 1, 1, 16), datetime(2026, 1, 1, 8)])
        assert [s.time_slot for s in slots] == ["16:00 - 17:00", "8:00 - 9:00"]

    def test_late_evening_label(self):
        assert bucket_time_slots([datetime(2026, 1, 1, 23, 30)])[0].time_slot == "23:00 - 24:00"

    def test_empty(self):
        assert bucket_time_slots([]) == []


class TestCourseAnalytics:
    def test_course_stats(self, institute):
        result = get_course_analytics(institute)
        assert [(c.name, c.enrollments, c.fee) for c in result.course_stats] == [
            ("Python", 2, "AED 1,500.00"),
            ("Excel", 1, "AED 800.00"),
        ]

    def test_popular_time_slots(self, institute):
        result = get_course_analytics(institute)
        assert [(s.time_slot, s.count) for s in result.popular_time_slots] == [
            ("9:00 - 10:00", 2),
            ("14:00 - 15:00", 1),
        ]


# ============================================================================
# CRM
# ============================================================================


class TestCrmAnalytics:
    def test_lead_stats(self, institute):
        result = get_crm_analytics(institute)
        assert result.lead_stats.total == 4
        assert result.lead_stats.converted == 1
        assert result.lead_stats.conversion_rate == "25.00%"

    def test_sources_and_status(self, institute):
        result = get_crm_analytics(institute)
        assert {s.source: s.count for s in result.lead_sources} == {
            "Website": 2,
            "Referral": 1,
            "Walk-in": 1,
        }
        assert {s.status: s.count for s in result.lead_status} == {
            "New": 2,
            "Converted": 1,
            "Contacted": 1,
        }

    def test_follow_up_stats(self, institute):
        result = get_crm_analytics(institute)
        assert result.follow_up_stats.total_follow_ups == 6
        assert result.follow_up_stats.avg_follow_ups_per_lead == "1.50"

    def test_no_leads(self, session):
        result = get_crm_analytics(session)
        assert result.lead_stats.conversion_rate == "0.00%"
        assert result.follow_up_stats.avg_follow_ups_per_lead == "0.00"

    def test_date_range(self, institute):
        september = DateRange(start=date(2026, 9, 1), end=date(2026, 9, 30))
        result = get_crm_analytics(institute, september)
        assert result.lead_stats.total == 2
        assert result.lead_stats.conversion_rate == "50.00%"
        assert result.follow_up_stats.total_follow_ups == 0


# ============================================================================
# HRM
# ============================================================================


class TestHrmAnalytics:
    def test_flagged_as_sample_data(self):
        result = get_hrm_analytics()
        assert result.is_sample_data is True
        assert result.model_dump(by_alias=True)["isSampleData"] is True

    def test_attendance_key_is_snake_case(self):
        payload = get_hrm_analytics().model_dump(by_alias=True)
        assert "present_percentage" in payload["attendanceStats"]

    def test_department_totals(self):
        result = get_hrm_analytics()
        assert sum(d.count for d in result.departments) == result.employee_stats.total_employees
