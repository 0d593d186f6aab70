"""Tests for database schema and repository queries."""

from datetime import date, datetime
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from orbit.db import repo
from orbit.db.schema import Base, Course, Lead, Student
from orbit.models.domain import DateRange


class TestSchemaCreation:
    """Test that schema can be created without errors."""

    def test_all_tables_created(self, engine):
        """All tables read by analytics should exist after creation."""
        expected_tables = {
            "users",
            "courses",
            "students",
            "registration_courses",
            "invoices",
            "trainers",
            "schedules",
            "certificates",
            "leads",
            "follow_ups",
            "campaigns",
        }
        assert expected_tables.issubset(Base.metadata.tables.keys())

    def test_course_name_unique(self, session):
        session.add(Course(name="Python", fee=Decimal("1.00")))
        session.add(Course(name="Python", fee=Decimal("2.00")))
        with pytest.raises(IntegrityError):
            session.commit()

    def test_lead_status_defaults_to_new(self, session):
        lead = Lead(full_name="A", phone="1", source="Website")
        session.add(lead)
        session.commit()
        assert lead.status == "New"


class TestRepoQueries:
    def test_count_rows_with_range(self, institute):
        august = DateRange(start=date(2026, 8, 1), end=date(2026, 8, 31))
        assert repo.count_rows(institute, Student) == 3
        assert repo.count_rows(institute, Student, Student.registration_date, august) == 1

    def test_range_end_is_inclusive(self, institute):
        # Student 1 registered at 10:00 on Aug 5
        same_day = DateRange(start=date(2026, 8, 5), end=date(2026, 8, 5))
        assert repo.count_rows(institute, Student, Student.registration_date, same_day) == 1

    def test_count_grouped_ordering_and_limit(self, institute):
        groups = repo.count_grouped(
            institute, Student.nationality, order_by_count=True, limit=1
        )
        assert groups == [("UAE", 2)]

    def test_courses_by_ids_single_lookup(self, institute):
        courses = repo.get_courses_by_ids(institute, [1, 2, 1])
        assert set(courses) == {1, 2}
        assert courses[1].fee == Decimal("1500.00")

    def test_courses_by_ids_empty(self, institute):
        assert repo.get_courses_by_ids(institute, []) == {}

    def test_sum_invoice_amounts_window(self, institute):
        total = repo.sum_invoice_amounts(
            institute, start=datetime(2026, 9, 1), end=datetime(2026, 9, 30, 23, 59, 59)
        )
        assert total == Decimal("250.00")

    def test_sum_invoice_amounts_empty(self, session):
        assert repo.sum_invoice_amounts(session) == Decimal(0)
