"""Shared pytest fixtures for orbit tests."""

from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from orbit.db.schema import (
    Base,
    Course,
    FollowUp,
    Invoice,
    Lead,
    RegistrationCourse,
    Schedule,
    Student,
    Trainer,
)

# Fixed reference instant so month windows are deterministic
NOW = datetime(2026, 10, 17, 12, 0, 0)


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def session(engine):
    """Create a database session for testing."""
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.close()


def make_student(n: int, registered: datetime, **overrides) -> Student:
    """Build a student with unique identifiers."""
    values = dict(
        student_id=f"STU-{n:04d}",
        first_name=f"First{n}",
        last_name=f"Last{n}",
        email=f"student{n}@example.com",
        phone_no=f"050000{n:04d}",
        registration_date=registered,
    )
    values.update(overrides)
    return Student(**values)


@pytest.fixture
def institute(session):
    """Seed a small institute.

    - 3 courses: Python (2 enrollments), Excel (1), Design (none)
    - 3 students registered Aug, Sep and Oct 2026
    - 3 invoices: 1,000.00 + 500.50 paid, 250.00 pending
    - 4 leads (1 converted) with 6 follow-ups
    - 3 schedules starting at 9:00, 9:30 and 14:00
    """
    python = Course(id=1, name="Python", description="Programming", fee=Decimal("1500.00"))
    excel = Course(id=2, name="Excel", description="Spreadsheets", fee=Decimal("800.00"))
    design = Course(id=3, name="Design", description="Graphics", fee=Decimal("1200.00"))
    trainer = Trainer(id=1, full_name="Trainer One", email="t1@example.com")
    session.add_all([python, excel, design, trainer])

    students = [
        make_student(
            1,
            datetime(2026, 8, 5, 10, 0),
            nationality="UAE",
            emirates="Dubai",
            class_type="Online",
            payment_mode="Cash",
            payment_status="paid",
        ),
        make_student(
            2,
            datetime(2026, 9, 12, 11, 0),
            nationality="India",
            emirates="Dubai",
            class_type="Offline",
            payment_mode="Card",
            payment_status="pending",
        ),
        make_student(
            3,
            datetime(2026, 10, 2, 9, 0),
            nationality="UAE",
            emirates="Sharjah",
            class_type="Online",
            payment_mode="Cash",
            payment_status="paid",
        ),
    ]
    session.add_all(students)
    session.flush()

    session.add_all(
        [
            RegistrationCourse(
                student_id=students[0].id,
                course_id=1,
                price=Decimal("1500.00"),
                created_at=datetime(2026, 8, 5, 10, 0),
            ),
            RegistrationCourse(
                student_id=students[1].id,
                course_id=1,
                price=Decimal("1400.00"),
                created_at=datetime(2026, 9, 12, 11, 0),
            ),
            RegistrationCourse(
                student_id=students[2].id,
                course_id=2,
                price=Decimal("800.00"),
                created_at=datetime(2026, 10, 2, 9, 0),
            ),
            Invoice(
                invoice_number="INV-1",
                student_id=students[0].id,
                amount=Decimal("1000.00"),
                payment_mode="Cash",
                payment_date=datetime(2026, 8, 6),
                status="paid",
            ),
            Invoice(
                invoice_number="INV-2",
                student_id=students[2].id,
                amount=Decimal("500.50"),
                payment_mode="Card",
                payment_date=datetime(2026, 10, 3),
                status="paid",
            ),
            Invoice(
                invoice_number="INV-3",
                student_id=students[1].id,
                amount=Decimal("250.00"),
                payment_mode="Cash",
                payment_date=datetime(2026, 9, 13),
                status="pending",
            ),
            Schedule(
                title="Python AM",
                course_id=1,
                trainer_id=1,
                start_time=datetime(2026, 10, 20, 9, 0),
            ),
            Schedule(
                title="Excel AM",
                course_id=2,
                trainer_id=1,
                start_time=datetime(2026, 10, 21, 9, 30),
            ),
            Schedule(
                title="Python PM",
                course_id=1,
                trainer_id=1,
                start_time=datetime(2026, 10, 22, 14, 0),
            ),
        ]
    )

    leads = [
        Lead(full_name="Lead A", phone="1", source="Website", status="New",
             created_at=datetime(2026, 9, 1)),
        Lead(full_name="Lead B", phone="2", source="Website", status="Converted",
             created_at=datetime(2026, 9, 2)),
        Lead(full_name="Lead C", phone="3", source="Referral", status="Contacted",
             created_at=datetime(2026, 10, 1)),
        Lead(full_name="Lead D", phone="4", source="Walk-in", status="New",
             created_at=datetime(2026, 10, 5)),
    ]
    session.add_all(leads)
    session.flush()
    session.add_all(
        [FollowUp(lead_id=leads[i % 4].id, contact_date=datetime(2026, 10, 6)) for i in range(6)]
    )
    session.commit()
    return session


@pytest.fixture
def now() -> datetime:
    """Reference instant used for trend windows."""
    return NOW


@pytest.fixture
def student_factory():
    """Factory for students with unique identifiers."""
    return make_student
