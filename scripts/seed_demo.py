#!/usr/bin/env python3
"""Seed a demo institute database.

Creates demo.db (SQLite) with a year of students, registrations,
invoices, schedules and leads so the analytics API has something to
show without a PostgreSQL server.

Usage:
    python scripts/seed_demo.py
    DATABASE_URL=sqlite:///demo.db uvicorn orbit.api.app:app

The data is generated from a fixed random seed, so repeated runs on a
fresh database produce identical figures.
"""

from __future__ import annotations

import random
import sys
from datetime import datetime, timedelta
from decimal import Decimal
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from orbit.db.schema import (  # noqa: E402
    Course,
    FollowUp,
    Invoice,
    Lead,
    RegistrationCourse,
    Schedule,
    Student,
    Trainer,
    User,
)
from orbit.db.session import get_session, init_db  # noqa: E402

# Constants
DEMO_DB_PATH = PROJECT_ROOT / "demo.db"
DEMO_DB_URL = f"sqlite:///{DEMO_DB_PATH}"
RANDOM_SEED = 42

DEMO_STUDENTS = 120
DEMO_LEADS = 80

COURSES = [
    ("Python Programming", "Programming fundamentals with Python", "2500.00"),
    ("Microsoft Excel", "Spreadsheets from basics to pivot tables", "900.00"),
    ("Graphic Design", "Design principles and Adobe tools", "1800.00"),
    ("Digital Marketing", "SEO, social media and paid campaigns", "2200.00"),
    ("Business English", "Professional communication", "1200.00"),
]
NATIONALITIES = ["UAE", "India", "Pakistan", "Egypt", "Philippines", "Jordan", "UK"]
EMIRATES = ["Dubai", "Abu Dhabi", "Sharjah", "Ajman", "Ras Al Khaimah"]
CLASS_TYPES = ["Online", "Offline", "Private", "Batch"]
PAYMENT_MODES = ["Cash", "Card", "Bank Transfer", "Cheque"]
LEAD_SOURCES = ["Website", "Facebook", "Instagram", "Referral", "Walk-in"]
LEAD_STATUSES = ["New", "Contacted", "Interested", "Converted", "Lost"]


def seed_database(rng: random.Random, now: datetime) -> None:
    """Insert the demo institute.

    Args:
        rng: Seeded random generator.
        now: Reference instant; registrations spread over the previous year.
    """
    session = get_session(DEMO_DB_URL)

    try:
        # Check if already seeded
        if session.query(Student).first() is not None:
            print(f"Demo data already exists in {DEMO_DB_PATH}")
            return

        print("Creating staff, courses and trainers...")
        admin = User(username="admin", role="admin", full_name="Demo Admin")
        session.add(admin)
        courses = [
            Course(name=name, description=description, fee=Decimal(fee))
            for name, description, fee in COURSES
        ]
        trainers = [
            Trainer(full_name=f"Trainer {i}", email=f"trainer{i}@example.com") for i in range(1, 4)
        ]
        session.add_all(courses + trainers)
        session.flush()

        print(f"Creating {DEMO_STUDENTS} students...")
        for n in range(1, DEMO_STUDENTS + 1):
            registered = now - timedelta(days=rng.randint(0, 364), hours=rng.randint(0, 8))
            status = rng.choice(["paid", "paid", "partial", "pending"])
            student = Student(
                student_id=f"STU-{n:04d}",
                first_name=f"Student{n}",
                last_name="Demo",
                email=f"student{n}@example.com",
                phone_no=f"05{rng.randint(10000000, 99999999)}",
                nationality=rng.choice(NATIONALITIES),
                emirates=rng.choice(EMIRATES),
                class_type=rng.choice(CLASS_TYPES),
                payment_mode=rng.choice(PAYMENT_MODES),
                payment_status=status,
                registration_date=registered,
                created_by=admin.id,
            )
            session.add(student)
            session.flush()

            course = rng.choice(courses)
            session.add(
                RegistrationCourse(
                    student_id=student.id,
                    course_id=course.id,
                    price=course.fee,
                    created_at=registered,
                )
            )
            session.add(
                Invoice(
                    invoice_number=f"INV-{n:05d}",
                    student_id=student.id,
                    amount=course.fee if status == "paid" else course.fee / 2,
                    payment_mode=student.payment_mode,
                    payment_date=registered + timedelta(days=rng.randint(0, 3)),
                    status="pending" if status == "pending" else "paid",
                )
            )

        print("Creating schedules...")
        for i in range(30):
            start = now + timedelta(days=i // 3, hours=rng.choice([9, 11, 14, 17, 19]) - now.hour)
            session.add(
                Schedule(
                    title=f"Session {i + 1}",
                    course_id=rng.choice(courses).id,
                    trainer_id=rng.choice(trainers).id,
                    start_time=start.replace(minute=0, second=0, microsecond=0),
                    end_time=start.replace(minute=0, second=0, microsecond=0) + timedelta(hours=2),
                )
            )

        print(f"Creating {DEMO_LEADS} leads...")
        for n in range(1, DEMO_LEADS + 1):
            lead = Lead(
                full_name=f"Lead {n}",
                phone=f"05{rng.randint(10000000, 99999999)}",
                source=rng.choice(LEAD_SOURCES),
                status=rng.choice(LEAD_STATUSES),
                consultant_id=admin.id,
                created_at=now - timedelta(days=rng.randint(0, 180)),
            )
            session.add(lead)
            session.flush()
            for _ in range(rng.randint(0, 3)):
                session.add(
                    FollowUp(
                        lead_id=lead.id,
                        contact_date=lead.created_at + timedelta(days=rng.randint(1, 14)),
                    )
                )

        session.commit()
        print("Database seeded successfully!")

    finally:
        session.close()


def main() -> int:
    """Main entry point."""
    print("=" * 60)
    print("Orbit Demo Seeding Script")
    print("=" * 60)

    print("\n[1/2] Creating tables...")
    init_db(DEMO_DB_URL)

    print("\n[2/2] Seeding database...")
    seed_database(random.Random(RANDOM_SEED), datetime.now())

    print("\n" + "=" * 60)
    print("Demo seeding complete!")
    print(f"Database: {DEMO_DB_PATH}")
    print("=" * 60)

    return 0


if __name__ == "__main__":
    sys.exit(main())
