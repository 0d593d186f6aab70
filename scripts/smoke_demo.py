#!/usr/bin/env python3
"""Smoke test for the demo institute.

Validates that demo.db was seeded and that every analytics report can be
computed from it with internally consistent figures.

Usage:
    python scripts/seed_demo.py
    python scripts/smoke_demo.py

Exit codes:
    0: All checks passed
    1: Some checks failed
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from orbit.analytics import (  # noqa: E402
    get_course_analytics,
    get_crm_analytics,
    get_dashboard_stats,
    get_financial_analytics,
    get_student_analytics,
)
from orbit.db.session import get_session  # noqa: E402

# Constants
DEMO_DB_PATH = PROJECT_ROOT / "demo.db"
DEMO_DB_URL = f"sqlite:///{DEMO_DB_PATH}"


def check_database_exists() -> bool:
    """Check that demo database exists."""
    if not DEMO_DB_PATH.exists():
        print(f"FAIL: Demo database not found: {DEMO_DB_PATH}")
        return False
    print(f"OK: Database exists: {DEMO_DB_PATH}")
    return True


def check_dashboard(session) -> bool:
    """Check dashboard counts against its own breakdowns."""
    stats = get_dashboard_stats(session)

    if stats.counts.students == 0:
        print("FAIL: No students in demo database")
        return False
    print(f"OK: {stats.counts.students} students, revenue {stats.revenue.total}")

    if len(stats.monthly_registrations) != 6:
        print(f"FAIL: Expected 6 months of registrations, got {len(stats.monthly_registrations)}")
        return False

    status_total = sum(d.count for d in stats.payment_status_distribution)
    if status_total != stats.counts.students:
        print(f"FAIL: Payment statuses cover {status_total} of {stats.counts.students} students")
        return False
    print("OK: Payment status distribution covers every student")
    return True


def check_reports(session) -> bool:
    """Check that each report computes and trends have the right length."""
    students = get_student_analytics(session)
    financial = get_financial_analytics(session)
    courses = get_course_analytics(session)
    crm = get_crm_analytics(session)

    all_ok = True
    for name, series in (
        ("registration trend", students.registration_trends),
        ("revenue trend", financial.monthly_revenue),
    ):
        if len(series) == 12:
            print(f"OK: {name} has 12 months")
        else:
            print(f"FAIL: {name} has {len(series)} months")
            all_ok = False

    enrolled = sum(c.enrollments for c in courses.course_stats)
    print(f"OK: {enrolled} enrollments across {len(courses.course_stats)} courses")
    print(f"OK: Lead conversion rate {crm.lead_stats.conversion_rate}")
    return all_ok


def main() -> int:
    """Main entry point."""
    print("=" * 60)
    print("Orbit Demo Smoke Test")
    print("=" * 60)

    checks_passed = 0
    checks_failed = 0

    print("\n[1/3] Checking database...")
    if not check_database_exists():
        print("Run 'python scripts/seed_demo.py' first!")
        return 1
    checks_passed += 1

    session = get_session(DEMO_DB_URL)

    try:
        print("\n[2/3] Checking dashboard...")
        if check_dashboard(session):
            checks_passed += 1
        else:
            checks_failed += 1

        print("\n[3/3] Checking reports...")
        if check_reports(session):
            checks_passed += 1
        else:
            checks_failed += 1

    finally:
        session.close()

    # Summary
    print("\n" + "=" * 60)
    if checks_failed == 0:
        print(f"RESULT: ALL PASSED ({checks_passed} checks)")
        print("=" * 60)
        return 0
    print(f"RESULT: {checks_passed} passed, {checks_failed} failed")
    print("=" * 60)
    return 1


if __name__ == "__main__":
    sys.exit(main())
