#!/usr/bin/env python3
"""Smoke test for the demo kennel.

Validates that the demo database was seeded and that the statistics
pipeline produces data for every view.

Usage:
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

from k9fetch.aggregation.detail import build_dog_stats  # noqa: E402
from k9fetch.aggregation.sessions import aggregate_sessions  # noqa: E402
from k9fetch.db import repo  # noqa: E402
from k9fetch.db.session import session_scope  # noqa: E402
from k9fetch.models.domain import CONDITION_KEYS  # noqa: E402
from k9fetch.services.accounts import AuthenticationError, sign_in  # noqa: E402

# Constants
DEMO_DB_PATH = PROJECT_ROOT / "demo.db"
DEMO_ADMIN = ("admin@k9fetch.local", "demo-admin")


def check_database_exists() -> bool:
    """Check that demo database exists."""
    if not DEMO_DB_PATH.exists():
        print(f"FAIL: Demo database not found: {DEMO_DB_PATH}")
        return False
    print(f"OK: Database exists: {DEMO_DB_PATH}")
    return True


def check_admin_sign_in(session) -> bool:
    """Check that the demo admin can sign in."""
    try:
        result = sign_in(session, *DEMO_ADMIN)
    except AuthenticationError:
        print(f"FAIL: Could not sign in as {DEMO_ADMIN[0]}")
        return False

    if not result.state.is_admin:
        print(f"FAIL: {DEMO_ADMIN[0]} is not an admin")
        return False

    print(f"OK: Signed in as admin {DEMO_ADMIN[0]}")
    return True


def check_dog_views(session) -> bool:
    """Check that every dog has sessions and a temperature distribution."""
    dogs = repo.list_dogs(session)
    if not dogs:
        print("FAIL: No dogs found")
        return False

    all_ok = True
    for dog in dogs:
        stats = build_dog_stats(dog, repo.get_sessions_for_dog(session, dog.id))
        if stats.total_sessions == 0 or stats.distribution is None:
            print(f"FAIL: Dog {dog.dog_code} has no usable sessions")
            all_ok = False
        else:
            rate = stats.rates[0].rate
            print(f"OK: Dog {dog.dog_code} {dog.name}: {stats.total_sessions} sessions, {rate}%")
    return all_ok


def check_aggregate_view(session) -> bool:
    """Check that the aggregate view has KPIs and every condition series."""
    aggregate = aggregate_sessions(repo.get_all_sessions(session))

    if aggregate.kpis is None:
        print("FAIL: No KPIs computed")
        return False

    missing = [key for key in CONDITION_KEYS if not aggregate.condition_series[key]]
    if missing:
        print(f"FAIL: Empty condition series: {missing}")
        return False

    print(
        f"OK: {aggregate.kpis.total_sessions} sessions, {aggregate.kpis.total_dogs} dogs, "
        f"{aggregate.kpis.success_rate}% success, {len(aggregate.scents)} scents"
    )
    return True


def main() -> int:
    """Run all smoke checks."""
    print("=" * 60)
    print("K-9 Smart Fetch Demo Smoke Test")
    print("=" * 60)

    checks_passed = 0
    checks_failed = 0

    print("\n[1/4] Checking database...")
    if not check_database_exists():
        print("\n" + "=" * 60)
        print("RESULT: 0 passed, 1 failed")
        print("Run 'python scripts/seed_demo.py' first!")
        print("=" * 60)
        return 1
    checks_passed += 1

    with session_scope(DEMO_DB_PATH) as session:
        checks = [
            ("[2/4] Checking admin sign-in...", check_admin_sign_in),
            ("[3/4] Checking dog views...", check_dog_views),
            ("[4/4] Checking aggregate view...", check_aggregate_view),
        ]
        for title, check in checks:
            print(f"\n{title}")
            if check(session):
                checks_passed += 1
            else:
                checks_failed += 1

    print("\n" + "=" * 60)
    if checks_failed == 0:
        print(f"RESULT: ALL PASSED ({checks_passed} checks)")
        print("=" * 60)
        return 0
    else:
        print(f"RESULT: {checks_passed} passed, {checks_failed} failed")
        print("=" * 60)
        return 1


if __name__ == "__main__":
    sys.exit(main())
