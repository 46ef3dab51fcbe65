#!/usr/bin/env python3
"""Seed a demo kennel with accounts, dogs and training sessions.

Usage:
    python scripts/seed_demo.py

This script:
1. Initializes the demo database
2. Creates an admin and a trainer account
3. Creates the demo dogs
4. Generates training sessions with conditions and scent types
"""

from __future__ import annotations

import random
import sys
from datetime import datetime, timedelta
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from k9fetch.core.identity import new_record_id  # noqa: E402
from k9fetch.db import repo  # noqa: E402
from k9fetch.db.session import init_db, session_scope  # noqa: E402
from k9fetch.models.domain import TrainingSessionEntity  # noqa: E402
from k9fetch.services.accounts import register_user  # noqa: E402
from k9fetch.services.dogs import DogInput, create_dog  # noqa: E402

# Constants
DEMO_DB_PATH = PROJECT_ROOT / "demo.db"

# Demo accounts (email, password, role, full name)
DEMO_USERS = [
    ("admin@k9fetch.local", "demo-admin", "admin", "Demo Admin"),
    ("trainer@k9fetch.local", "demo-trainer", "trainer", "Demo Trainer"),
]

# Demo dogs (code, name, breed, sex)
DEMO_DOGS = [
    ("A-001", "Lobo", "German Shepherd", "M"),
    ("A-002", "Mora", "Belgian Malinois", "F"),
    ("A-003", "Kira", "Labrador Retriever", "F"),
    ("A-004", "Thor", "Border Collie", "M"),
]

DEMO_SCENTS = ["cocaine", "marijuana", "explosives", "currency"]
SESSIONS_PER_DOG = 24
RANDOM_SEED = 42


def seed_accounts(session) -> None:
    """Create demo accounts that do not exist yet."""
    for email, password, role, full_name in DEMO_USERS:
        if repo.get_user_credentials(session, email) is not None:
            print(f"  Account already exists: {email}")
            continue
        register_user(session, email, password, role=role, full_name=full_name)
        print(f"  Created account: {email} ({role}) / {password}")


def make_session(rng: random.Random, dog_id: str, started_at: datetime) -> TrainingSessionEntity:
    """Generate one plausible training session."""
    temp = round(rng.uniform(8, 34), 1)
    hum = rng.randint(30, 90)
    # Hot, humid days are harder on the nose
    p_success = 0.8 - max(0.0, temp - 25) * 0.03 - max(0, hum - 70) * 0.005

    conditions: dict = {
        "temp": temp,
        "wind": round(rng.uniform(0, 30), 1),
        # Some trainers type pressure in as text
        "press": str(rng.randint(995, 1030)),
        "hum": hum,
    }
    if rng.random() < 0.05:
        conditions["temp"] = "n/a"
    if rng.random() < 0.2:
        conditions["wind"] = f"{conditions['wind']} km/h"

    return TrainingSessionEntity(
        id=new_record_id(),
        dog_id=dog_id,
        result="success" if rng.random() < p_success else "false_positive",
        started_at=started_at,
        duration_s=float(rng.randint(60, 600)),
        conditions=conditions,
        type={"scent": rng.choice(DEMO_SCENTS)},
    )


def seed_dogs_and_sessions(session) -> None:
    """Create demo dogs with their sessions."""
    rng = random.Random(RANDOM_SEED)
    start = datetime(2025, 10, 1, 9, 0)

    for code, name, breed, sex in DEMO_DOGS:
        if repo.get_dog_by_code(session, code) is not None:
            print(f"  Dog already exists: {code}")
            continue

        dog = create_dog(session, DogInput(dog_code=code, name=name, breed=breed, sex=sex))
        for i in range(SESSIONS_PER_DOG):
            started_at = start + timedelta(days=i, minutes=rng.randint(0, 240))
            repo.create_training_session(session, make_session(rng, dog.id, started_at))
        repo.commit(session)
        print(f"  Created dog: {code} {name} with {SESSIONS_PER_DOG} sessions")


def main() -> int:
    """Main entry point."""
    print("=" * 60)
    print("K-9 Smart Fetch Demo Seeder")
    print("=" * 60)

    print("\n[1/3] Initializing database...")
    init_db(DEMO_DB_PATH)
    print(f"Database: {DEMO_DB_PATH}")

    with session_scope(DEMO_DB_PATH) as session:
        print("\n[2/3] Seeding accounts...")
        seed_accounts(session)

        print("\n[3/3] Seeding dogs and sessions...")
        seed_dogs_and_sessions(session)

    print("\n" + "=" * 60)
    print("Demo seeded. Run the API with:")
    print(f"  K9_DB_PATH={DEMO_DB_PATH} python scripts/serve.py")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
