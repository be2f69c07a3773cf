"""Seed the demo students, faculty, courses, rooms and scenario into the SQL store.

Run:
  PYTHONPATH=backend python scripts/seed_demo_data.py
"""

from __future__ import annotations

import os

from edutable.core.config import Settings
from edutable.db.seed import seed_store
from edutable.repositories.store import build_sql_store
from edutable.db.session import build_engine


def main() -> None:
    settings = Settings()
    database_url = os.getenv("DATABASE_URL") or settings.database_url
    store = build_sql_store(build_engine(database_url))
    try:
        seeded = seed_store(store)
        counts = {
            "students": store.students.count(),
            "faculty": store.faculty.count(),
            "courses": store.courses.count(),
            "rooms": store.rooms.count(),
            "scenarios": store.scenarios.count(),
        }
    finally:
        store.close()

    print("Demo data seeded successfully." if seeded else "Store already populated; nothing seeded.")
    print("")
    print(f"Database: {database_url}")
    for name, count in counts.items():
        print(f"{name.capitalize()}: {count}")


if __name__ == "__main__":
    main()
