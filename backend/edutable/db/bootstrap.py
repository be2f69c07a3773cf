from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from edutable.db.base import Base
import edutable.models  # noqa: F401

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS: dict[str, set[str]] = {
    "students": {"id", "roll_no", "program", "semester", "total_credits", "section"},
    "faculty": {"id", "employee_id", "max_hours_per_week", "current_hours", "availability"},
    "courses": {"id", "code", "credits", "type", "max_enrollment"},
    "rooms": {"id", "name", "type", "capacity", "availability"},
    "scenarios": {"id", "name", "is_active", "metrics"},
    "timetable_entries": {
        "id",
        "scenario_id",
        "course_id",
        "faculty_id",
        "room_id",
        "student_group",
        "day_of_week",
        "start_time",
        "end_time",
    },
}


def find_schema_gaps(engine: Engine) -> tuple[list[str], dict[str, list[str]]]:
    missing_tables: list[str] = []
    missing_columns: dict[str, list[str]] = {}
    with engine.connect() as connection:
        inspector = inspect(connection)
        table_names = set(inspector.get_table_names())
        for table_name, required in REQUIRED_COLUMNS.items():
            if table_name not in table_names:
                missing_tables.append(table_name)
                continue
            existing = {item["name"] for item in inspector.get_columns(table_name)}
            missing = sorted(required - existing)
            if missing:
                missing_columns[table_name] = missing
    return missing_tables, missing_columns


def ensure_schema(engine: Engine) -> None:
    try:
        Base.metadata.create_all(bind=engine)
        missing_tables, missing_columns = find_schema_gaps(engine)
    except Exception as exc:  # pragma: no cover - runtime environment dependent
        logger.exception("Schema bootstrap failed")
        raise RuntimeError("Schema bootstrap failed") from exc

    if missing_tables:
        raise RuntimeError(f"Missing required tables: {', '.join(sorted(missing_tables))}")
    if missing_columns:
        flattened = [f"{table}.{column}" for table, columns in missing_columns.items() for column in columns]
        raise RuntimeError(f"Missing required columns: {', '.join(flattened)}")
