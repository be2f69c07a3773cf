import pytest
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.pool import StaticPool

from edutable.db import bootstrap
from edutable.db.seed import seed_store


def make_engine():
    return create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


def test_ensure_schema_creates_every_table():
    engine = make_engine()

    bootstrap.ensure_schema(engine)

    assert set(bootstrap.REQUIRED_COLUMNS) <= set(inspect(engine).get_table_names())
    assert bootstrap.find_schema_gaps(engine) == ([], {})


def test_ensure_schema_raises_on_missing_columns():
    engine = make_engine()
    with engine.begin() as connection:
        connection.execute(text("CREATE TABLE rooms (id VARCHAR(36) PRIMARY KEY, name VARCHAR(100))"))

    with pytest.raises(RuntimeError, match="Missing required columns: rooms.availability"):
        bootstrap.ensure_schema(engine)


def test_seed_store_loads_fixtures_once(sql_store):
    assert seed_store(sql_store) is True
    assert seed_store(sql_store) is False

    assert sql_store.students.count() == 2
    assert sql_store.faculty.count() == 2
    assert sql_store.courses.count() == 4
    assert sql_store.rooms.count() == 2
    active = sql_store.scenarios.get_active()
    assert active.name == "Current Semester"
    assert active.metrics.student_satisfaction == 94
