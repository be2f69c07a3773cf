import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from edutable.api.deps import get_generator, get_store
from edutable.main import app
from edutable.repositories.store import build_memory_store, build_sql_store
from edutable.services.generator import SimulatedGenerator


@pytest.fixture()
def store():
    entity_store = build_memory_store()
    yield entity_store
    entity_store.close()


@pytest.fixture()
def sql_store():
    # Single shared in-memory SQLite connection so every session sees the same tables.
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    entity_store = build_sql_store(engine)
    yield entity_store
    entity_store.close()


@pytest.fixture()
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_generator] = lambda: SimulatedGenerator(delay_seconds=0)

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
