from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from sqlalchemy.engine import Engine

from edutable.core.config import Settings
from edutable.db.bootstrap import ensure_schema
from edutable.db.session import build_engine, build_session_factory
from edutable.repositories.base import (
    COURSE,
    FACULTY,
    ROOM,
    SCENARIO,
    STUDENT,
    TIMETABLE_ENTRY,
    Repository,
    ScenarioRepository,
    TimetableEntryRepository,
)
from edutable.repositories.memory import (
    InMemoryRepository,
    InMemoryScenarioRepository,
    InMemoryTimetableEntryRepository,
)
from edutable.repositories.sql import (
    SqlAlchemyRepository,
    SqlAlchemyScenarioRepository,
    SqlAlchemyTimetableEntryRepository,
)
from edutable.schemas.course import CourseOut
from edutable.schemas.faculty import FacultyOut
from edutable.schemas.room import RoomOut
from edutable.schemas.student import StudentOut

logger = logging.getLogger(__name__)


class EntityStore:
    """The six repositories plus the lock that serializes multi-step writes across them."""

    def __init__(
        self,
        *,
        students: Repository[StudentOut],
        faculty: Repository[FacultyOut],
        courses: Repository[CourseOut],
        rooms: Repository[RoomOut],
        scenarios: ScenarioRepository,
        timetable: TimetableEntryRepository,
        lock: threading.RLock | None = None,
        on_close: Callable[[], None] | None = None,
    ) -> None:
        self.students = students
        self.faculty = faculty
        self.courses = courses
        self.rooms = rooms
        self.scenarios = scenarios
        self.timetable = timetable
        self.lock = lock or threading.RLock()
        self._on_close = on_close

    def close(self) -> None:
        if self._on_close is not None:
            self._on_close()
            self._on_close = None


def build_memory_store() -> EntityStore:
    lock = threading.RLock()
    return EntityStore(
        students=InMemoryRepository(STUDENT, lock),
        faculty=InMemoryRepository(FACULTY, lock),
        courses=InMemoryRepository(COURSE, lock),
        rooms=InMemoryRepository(ROOM, lock),
        scenarios=InMemoryScenarioRepository(SCENARIO, lock),
        timetable=InMemoryTimetableEntryRepository(TIMETABLE_ENTRY, lock),
        lock=lock,
    )


def build_sql_store(engine: Engine) -> EntityStore:
    ensure_schema(engine)
    session_factory = build_session_factory(engine)
    return EntityStore(
        students=SqlAlchemyRepository(STUDENT, session_factory),
        faculty=SqlAlchemyRepository(FACULTY, session_factory),
        courses=SqlAlchemyRepository(COURSE, session_factory),
        rooms=SqlAlchemyRepository(ROOM, session_factory),
        scenarios=SqlAlchemyScenarioRepository(SCENARIO, session_factory),
        timetable=SqlAlchemyTimetableEntryRepository(TIMETABLE_ENTRY, session_factory),
        on_close=engine.dispose,
    )


def build_store(settings: Settings) -> EntityStore:
    if settings.storage_backend == "sql":
        logger.info("Using SQL entity store at %s", settings.database_url)
        return build_sql_store(build_engine(settings.database_url))
    logger.info("Using in-memory entity store")
    return build_memory_store()
