from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Generic, Protocol, TypeVar

from pydantic import BaseModel, ValidationError

from edutable.core.exceptions import InvalidInputError
from edutable.db.base import Base
from edutable.models.course import Course
from edutable.models.faculty import Faculty
from edutable.models.room import Room
from edutable.models.scenario import Scenario
from edutable.models.student import Student
from edutable.models.timetable_entry import TimetableEntry
from edutable.schemas.course import CourseOut
from edutable.schemas.faculty import FacultyOut
from edutable.schemas.room import RoomOut
from edutable.schemas.scenario import ScenarioOut
from edutable.schemas.student import StudentOut
from edutable.schemas.timetable import TimetableEntryOut

RecordT = TypeVar("RecordT", bound=BaseModel)

IMMUTABLE_FIELDS = frozenset({"id", "created_at"})


@dataclass(frozen=True)
class EntitySpec(Generic[RecordT]):
    name: str
    record_type: type[RecordT]
    orm_model: type[Base]
    unique_field: str | None = None


STUDENT = EntitySpec("Student", StudentOut, Student, "roll_no")
FACULTY = EntitySpec("Faculty", FacultyOut, Faculty, "employee_id")
COURSE = EntitySpec("Course", CourseOut, Course, "code")
ROOM = EntitySpec("Room", RoomOut, Room, "name")
SCENARIO = EntitySpec("Scenario", ScenarioOut, Scenario)
TIMETABLE_ENTRY = EntitySpec("TimetableEntry", TimetableEntryOut, TimetableEntry)


class Repository(Protocol[RecordT]):
    """Keyed CRUD for one entity kind; read paths return None instead of raising."""

    spec: EntitySpec

    def list_all(self) -> list[RecordT]: ...

    def get(self, record_id: str) -> RecordT | None: ...

    def create(self, payload: BaseModel | dict[str, Any]) -> RecordT: ...

    def update(self, record_id: str, changes: BaseModel | dict[str, Any]) -> RecordT | None: ...

    def delete(self, record_id: str) -> bool: ...

    def count(self) -> int: ...


class TimetableEntryRepository(Repository[TimetableEntryOut], Protocol):
    def list_by_scenario(self, scenario_id: str | None) -> list[TimetableEntryOut]: ...


class ScenarioRepository(Repository[ScenarioOut], Protocol):
    def activate(self, scenario_id: str) -> ScenarioOut | None: ...

    def get_active(self) -> ScenarioOut | None: ...


def _field_names_by_alias(record_type: type[BaseModel]) -> dict[str, str]:
    names: dict[str, str] = {}
    for name, field in record_type.model_fields.items():
        names[name] = name
        if field.alias:
            names[field.alias] = name
    return names


def normalize_changes(spec: EntitySpec, changes: BaseModel | dict[str, Any]) -> dict[str, Any]:
    if isinstance(changes, BaseModel):
        raw = changes.model_dump(exclude_unset=True)
    else:
        raw = dict(changes)
    names = _field_names_by_alias(spec.record_type)
    normalized: dict[str, Any] = {}
    for key, value in raw.items():
        name = names.get(key)
        if name is None or name in IMMUTABLE_FIELDS:
            continue
        normalized[name] = value
    return normalized


def validate_record(spec: EntitySpec[RecordT], data: dict[str, Any]) -> RecordT:
    try:
        return spec.record_type.model_validate(data)
    except ValidationError as exc:
        raise InvalidInputError(
            f"Invalid {spec.name} data",
            details={"errors": exc.errors(include_url=False, include_context=False, include_input=False)},
        ) from exc


def new_record(spec: EntitySpec[RecordT], payload: BaseModel | dict[str, Any]) -> RecordT:
    data = normalize_changes(spec, payload)
    data["id"] = str(uuid.uuid4())
    data["created_at"] = datetime.now(timezone.utc)
    return validate_record(spec, data)


def merge_record(spec: EntitySpec[RecordT], current: RecordT, changes: BaseModel | dict[str, Any]) -> RecordT:
    merged = current.model_dump()
    merged.update(normalize_changes(spec, changes))
    merged["id"] = current.id
    merged["created_at"] = current.created_at
    return validate_record(spec, merged)


def unique_value(spec: EntitySpec, record: BaseModel) -> Any:
    if spec.unique_field is None:
        return None
    return getattr(record, spec.unique_field)
