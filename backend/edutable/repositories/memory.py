from __future__ import annotations

import threading
from typing import Any, Generic

from pydantic import BaseModel

from edutable.core.exceptions import DuplicateKeyError
from edutable.repositories.base import EntitySpec, RecordT, merge_record, new_record, unique_value
from edutable.schemas.scenario import ScenarioOut
from edutable.schemas.timetable import TimetableEntryOut


class InMemoryRepository(Generic[RecordT]):
    """Ordered id -> record mapping. Records are copied in and out so callers never hold stored state."""

    def __init__(self, spec: EntitySpec[RecordT], lock: threading.RLock | None = None) -> None:
        self.spec = spec
        self._lock = lock or threading.RLock()
        self._records: dict[str, RecordT] = {}

    def list_all(self) -> list[RecordT]:
        with self._lock:
            return [record.model_copy(deep=True) for record in self._records.values()]

    def get(self, record_id: str) -> RecordT | None:
        with self._lock:
            record = self._records.get(record_id)
            return record.model_copy(deep=True) if record is not None else None

    def create(self, payload: BaseModel | dict[str, Any]) -> RecordT:
        record = new_record(self.spec, payload)
        with self._lock:
            self._ensure_unique(record)
            self._records[record.id] = record
            return record.model_copy(deep=True)

    def update(self, record_id: str, changes: BaseModel | dict[str, Any]) -> RecordT | None:
        with self._lock:
            current = self._records.get(record_id)
            if current is None:
                return None
            updated = merge_record(self.spec, current, changes)
            self._ensure_unique(updated)
            self._records[record_id] = updated
            return updated.model_copy(deep=True)

    def delete(self, record_id: str) -> bool:
        with self._lock:
            return self._records.pop(record_id, None) is not None

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def _ensure_unique(self, record: RecordT) -> None:
        value = unique_value(self.spec, record)
        if value is None:
            return
        for existing in self._records.values():
            if existing.id != record.id and getattr(existing, self.spec.unique_field) == value:
                raise DuplicateKeyError(self.spec.name, self.spec.unique_field, value)


class InMemoryTimetableEntryRepository(InMemoryRepository[TimetableEntryOut]):
    def list_by_scenario(self, scenario_id: str | None) -> list[TimetableEntryOut]:
        with self._lock:
            return [
                entry.model_copy(deep=True)
                for entry in self._records.values()
                if scenario_id is None or entry.scenario_id == scenario_id
            ]


class InMemoryScenarioRepository(InMemoryRepository[ScenarioOut]):
    def create(self, payload: BaseModel | dict[str, Any]) -> ScenarioOut:
        with self._lock:
            created = super().create(payload)
            if created.is_active:
                return self.activate(created.id)
            return created

    def update(self, record_id: str, changes: BaseModel | dict[str, Any]) -> ScenarioOut | None:
        with self._lock:
            updated = super().update(record_id, changes)
            if updated is not None and updated.is_active:
                return self.activate(record_id)
            return updated

    def activate(self, scenario_id: str) -> ScenarioOut | None:
        with self._lock:
            if scenario_id not in self._records:
                return None
            for record_id, record in self._records.items():
                should_be_active = record_id == scenario_id
                if record.is_active != should_be_active:
                    self._records[record_id] = record.model_copy(update={"is_active": should_be_active})
            return self._records[scenario_id].model_copy(deep=True)

    def get_active(self) -> ScenarioOut | None:
        with self._lock:
            for record in self._records.values():
                if record.is_active:
                    return record.model_copy(deep=True)
            return None
