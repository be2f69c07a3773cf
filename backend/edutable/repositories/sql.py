from __future__ import annotations

from datetime import timezone
from typing import Any, Generic

from pydantic import BaseModel
from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from edutable.core.exceptions import DuplicateKeyError
from edutable.repositories.base import EntitySpec, RecordT, merge_record, new_record, unique_value, validate_record
from edutable.schemas.scenario import ScenarioOut
from edutable.schemas.timetable import TimetableEntryOut


class SqlAlchemyRepository(Generic[RecordT]):
    """Repository backed by one ORM table; every call runs in its own committed session."""

    def __init__(self, spec: EntitySpec[RecordT], session_factory: sessionmaker) -> None:
        self.spec = spec
        self._session_factory = session_factory
        self._model = spec.orm_model

    def list_all(self) -> list[RecordT]:
        with self._session_factory() as db:
            rows = db.execute(select(self._model).order_by(self._model.created_at)).scalars()
            return [self._to_record(row) for row in rows]

    def get(self, record_id: str) -> RecordT | None:
        with self._session_factory() as db:
            row = db.get(self._model, record_id)
            return self._to_record(row) if row is not None else None

    def create(self, payload: BaseModel | dict[str, Any]) -> RecordT:
        record = new_record(self.spec, payload)
        with self._session_factory() as db:
            self._ensure_unique(db, record)
            db.add(self._model(**self._to_values(record)))
            self._before_commit(db, record)
            self._commit(db, record)
        return record

    def update(self, record_id: str, changes: BaseModel | dict[str, Any]) -> RecordT | None:
        with self._session_factory() as db:
            row = db.get(self._model, record_id)
            if row is None:
                return None
            updated = merge_record(self.spec, self._to_record(row), changes)
            self._ensure_unique(db, updated)
            for key, value in self._to_values(updated).items():
                if key not in {"id", "created_at"}:
                    setattr(row, key, value)
            self._before_commit(db, updated)
            self._commit(db, updated)
        return updated

    def delete(self, record_id: str) -> bool:
        with self._session_factory() as db:
            row = db.get(self._model, record_id)
            if row is None:
                return False
            db.delete(row)
            db.commit()
            return True

    def count(self) -> int:
        with self._session_factory() as db:
            return db.execute(select(func.count()).select_from(self._model)).scalar_one()

    def _ensure_unique(self, db: Session, record: RecordT) -> None:
        value = unique_value(self.spec, record)
        if value is None:
            return
        column = getattr(self._model, self.spec.unique_field)
        existing = db.execute(
            select(self._model.id).where(column == value, self._model.id != record.id)
        ).scalar_one_or_none()
        if existing is not None:
            raise DuplicateKeyError(self.spec.name, self.spec.unique_field, value)

    def _before_commit(self, db: Session, record: RecordT) -> None:
        pass

    def _commit(self, db: Session, record: RecordT) -> None:
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise DuplicateKeyError(self.spec.name, self.spec.unique_field, unique_value(self.spec, record)) from exc

    def _to_values(self, record: RecordT) -> dict[str, Any]:
        values = record.model_dump(mode="json", exclude={"created_at"})
        values["created_at"] = record.created_at
        return values

    def _to_record(self, row) -> RecordT:
        data = {column.key: getattr(row, column.key) for column in self._model.__table__.columns}
        created_at = data.get("created_at")
        # SQLite drops tzinfo on round-trip; timestamps are always written in UTC.
        if created_at is not None and created_at.tzinfo is None:
            data["created_at"] = created_at.replace(tzinfo=timezone.utc)
        return validate_record(self.spec, data)


class SqlAlchemyTimetableEntryRepository(SqlAlchemyRepository[TimetableEntryOut]):
    def list_by_scenario(self, scenario_id: str | None) -> list[TimetableEntryOut]:
        statement = select(self._model).order_by(self._model.created_at)
        if scenario_id is not None:
            statement = statement.where(self._model.scenario_id == scenario_id)
        with self._session_factory() as db:
            return [self._to_record(row) for row in db.execute(statement).scalars()]


class SqlAlchemyScenarioRepository(SqlAlchemyRepository[ScenarioOut]):
    def _before_commit(self, db: Session, record: ScenarioOut) -> None:
        if record.is_active:
            self._deactivate_others(db, record.id)

    def _deactivate_others(self, db: Session, scenario_id: str) -> None:
        db.execute(
            update(self._model)
            .where(self._model.id != scenario_id)
            .values(is_active=False)
            .execution_options(synchronize_session=False)
        )

    def activate(self, scenario_id: str) -> ScenarioOut | None:
        with self._session_factory() as db:
            row = db.get(self._model, scenario_id)
            if row is None:
                return None
            self._deactivate_others(db, scenario_id)
            row.is_active = True
            db.commit()
            return self._to_record(row)

    def get_active(self) -> ScenarioOut | None:
        with self._session_factory() as db:
            row = db.execute(
                select(self._model).where(self._model.is_active.is_(True)).order_by(self._model.created_at)
            ).scalars().first()
            return self._to_record(row) if row is not None else None
