from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel

from edutable.core.config import LoadPolicy
from edutable.core.exceptions import CapacityExceededError, NotFoundError, SlotConflictError
from edutable.repositories.base import TIMETABLE_ENTRY, merge_record, new_record
from edutable.repositories.store import EntityStore
from edutable.schemas.conflict import ConflictResult
from edutable.schemas.timetable import MoveEntryRequest, TimetableEntryCreate, TimetableEntryOut
from edutable.schemas.validation import EntryCheckResult, TimetableEntryResult, ValidationIssue
from edutable.services.conflicts import check_conflict, check_move, relocate
from edutable.services.scenarios import ScenarioService
from edutable.services.validators import check_faculty_load, check_room_capacity, expected_section_size

logger = logging.getLogger(__name__)


def _conflict_payload(result: ConflictResult) -> list[dict]:
    return [detail.model_dump(mode="json", by_alias=True) for detail in result.conflicts]


def _issue_payload(issues: list[ValidationIssue]) -> list[dict]:
    return [issue.model_dump(mode="json", by_alias=True) for issue in issues]


class TimetableService:
    """Write path for timetable entries: conflict and load checks, commit, then metric refresh."""

    def __init__(
        self,
        store: EntityStore,
        scenarios: ScenarioService,
        *,
        faculty_hours_policy: LoadPolicy = "advisory",
        room_capacity_policy: LoadPolicy = "advisory",
    ):
        self.store = store
        self.scenarios = scenarios
        self.faculty_hours_policy = faculty_hours_policy
        self.room_capacity_policy = room_capacity_policy

    def list_entries(self, scenario_id: str | None = None) -> list[TimetableEntryOut]:
        return self.store.timetable.list_by_scenario(scenario_id)

    def get_entry(self, entry_id: str) -> TimetableEntryOut | None:
        return self.store.timetable.get(entry_id)

    def scenario_entries(self, scenario_id: str | None) -> list[TimetableEntryOut]:
        # Unscoped entries are only compared with other unscoped entries.
        return [entry for entry in self.store.timetable.list_all() if entry.scenario_id == scenario_id]

    def load_issues(self, candidate: TimetableEntryOut, peers: list[TimetableEntryOut]) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        faculty = self.store.faculty.get(candidate.faculty_id)
        if faculty is not None:
            issue = check_faculty_load(faculty, candidate, peers)
            if issue is not None:
                issues.append(issue)
        room = self.store.rooms.get(candidate.room_id)
        if room is not None:
            course = self.store.courses.get(candidate.course_id)
            size = expected_section_size(candidate.student_group, course, self.store.students.list_all())
            issue = check_room_capacity(room, size)
            if issue is not None:
                issues.append(issue)
        return issues

    def _is_blocking(self, issue: ValidationIssue) -> bool:
        if issue.kind == "faculty_hours":
            return self.faculty_hours_policy == "enforce"
        return self.room_capacity_policy == "enforce"

    def evaluate(self, candidate: TimetableEntryOut, conflicts: ConflictResult | None = None) -> EntryCheckResult:
        peers = self.scenario_entries(candidate.scenario_id)
        if conflicts is None:
            conflicts = check_conflict(candidate, peers)
        issues = self.load_issues(candidate, peers)
        return EntryCheckResult(
            conflicts=conflicts.conflicts,
            issues=issues,
            blocking_issues=[issue for issue in issues if self._is_blocking(issue)],
        )

    def check_entry(self, payload: TimetableEntryCreate) -> EntryCheckResult:
        with self.store.lock:
            return self.evaluate(new_record(TIMETABLE_ENTRY, payload))

    def _ensure_committable(self, result: EntryCheckResult, action: str) -> None:
        if result.conflicts:
            conflict_result = ConflictResult(conflicts=result.conflicts)
            logger.info("Rejected %s: conflicts with %s", action, ", ".join(conflict_result.entry_ids))
            raise SlotConflictError(
                f"Cannot {action}: the slot overlaps {len(conflict_result.entry_ids)} existing entr"
                f"{'y' if len(conflict_result.entry_ids) == 1 else 'ies'}",
                _conflict_payload(conflict_result),
            )
        if result.blocking_issues:
            logger.info("Rejected %s: %s", action, "; ".join(issue.message for issue in result.blocking_issues))
            raise CapacityExceededError(
                f"Cannot {action}: {result.blocking_issues[0].message}",
                _issue_payload(result.blocking_issues),
            )

    def create_entry(self, payload: TimetableEntryCreate | dict[str, Any]) -> TimetableEntryResult:
        with self.store.lock:
            candidate = new_record(TIMETABLE_ENTRY, payload)
            result = self.evaluate(candidate)
            self._ensure_committable(result, "schedule entry")
            entry = self.store.timetable.create(candidate.model_dump(exclude={"id", "created_at"}))
            self.scenarios.refresh([entry.scenario_id], [entry.faculty_id])
        logger.info("Scheduled entry %s on day %s %s-%s", entry.id, entry.day_of_week, entry.start_time, entry.end_time)
        return TimetableEntryResult(entry=entry, warnings=result.issues)

    def _commit_change(self, current: TimetableEntryOut, changed: TimetableEntryOut, result: EntryCheckResult, action: str) -> TimetableEntryResult:
        self._ensure_committable(result, action)
        entry = self.store.timetable.update(current.id, changed.model_dump(exclude={"id", "created_at"}))
        self.scenarios.refresh(
            [current.scenario_id, entry.scenario_id],
            [current.faculty_id, entry.faculty_id],
        )
        return TimetableEntryResult(entry=entry, warnings=result.issues)

    def update_entry(self, entry_id: str, changes: BaseModel | dict[str, Any]) -> TimetableEntryResult:
        with self.store.lock:
            current = self.store.timetable.get(entry_id)
            if current is None:
                raise NotFoundError("TimetableEntry", entry_id)
            changed = merge_record(TIMETABLE_ENTRY, current, changes)
            result = self.evaluate(changed)
            outcome = self._commit_change(current, changed, result, "update entry")
        logger.info("Updated entry %s", entry_id)
        return outcome

    def move_entry(self, entry_id: str, target: MoveEntryRequest) -> TimetableEntryResult:
        """Reschedule an entry; any overlap in its scenario rejects the whole move and leaves the store untouched."""
        with self.store.lock:
            current = self.store.timetable.get(entry_id)
            if current is None:
                raise NotFoundError("TimetableEntry", entry_id)
            conflicts = check_move(current, target, self.scenario_entries(current.scenario_id))
            moved = relocate(current, target)
            result = self.evaluate(moved, conflicts)
            outcome = self._commit_change(current, moved, result, "move entry")
        logger.info(
            "Moved entry %s to day %s %s-%s", entry_id, target.day_of_week, target.start_time, target.end_time
        )
        return outcome

    def delete_entry(self, entry_id: str) -> bool:
        with self.store.lock:
            current = self.store.timetable.get(entry_id)
            if current is None:
                return False
            deleted = self.store.timetable.delete(entry_id)
            self.scenarios.refresh([current.scenario_id], [current.faculty_id])
        logger.info("Deleted entry %s", entry_id)
        return deleted
