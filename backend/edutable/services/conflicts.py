from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass

from edutable.schemas.common import parse_time_to_minutes
from edutable.schemas.conflict import ConflictDetail, ConflictDimension, ConflictPair, ConflictResult
from edutable.schemas.timetable import MoveEntryRequest, TimetableEntryOut


@dataclass(frozen=True)
class Slot:
    """Half-open [start_minute, end_minute) interval on one weekday."""

    day_of_week: int
    start_minute: int
    end_minute: int

    @classmethod
    def of(cls, entry: TimetableEntryOut) -> "Slot":
        return cls(
            day_of_week=entry.day_of_week,
            start_minute=parse_time_to_minutes(entry.start_time),
            end_minute=parse_time_to_minutes(entry.end_time),
        )

    def overlaps(self, other: "Slot") -> bool:
        # Touching boundaries (10:00-11:00 after 09:00-10:00) do not overlap.
        return (
            self.day_of_week == other.day_of_week
            and self.start_minute < other.end_minute
            and other.start_minute < self.end_minute
        )


def shared_dimensions(first: TimetableEntryOut, second: TimetableEntryOut) -> list[ConflictDimension]:
    dimensions: list[ConflictDimension] = []
    if first.room_id == second.room_id:
        dimensions.append(ConflictDimension.room)
    if first.faculty_id == second.faculty_id:
        dimensions.append(ConflictDimension.faculty)
    # Entries without a student group never clash on the group dimension.
    if first.student_group and first.student_group == second.student_group:
        dimensions.append(ConflictDimension.group)
    return dimensions


def check_conflict(candidate: TimetableEntryOut, existing: Iterable[TimetableEntryOut]) -> ConflictResult:
    candidate_slot = Slot.of(candidate)
    conflicts: list[ConflictDetail] = []
    for other in existing:
        if other.id == candidate.id:
            continue
        if not candidate_slot.overlaps(Slot.of(other)):
            continue
        for dimension in shared_dimensions(candidate, other):
            conflicts.append(ConflictDetail(entry=other, dimension=dimension))
    return ConflictResult(conflicts=conflicts)


def find_conflicting_pairs(entries: Iterable[TimetableEntryOut]) -> list[ConflictPair]:
    by_day: dict[int, list[tuple[TimetableEntryOut, Slot]]] = defaultdict(list)
    for entry in entries:
        by_day[entry.day_of_week].append((entry, Slot.of(entry)))

    pairs: list[ConflictPair] = []
    for day in sorted(by_day):
        day_entries = by_day[day]
        for index, (first, first_slot) in enumerate(day_entries):
            for second, second_slot in day_entries[index + 1:]:
                if first.id == second.id or not first_slot.overlaps(second_slot):
                    continue
                dimensions = shared_dimensions(first, second)
                if dimensions:
                    pairs.append(ConflictPair(first_id=first.id, second_id=second.id, dimensions=dimensions))
    return pairs


def relocate(entry: TimetableEntryOut, target: MoveEntryRequest) -> TimetableEntryOut:
    changes = {
        "day_of_week": target.day_of_week,
        "start_time": target.start_time,
        "end_time": target.end_time,
    }
    if target.room_id is not None:
        changes["room_id"] = target.room_id
    return entry.model_copy(update=changes)


def check_move(
    entry: TimetableEntryOut,
    target: MoveEntryRequest,
    scenario_entries: Iterable[TimetableEntryOut],
) -> ConflictResult:
    moved = relocate(entry, target)
    peers = [other for other in scenario_entries if other.scenario_id == entry.scenario_id]
    return check_conflict(moved, peers)
