"""Scenario health metrics.

Every function here is a pure function of the entry set and the resources
passed in, so recomputing on an unchanged scenario always yields the same
``ScenarioMetrics``.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from edutable.core.config import Settings
from edutable.schemas.common import parse_time_to_minutes
from edutable.schemas.conflict import ConflictDimension, ConflictPair
from edutable.schemas.faculty import FacultyOut
from edutable.schemas.room import RoomOut
from edutable.schemas.scenario import ScenarioMetrics
from edutable.schemas.timetable import TimetableEntryOut
from edutable.services.conflicts import Slot, find_conflicting_pairs
from edutable.services.validators import scheduled_hours

GROUP_CONFLICT_PENALTY = 10
OTHER_CONFLICT_PENALTY = 5


@dataclass(frozen=True)
class TeachingGrid:
    working_days: int = 5
    day_start_minute: int = 9 * 60
    day_end_minute: int = 17 * 60
    period_minutes: int = 60

    @classmethod
    def from_settings(cls, settings: Settings) -> "TeachingGrid":
        return cls(
            working_days=settings.working_days,
            day_start_minute=parse_time_to_minutes(settings.day_start),
            day_end_minute=parse_time_to_minutes(settings.day_end),
            period_minutes=settings.period_minutes,
        )

    def periods(self) -> list[tuple[int, int]]:
        periods: list[tuple[int, int]] = []
        start = self.day_start_minute
        while start < self.day_end_minute:
            end = min(start + self.period_minutes, self.day_end_minute)
            periods.append((start, end))
            start = end
        return periods

    @property
    def slots_per_room(self) -> int:
        return self.working_days * len(self.periods())


def _clamp_percent(value: float) -> int:
    return max(0, min(100, round(value)))


def room_utilization(entries: Iterable[TimetableEntryOut], rooms: Sequence[RoomOut], grid: TeachingGrid) -> int:
    if not rooms or grid.slots_per_room == 0:
        return 0
    room_ids = {room.id for room in rooms}
    periods = grid.periods()
    occupied: set[tuple[str, int, int]] = set()
    for entry in entries:
        if entry.room_id not in room_ids or entry.day_of_week >= grid.working_days:
            continue
        slot = Slot.of(entry)
        for index, (start, end) in enumerate(periods):
            if slot.overlaps(Slot(entry.day_of_week, start, end)):
                occupied.add((entry.room_id, entry.day_of_week, index))
    return _clamp_percent(100 * len(occupied) / (len(rooms) * grid.slots_per_room))


def faculty_balance(entries: Sequence[TimetableEntryOut], faculty: Sequence[FacultyOut]) -> int:
    if not faculty:
        return 0
    scores: list[float] = []
    for member in faculty:
        cap = member.max_hours_per_week
        hours = scheduled_hours(member.id, entries)
        if hours <= cap:
            scores.append(hours / cap)
        else:
            scores.append(max(0.0, 1 - (hours - cap) / cap))
    return _clamp_percent(100 * sum(scores) / len(scores))


def student_satisfaction(pairs: Sequence[ConflictPair]) -> int:
    group_pairs = sum(1 for pair in pairs if ConflictDimension.group in pair.dimensions)
    other_pairs = len(pairs) - group_pairs
    return _clamp_percent(100 - GROUP_CONFLICT_PENALTY * group_pairs - OTHER_CONFLICT_PENALTY * other_pairs)


def recompute_metrics(
    entries: Iterable[TimetableEntryOut],
    rooms: Sequence[RoomOut],
    faculty: Sequence[FacultyOut],
    grid: TeachingGrid,
) -> ScenarioMetrics:
    entry_list = list(entries)
    pairs = find_conflicting_pairs(entry_list)
    return ScenarioMetrics(
        conflicts=len(pairs),
        student_satisfaction=student_satisfaction(pairs),
        faculty_balance=faculty_balance(entry_list, faculty),
        room_utilization=room_utilization(entry_list, rooms, grid),
    )
