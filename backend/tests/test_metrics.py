from datetime import datetime, timezone

from edutable.core.config import Settings
from edutable.schemas.conflict import ConflictDimension, ConflictPair
from edutable.schemas.faculty import FacultyOut
from edutable.schemas.room import RoomOut
from edutable.schemas.timetable import TimetableEntryOut
from edutable.services.metrics import (
    TeachingGrid,
    faculty_balance,
    recompute_metrics,
    room_utilization,
    student_satisfaction,
)

CREATED = datetime(2024, 1, 1, tzinfo=timezone.utc)
GRID = TeachingGrid()


def make_entry(entry_id: str, start: str = "09:00", end: str = "10:00", **overrides) -> TimetableEntryOut:
    values = {
        "id": entry_id,
        "created_at": CREATED,
        "scenario_id": "s1",
        "course_id": "c1",
        "faculty_id": "f1",
        "room_id": "r1",
        "day_of_week": 0,
        "start_time": start,
        "end_time": end,
    }
    values.update(overrides)
    return TimetableEntryOut(**values)


def make_room(room_id: str = "r1") -> RoomOut:
    return RoomOut(id=room_id, created_at=CREATED, name=f"Room {room_id}", type="classroom", capacity=40)


def make_faculty(faculty_id: str = "f1", max_hours: int = 20) -> FacultyOut:
    return FacultyOut(
        id=faculty_id,
        created_at=CREATED,
        employee_id=f"E-{faculty_id}",
        name=f"Faculty {faculty_id}",
        department="Education",
        max_hours_per_week=max_hours,
    )


def test_default_grid_has_forty_slots_per_room():
    assert len(GRID.periods()) == 8
    assert GRID.slots_per_room == 40


def test_grid_from_settings_uses_configured_day():
    grid = TeachingGrid.from_settings(Settings(day_start="08:00", day_end="12:30", period_minutes=60, working_days=6))

    assert grid.periods()[-1] == (12 * 60, 12 * 60 + 30)
    assert grid.slots_per_room == 6 * 5


def test_room_utilization_counts_occupied_periods():
    entries = [make_entry("a", "09:00", "11:00")]

    assert room_utilization(entries, [make_room()], GRID) == 5


def test_room_utilization_counts_each_cell_once():
    entries = [
        make_entry("a", "09:00", "10:00"),
        make_entry("b", "09:30", "10:30"),
    ]

    # 09:00-10:00 and 10:00-11:00 are both touched.
    assert room_utilization(entries, [make_room()], GRID) == 5


def test_room_utilization_ignores_unknown_rooms_and_off_grid_days():
    entries = [
        make_entry("a", room_id="elsewhere"),
        make_entry("b", day_of_week=5),
    ]

    assert room_utilization(entries, [make_room()], GRID) == 0
    assert room_utilization(entries, [], GRID) == 0


def test_faculty_balance_rewards_load_up_to_cap():
    faculty = [make_faculty("f1", max_hours=20)]
    light = [make_entry("a", "09:00", "14:00")]
    heavier = light + [make_entry("b", "09:00", "14:00", day_of_week=1)]

    assert faculty_balance(light, faculty) == 25
    assert faculty_balance(heavier, faculty) == 50
    assert faculty_balance(heavier, faculty) > faculty_balance(light, faculty)


def test_faculty_balance_penalizes_overload():
    faculty = [make_faculty("f1", max_hours=4)]
    entries = [make_entry("a", "09:00", "15:00")]

    assert faculty_balance(entries, faculty) == 50
    assert faculty_balance([], []) == 0


def test_student_satisfaction_penalties():
    group_pair = ConflictPair(first_id="a", second_id="b", dimensions=[ConflictDimension.group])
    room_pair = ConflictPair(first_id="a", second_id="c", dimensions=[ConflictDimension.room])

    assert student_satisfaction([]) == 100
    assert student_satisfaction([room_pair]) == 95
    assert student_satisfaction([group_pair]) == 90
    assert student_satisfaction([group_pair] * 11) == 0


def test_recompute_is_idempotent():
    entries = [
        make_entry("a", room_id="r1", student_group="A"),
        make_entry("b", room_id="r2", student_group="A", start_time="09:30", end_time="10:30", faculty_id="f2"),
    ]
    rooms = [make_room("r1"), make_room("r2")]
    faculty = [make_faculty("f1"), make_faculty("f2")]

    first = recompute_metrics(entries, rooms, faculty, GRID)
    second = recompute_metrics(entries, rooms, faculty, GRID)

    assert first == second
    assert first.conflicts == 1
    assert first.student_satisfaction == 90


def test_adding_a_conflict_never_raises_satisfaction():
    rooms = [make_room("r1")]
    faculty = [make_faculty("f1")]
    entries = [make_entry("a")]
    before = recompute_metrics(entries, rooms, faculty, GRID)

    after = recompute_metrics(entries + [make_entry("b", "09:30", "10:30")], rooms, faculty, GRID)

    assert after.conflicts == before.conflicts + 1
    assert after.student_satisfaction <= before.student_satisfaction
