import pytest

from edutable.core.exceptions import CapacityExceededError, NotFoundError, SlotConflictError
from edutable.schemas.timetable import MoveEntryRequest, TimetableEntryCreate
from edutable.services.metrics import TeachingGrid
from edutable.services.scenarios import ScenarioService
from edutable.services.timetable import TimetableService


@pytest.fixture(params=["store", "sql_store"])
def any_store(request):
    return request.getfixturevalue(request.param)


@pytest.fixture
def resources(any_store):
    faculty = any_store.faculty.create(
        {"employee_id": "FAC001", "name": "Dr. Sarah Wilson", "department": "Education", "max_hours_per_week": 4}
    )
    other_faculty = any_store.faculty.create(
        {"employee_id": "FAC002", "name": "Prof. Michael Brown", "department": "Mathematics"}
    )
    room = any_store.rooms.create({"name": "A301", "type": "classroom", "capacity": 30})
    lab = any_store.rooms.create({"name": "IT-LAB-01", "type": "lab", "capacity": 30})
    course = any_store.courses.create({"code": "EDU101", "title": "Foundations of Education", "credits": 4, "type": "Major", "max_enrollment": 40})
    scenario = any_store.scenarios.create({"name": "Current Semester", "is_active": True})
    return {
        "faculty": faculty,
        "other_faculty": other_faculty,
        "room": room,
        "lab": lab,
        "course": course,
        "scenario": scenario,
    }


def build_service(any_store, **policies):
    return TimetableService(any_store, ScenarioService(any_store, TeachingGrid()), **policies)


def entry_payload(resources, start="09:00", end="10:00", day=0, **overrides) -> TimetableEntryCreate:
    values = {
        "scenario_id": resources["scenario"].id,
        "course_id": resources["course"].id,
        "faculty_id": resources["faculty"].id,
        "room_id": resources["room"].id,
        "student_group": None,
        "day_of_week": day,
        "start_time": start,
        "end_time": end,
    }
    values.update(overrides)
    return TimetableEntryCreate(**values)


def test_create_entry_refreshes_scenario_and_faculty_hours(any_store, resources):
    service = build_service(any_store)

    result = service.create_entry(entry_payload(resources, "09:00", "11:00"))

    assert result.entry.id
    scenario = any_store.scenarios.get(resources["scenario"].id)
    assert scenario.metrics.conflicts == 0
    assert scenario.metrics.student_satisfaction == 100
    assert any_store.faculty.get(resources["faculty"].id).current_hours == 2


def test_overlapping_entry_is_rejected(any_store, resources):
    service = build_service(any_store)
    first = service.create_entry(entry_payload(resources, "09:00", "10:00")).entry

    with pytest.raises(SlotConflictError) as exc_info:
        service.create_entry(
            entry_payload(resources, "09:30", "10:30", faculty_id=resources["other_faculty"].id)
        )

    assert exc_info.value.status_code == 409
    conflicts = exc_info.value.conflicts
    assert [item["entry"]["id"] for item in conflicts] == [first.id]
    assert conflicts[0]["dimension"] == "room"
    assert any_store.timetable.count() == 1


def test_touching_entry_is_accepted(any_store, resources):
    service = build_service(any_store)
    service.create_entry(entry_payload(resources, "09:00", "10:00"))

    service.create_entry(entry_payload(resources, "10:00", "11:00"))

    assert any_store.timetable.count() == 2


def test_entries_in_other_scenarios_do_not_conflict(any_store, resources):
    service = build_service(any_store)
    draft = any_store.scenarios.create({"name": "Draft"})
    service.create_entry(entry_payload(resources))

    service.create_entry(entry_payload(resources, scenario_id=draft.id))

    assert len(service.list_entries(draft.id)) == 1
    assert len(service.list_entries()) == 2


def test_check_entry_does_not_write(any_store, resources):
    service = build_service(any_store)
    service.create_entry(entry_payload(resources))

    result = service.check_entry(entry_payload(resources, "09:30", "10:30"))

    assert not result.can_commit
    assert {detail.dimension.value for detail in result.conflicts} == {"room", "faculty"}
    assert any_store.timetable.count() == 1


def test_rejected_move_leaves_store_unchanged(any_store, resources):
    service = build_service(any_store)
    blocker = service.create_entry(entry_payload(resources, "11:00", "12:00", day=1)).entry
    mover = service.create_entry(
        entry_payload(resources, "09:00", "10:00", faculty_id=resources["other_faculty"].id)
    ).entry
    target = MoveEntryRequest(day_of_week=1, start_time="11:30", end_time="12:30")
    before = [entry.model_dump() for entry in any_store.timetable.list_all()]
    metrics_before = any_store.scenarios.get(resources["scenario"].id).metrics

    for _ in range(2):
        with pytest.raises(SlotConflictError) as exc_info:
            service.move_entry(mover.id, target)
        assert [item["entry"]["id"] for item in exc_info.value.conflicts] == [blocker.id]

    assert [entry.model_dump() for entry in any_store.timetable.list_all()] == before
    assert any_store.scenarios.get(resources["scenario"].id).metrics == metrics_before


def test_move_to_free_slot_updates_entry(any_store, resources):
    service = build_service(any_store)
    entry = service.create_entry(entry_payload(resources, "09:00", "10:00")).entry

    moved = service.move_entry(
        entry.id,
        MoveEntryRequest(day_of_week=0, start_time="09:30", end_time="10:30", room_id=resources["lab"].id),
    ).entry

    assert (moved.start_time, moved.end_time, moved.room_id) == ("09:30", "10:30", resources["lab"].id)
    assert any_store.timetable.get(entry.id).room_id == resources["lab"].id


def test_move_unknown_entry_raises(any_store, resources):
    service = build_service(any_store)

    with pytest.raises(NotFoundError):
        service.move_entry("missing", MoveEntryRequest(day_of_week=0, start_time="09:00", end_time="10:00"))


def test_advisory_policy_returns_warnings(any_store, resources):
    service = build_service(any_store)
    service.create_entry(entry_payload(resources, "09:00", "12:00"))

    # 40 expected students from max enrollment in a 30-seat room, and a fifth weekly hour.
    result = service.create_entry(entry_payload(resources, "09:00", "11:00", day=1))

    kinds = sorted(issue.kind for issue in result.warnings)
    assert kinds == ["faculty_hours", "room_capacity"]
    assert any_store.timetable.count() == 2


def test_enforced_faculty_hours_reject_the_write(any_store, resources):
    service = build_service(any_store, faculty_hours_policy="enforce")
    service.create_entry(entry_payload(resources, "09:00", "12:00"))

    with pytest.raises(CapacityExceededError) as exc_info:
        service.create_entry(entry_payload(resources, "09:00", "11:00", day=1))

    assert exc_info.value.issues[0]["kind"] == "faculty_hours"
    assert any_store.timetable.count() == 1


def test_enforced_room_capacity_rejects_the_write(any_store, resources):
    service = build_service(any_store, room_capacity_policy="enforce")

    with pytest.raises(CapacityExceededError):
        service.create_entry(entry_payload(resources))

    assert any_store.timetable.count() == 0


def test_section_size_from_students_fits_the_room(any_store, resources):
    any_store.students.create({"roll_no": "2024001", "name": "Alice Johnson", "program": "B.Ed.", "semester": 3, "section": "A"})
    service = build_service(any_store, room_capacity_policy="enforce")

    result = service.create_entry(entry_payload(resources, student_group="A"))

    assert result.warnings == []


def test_unknown_references_skip_load_checks(any_store, resources):
    service = build_service(any_store, faculty_hours_policy="enforce", room_capacity_policy="enforce")

    result = service.create_entry(
        entry_payload(resources, course_id="ghost-course", faculty_id="ghost-faculty", room_id="ghost-room")
    )

    assert result.warnings == []


def test_delete_entry_recomputes_metrics(any_store, resources):
    service = build_service(any_store)
    entry = service.create_entry(entry_payload(resources, "09:00", "11:00")).entry
    assert any_store.scenarios.get(resources["scenario"].id).metrics.room_utilization > 0

    assert service.delete_entry(entry.id) is True
    assert service.delete_entry(entry.id) is False

    assert any_store.scenarios.get(resources["scenario"].id).metrics.room_utilization == 0
    assert any_store.faculty.get(resources["faculty"].id).current_hours == 0
