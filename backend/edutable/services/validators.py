from __future__ import annotations

from collections.abc import Iterable

from edutable.schemas.course import CourseOut
from edutable.schemas.faculty import FacultyOut
from edutable.schemas.room import RoomOut
from edutable.schemas.student import StudentOut
from edutable.schemas.timetable import TimetableEntryOut
from edutable.schemas.validation import (
    CreditLoadBand,
    CreditLoadReport,
    StudentCreditLoad,
    ValidationIssue,
)

CREDIT_LOAD_MIN = 12
CREDIT_LOAD_MAX = 20


def scheduled_hours(faculty_id: str, entries: Iterable[TimetableEntryOut]) -> float:
    minutes = sum(entry.duration_minutes for entry in entries if entry.faculty_id == faculty_id)
    return minutes / 60


def check_faculty_load(
    faculty: FacultyOut,
    candidate: TimetableEntryOut,
    entries: Iterable[TimetableEntryOut],
) -> ValidationIssue | None:
    others = [entry for entry in entries if entry.id != candidate.id]
    requested = scheduled_hours(faculty.id, others) + candidate.duration_minutes / 60
    if requested <= faculty.max_hours_per_week:
        return None
    return ValidationIssue(
        kind="faculty_hours",
        resource_id=faculty.id,
        message=(
            f"{faculty.name} would teach {requested:g} hours per week, "
            f"above the limit of {faculty.max_hours_per_week}"
        ),
        limit=faculty.max_hours_per_week,
        requested=requested,
    )


def expected_section_size(
    student_group: str | None,
    course: CourseOut | None,
    students: Iterable[StudentOut],
) -> int:
    size = 0
    if student_group:
        size = sum(1 for student in students if student.section == student_group)
    if size == 0 and course is not None and course.max_enrollment is not None:
        return course.max_enrollment
    return size


def check_room_capacity(room: RoomOut, size: int) -> ValidationIssue | None:
    if size <= room.capacity:
        return None
    return ValidationIssue(
        kind="room_capacity",
        resource_id=room.id,
        message=f"Room {room.name} seats {room.capacity} but the section has {size} students",
        limit=room.capacity,
        requested=size,
    )


def classify_credit_load(total_credits: int) -> CreditLoadBand:
    if total_credits < CREDIT_LOAD_MIN:
        return CreditLoadBand.under_loaded
    if total_credits > CREDIT_LOAD_MAX:
        return CreditLoadBand.over_loaded
    return CreditLoadBand.normal


def credit_load_report(students: Iterable[StudentOut]) -> CreditLoadReport:
    rows: list[StudentCreditLoad] = []
    counts = {band: 0 for band in CreditLoadBand}
    for student in students:
        band = classify_credit_load(student.total_credits)
        counts[band] += 1
        rows.append(
            StudentCreditLoad(
                student_id=student.id,
                roll_no=student.roll_no,
                name=student.name,
                total_credits=student.total_credits,
                band=band,
            )
        )
    return CreditLoadReport(students=rows, counts=counts)
