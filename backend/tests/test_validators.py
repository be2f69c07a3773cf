from datetime import datetime, timezone

import pytest

from edutable.schemas.course import CourseOut
from edutable.schemas.faculty import FacultyOut
from edutable.schemas.room import RoomOut
from edutable.schemas.student import StudentOut
from edutable.schemas.timetable import TimetableEntryOut
from edutable.schemas.validation import CreditLoadBand
from edutable.services.validators import (
    check_faculty_load,
    check_room_capacity,
    classify_credit_load,
    credit_load_report,
    expected_section_size,
    scheduled_hours,
)

CREATED = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_entry(entry_id: str, start: str, end: str, faculty_id: str = "f1", day: int = 0) -> TimetableEntryOut:
    return TimetableEntryOut(
        id=entry_id,
        created_at=CREATED,
        scenario_id="s1",
        course_id="c1",
        faculty_id=faculty_id,
        room_id="r1",
        day_of_week=day,
        start_time=start,
        end_time=end,
    )


def make_student(student_id: str, credits: int = 16, section: str | None = "A") -> StudentOut:
    return StudentOut(
        id=student_id,
        created_at=CREATED,
        roll_no=f"R-{student_id}",
        name=f"Student {student_id}",
        program="B.Ed.",
        semester=1,
        total_credits=credits,
        section=section,
    )


@pytest.mark.parametrize(
    ("credits", "band"),
    [
        (11, CreditLoadBand.under_loaded),
        (12, CreditLoadBand.normal),
        (20, CreditLoadBand.normal),
        (21, CreditLoadBand.over_loaded),
    ],
)
def test_credit_load_bands(credits, band):
    assert classify_credit_load(credits) == band


def test_credit_load_report_counts_every_band():
    report = credit_load_report([make_student("1", 8), make_student("2", 18), make_student("3", 24), make_student("4", 12)])

    assert report.counts == {
        CreditLoadBand.under_loaded: 1,
        CreditLoadBand.normal: 2,
        CreditLoadBand.over_loaded: 1,
    }
    assert [row.band for row in report.students][:2] == [CreditLoadBand.under_loaded, CreditLoadBand.normal]


def test_scheduled_hours_sums_only_that_faculty():
    entries = [
        make_entry("a", "09:00", "10:30"),
        make_entry("b", "11:00", "12:00", day=1),
        make_entry("c", "09:00", "12:00", faculty_id="f2"),
    ]

    assert scheduled_hours("f1", entries) == 2.5


def test_faculty_load_within_limit_passes():
    faculty = FacultyOut(id="f1", created_at=CREATED, employee_id="E1", name="Dr. A", department="Ed", max_hours_per_week=3)
    existing = [make_entry("a", "09:00", "11:00")]

    assert check_faculty_load(faculty, make_entry("b", "11:00", "12:00"), existing) is None


def test_faculty_load_over_limit_reports_issue():
    faculty = FacultyOut(id="f1", created_at=CREATED, employee_id="E1", name="Dr. A", department="Ed", max_hours_per_week=3)
    existing = [make_entry("a", "09:00", "11:00")]

    issue = check_faculty_load(faculty, make_entry("b", "11:00", "13:00"), existing)

    assert issue is not None
    assert issue.kind == "faculty_hours"
    assert issue.limit == 3
    assert issue.requested == 4
    assert "Dr. A" in issue.message


def test_faculty_load_does_not_count_candidate_twice():
    faculty = FacultyOut(id="f1", created_at=CREATED, employee_id="E1", name="Dr. A", department="Ed", max_hours_per_week=2)
    entry = make_entry("a", "09:00", "11:00")

    assert check_faculty_load(faculty, entry, [entry]) is None


def test_section_size_counts_students_in_group():
    students = [make_student("1", section="A"), make_student("2", section="A"), make_student("3", section="B")]

    assert expected_section_size("A", None, students) == 2


def test_section_size_falls_back_to_course_enrollment():
    course = CourseOut(id="c1", created_at=CREATED, code="EDU101", title="Foundations", credits=4, type="Major", max_enrollment=40)

    assert expected_section_size("Z", course, [make_student("1", section="A")]) == 40
    assert expected_section_size(None, course, []) == 40
    assert expected_section_size(None, None, []) == 0


def test_room_capacity_check():
    room = RoomOut(id="r1", created_at=CREATED, name="A301", type="classroom", capacity=30)

    assert check_room_capacity(room, 30) is None
    issue = check_room_capacity(room, 31)
    assert issue is not None
    assert issue.kind == "room_capacity"
    assert (issue.limit, issue.requested) == (30, 31)
