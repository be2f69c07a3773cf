"""Fixture data loaded into a fresh entity store at startup when ``seed_fixtures`` is on."""

from __future__ import annotations

import logging

from edutable.models.course import CourseType
from edutable.models.room import RoomType
from edutable.models.student import StudentProgram
from edutable.repositories.store import EntityStore

logger = logging.getLogger(__name__)

WORKING_DAYS = ["monday", "tuesday", "wednesday", "thursday", "friday"]


def weekday_availability(start: str, end: str, short_days: dict[str, str] | None = None) -> dict[str, list[dict]]:
    short_days = short_days or {}
    return {
        day: [{"start": start, "end": short_days.get(day, end), "available": True}]
        for day in WORKING_DAYS
    }


STUDENTS = [
    {
        "roll_no": "2024001",
        "name": "Alice Johnson",
        "email": "alice@student.edu",
        "program": StudentProgram.b_ed,
        "semester": 3,
        "total_credits": 18,
        "preferences": {
            "majors": ["Education Technology", "Curriculum Development"],
            "minors": ["Psychology"],
            "skills": ["Research Methods", "Data Analysis"],
            "aec": ["Environmental Studies"],
            "vac": ["Sports & Wellness"],
        },
        "section": "A",
    },
    {
        "roll_no": "2024002",
        "name": "Bob Smith",
        "email": "bob@student.edu",
        "program": StudentProgram.m_ed,
        "semester": 2,
        "total_credits": 20,
        "preferences": {
            "majors": ["Educational Leadership"],
            "minors": ["Statistics"],
            "skills": ["Communication"],
            "aec": ["Constitutional Studies"],
            "vac": ["Arts & Culture"],
        },
        "section": "B",
    },
]

FACULTY = [
    {
        "employee_id": "FAC001",
        "name": "Dr. Sarah Wilson",
        "email": "sarah.wilson@university.edu",
        "department": "Education",
        "expertise": ["Curriculum Development", "Educational Technology", "Assessment"],
        "max_hours_per_week": 20,
        "current_hours": 16,
        "availability": weekday_availability("09:00", "17:00", {"wednesday": "15:00", "friday": "15:00"}),
    },
    {
        "employee_id": "FAC002",
        "name": "Prof. Michael Brown",
        "email": "michael.brown@university.edu",
        "department": "Mathematics",
        "expertise": ["Statistics", "Research Methods", "Data Analysis"],
        "max_hours_per_week": 18,
        "current_hours": 14,
        "availability": weekday_availability("10:00", "16:00", {"friday": "14:00"}),
    },
]

COURSES = [
    {
        "code": "EDU101",
        "title": "Foundations of Education",
        "credits": 4,
        "type": CourseType.major,
        "theory_hours": 3,
        "practical_hours": 1,
        "max_enrollment": 40,
        "department": "Education",
        "semester": 1,
    },
    {
        "code": "PSY201",
        "title": "Educational Psychology",
        "credits": 3,
        "type": CourseType.minor,
        "theory_hours": 3,
        "max_enrollment": 30,
        "prerequisites": ["EDU101"],
        "department": "Psychology",
        "semester": 2,
        "is_elective": True,
    },
    {
        "code": "SKILL101",
        "title": "Communication Skills",
        "credits": 2,
        "type": CourseType.skill,
        "theory_hours": 1,
        "practical_hours": 1,
        "max_enrollment": 25,
        "department": "Languages",
        "semester": 1,
    },
    {
        "code": "LAB101",
        "title": "Computer Lab",
        "credits": 2,
        "type": CourseType.lab,
        "practical_hours": 2,
        "max_enrollment": 20,
        "department": "Computer Science",
        "semester": 1,
    },
]

ROOMS = [
    {
        "name": "A301",
        "type": RoomType.classroom,
        "capacity": 40,
        "building": "Academic Block A",
        "floor": 3,
        "features": ["projector", "smart_board", "air_conditioning"],
        "availability": weekday_availability("09:00", "17:00"),
    },
    {
        "name": "IT-LAB-01",
        "type": RoomType.lab,
        "capacity": 30,
        "building": "IT Block",
        "floor": 1,
        "features": ["computers", "projector", "lab_benches", "internet"],
        "availability": weekday_availability("09:00", "17:00"),
    },
]

SCENARIOS = [
    {
        "name": "Current Semester",
        "description": "Active timetable for current academic semester",
        "is_active": True,
        "metrics": {
            "conflicts": 0,
            "student_satisfaction": 94,
            "faculty_balance": 87,
            "room_utilization": 89,
        },
    },
]


def seed_store(store: EntityStore) -> bool:
    """Load the fixtures unless the store already holds data. Returns True when anything was written."""
    with store.lock:
        if any(repo.count() for repo in (store.students, store.faculty, store.courses, store.rooms, store.scenarios)):
            logger.info("Entity store already populated; skipping fixtures")
            return False
        for payload in STUDENTS:
            store.students.create(payload)
        for payload in FACULTY:
            store.faculty.create(payload)
        for payload in COURSES:
            store.courses.create(payload)
        for payload in ROOMS:
            store.rooms.create(payload)
        for payload in SCENARIOS:
            store.scenarios.create(payload)
    logger.info(
        "Seeded %d students, %d faculty, %d courses, %d rooms, %d scenarios",
        len(STUDENTS),
        len(FACULTY),
        len(COURSES),
        len(ROOMS),
        len(SCENARIOS),
    )
    return True
