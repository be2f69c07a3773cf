from edutable.models.course import Course, CourseType  # noqa: F401
from edutable.models.faculty import Faculty  # noqa: F401
from edutable.models.room import Room, RoomType  # noqa: F401
from edutable.models.scenario import Scenario  # noqa: F401
from edutable.models.student import Student, StudentProgram  # noqa: F401
from edutable.models.timetable_entry import TimetableEntry  # noqa: F401
