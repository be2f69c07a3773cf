from edutable.schemas.common import CamelModel


class DashboardStats(CamelModel):
    total_students: int
    total_faculty: int
    total_rooms: int
    total_courses: int
    active_scenario_id: str | None = None
    conflicts: int = 0
    student_satisfaction: int = 0
    faculty_balance: int = 0
    room_utilization: int = 0
