from enum import Enum
from typing import Literal

from pydantic import Field

from edutable.schemas.common import CamelModel
from edutable.schemas.conflict import ConflictDetail
from edutable.schemas.timetable import TimetableEntryOut


class ValidationIssue(CamelModel):
    kind: Literal["faculty_hours", "room_capacity"]
    resource_id: str
    message: str
    limit: float
    requested: float


class CreditLoadBand(str, Enum):
    under_loaded = "under-loaded"
    normal = "normal"
    over_loaded = "over-loaded"


class StudentCreditLoad(CamelModel):
    student_id: str
    roll_no: str
    name: str
    total_credits: int
    band: CreditLoadBand


class CreditLoadReport(CamelModel):
    students: list[StudentCreditLoad] = Field(default_factory=list)
    counts: dict[CreditLoadBand, int] = Field(default_factory=dict)


class EntryCheckResult(CamelModel):
    conflicts: list[ConflictDetail] = Field(default_factory=list)
    issues: list[ValidationIssue] = Field(default_factory=list)
    blocking_issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def can_commit(self) -> bool:
        return not self.conflicts and not self.blocking_issues


class TimetableEntryResult(CamelModel):
    entry: TimetableEntryOut
    warnings: list[ValidationIssue] = Field(default_factory=list)
