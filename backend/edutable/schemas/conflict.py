from enum import Enum

from pydantic import Field

from edutable.schemas.common import CamelModel
from edutable.schemas.timetable import TimetableEntryOut


class ConflictDimension(str, Enum):
    room = "room"
    faculty = "faculty"
    group = "group"


class ConflictDetail(CamelModel):
    entry: TimetableEntryOut
    dimension: ConflictDimension


class ConflictResult(CamelModel):
    conflicts: list[ConflictDetail] = Field(default_factory=list)

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)

    @property
    def entry_ids(self) -> list[str]:
        ordered: list[str] = []
        for detail in self.conflicts:
            if detail.entry.id not in ordered:
                ordered.append(detail.entry.id)
        return ordered


class ConflictPair(CamelModel):
    first_id: str
    second_id: str
    dimensions: list[ConflictDimension]
