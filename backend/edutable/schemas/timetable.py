from datetime import datetime

from pydantic import Field, field_validator, model_validator

from edutable.schemas.common import TIME_PATTERN, CamelModel, parse_time_to_minutes


def _validate_time(value: str | None) -> str | None:
    if value is not None and not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM 24-hour format")
    return value


def _validate_order(start_time: str | None, end_time: str | None) -> None:
    if start_time is None or end_time is None:
        return
    if parse_time_to_minutes(end_time) <= parse_time_to_minutes(start_time):
        raise ValueError("endTime must be after startTime")


class TimetableEntryBase(CamelModel):
    scenario_id: str | None = Field(default=None, max_length=36)
    course_id: str = Field(min_length=1, max_length=36)
    faculty_id: str = Field(min_length=1, max_length=36)
    room_id: str = Field(min_length=1, max_length=36)
    student_group: str | None = Field(default=None, max_length=50)
    day_of_week: int = Field(ge=0, le=6)
    start_time: str
    end_time: str

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time_format(cls, value: str) -> str:
        return _validate_time(value)

    @field_validator("student_group", "scenario_id")
    @classmethod
    def blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        trimmed = value.strip()
        return trimmed or None

    @model_validator(mode="after")
    def validate_interval(self) -> "TimetableEntryBase":
        _validate_order(self.start_time, self.end_time)
        return self


class TimetableEntryCreate(TimetableEntryBase):
    pass


class TimetableEntryUpdate(CamelModel):
    scenario_id: str | None = Field(default=None, max_length=36)
    course_id: str | None = Field(default=None, min_length=1, max_length=36)
    faculty_id: str | None = Field(default=None, min_length=1, max_length=36)
    room_id: str | None = Field(default=None, min_length=1, max_length=36)
    student_group: str | None = Field(default=None, max_length=50)
    day_of_week: int | None = Field(default=None, ge=0, le=6)
    start_time: str | None = None
    end_time: str | None = None

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time_format(cls, value: str | None) -> str | None:
        return _validate_time(value)

    @model_validator(mode="after")
    def validate_interval(self) -> "TimetableEntryUpdate":
        _validate_order(self.start_time, self.end_time)
        return self


class TimetableEntryOut(TimetableEntryBase):
    id: str
    created_at: datetime

    @property
    def duration_minutes(self) -> int:
        return parse_time_to_minutes(self.end_time) - parse_time_to_minutes(self.start_time)


class MoveEntryRequest(CamelModel):
    """Target slot for drag-to-reschedule; the room is kept unless given."""

    day_of_week: int = Field(ge=0, le=6)
    start_time: str
    end_time: str
    room_id: str | None = Field(default=None, min_length=1, max_length=36)

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time_format(cls, value: str) -> str:
        return _validate_time(value)

    @model_validator(mode="after")
    def validate_interval(self) -> "MoveEntryRequest":
        _validate_order(self.start_time, self.end_time)
        return self
