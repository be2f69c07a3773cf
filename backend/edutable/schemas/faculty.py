from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from edutable.schemas.common import Availability, CamelModel, normalize_availability, normalize_unique_strings


class FacultyBase(CamelModel):
    employee_id: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=200)
    email: EmailStr | None = None
    department: str = Field(min_length=1, max_length=200)
    expertise: list[str] = Field(default_factory=list, max_length=100)
    max_hours_per_week: int = Field(default=20, ge=1, le=168)
    current_hours: int = Field(default=0, ge=0, le=168)
    availability: Availability = Field(default_factory=dict)

    @field_validator("employee_id", "name", "department")
    @classmethod
    def strip_required(cls, value: str) -> str:
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("Value cannot be blank")
        return trimmed

    @field_validator("expertise")
    @classmethod
    def normalize_expertise(cls, value: list[str]) -> list[str]:
        return normalize_unique_strings(value)

    @field_validator("availability")
    @classmethod
    def normalize_weekdays(cls, value: Availability) -> Availability:
        return normalize_availability(value)


class FacultyCreate(FacultyBase):
    pass


class FacultyUpdate(CamelModel):
    employee_id: str | None = Field(default=None, min_length=1, max_length=50)
    name: str | None = Field(default=None, min_length=1, max_length=200)
    email: EmailStr | None = None
    department: str | None = Field(default=None, min_length=1, max_length=200)
    expertise: list[str] | None = Field(default=None, max_length=100)
    max_hours_per_week: int | None = Field(default=None, ge=1, le=168)
    current_hours: int | None = Field(default=None, ge=0, le=168)
    availability: Availability | None = None


class FacultyOut(FacultyBase):
    id: str
    created_at: datetime
