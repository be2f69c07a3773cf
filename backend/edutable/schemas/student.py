from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from edutable.models.student import StudentProgram
from edutable.schemas.common import CamelModel, normalize_unique_strings


class StudentPreferences(CamelModel):
    majors: list[str] = Field(default_factory=list)
    minors: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    aec: list[str] = Field(default_factory=list)
    vac: list[str] = Field(default_factory=list)

    @field_validator("majors", "minors", "skills", "aec", "vac")
    @classmethod
    def normalize_choices(cls, value: list[str]) -> list[str]:
        return normalize_unique_strings(value)


class StudentBase(CamelModel):
    roll_no: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=200)
    email: EmailStr | None = None
    program: StudentProgram
    semester: int = Field(ge=1, le=20)
    total_credits: int = Field(default=0, ge=0, le=200)
    preferences: StudentPreferences = Field(default_factory=StudentPreferences)
    section: str | None = Field(default=None, max_length=50)

    @field_validator("roll_no", "name")
    @classmethod
    def strip_required(cls, value: str) -> str:
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("Value cannot be blank")
        return trimmed

    @field_validator("section")
    @classmethod
    def normalize_section(cls, value: str | None) -> str | None:
        if value is None:
            return None
        trimmed = value.strip()
        return trimmed or None


class StudentCreate(StudentBase):
    pass


class StudentUpdate(CamelModel):
    roll_no: str | None = Field(default=None, min_length=1, max_length=50)
    name: str | None = Field(default=None, min_length=1, max_length=200)
    email: EmailStr | None = None
    program: StudentProgram | None = None
    semester: int | None = Field(default=None, ge=1, le=20)
    total_credits: int | None = Field(default=None, ge=0, le=200)
    preferences: StudentPreferences | None = None
    section: str | None = Field(default=None, max_length=50)


class StudentOut(StudentBase):
    id: str
    created_at: datetime
