from datetime import datetime

from pydantic import Field, field_validator

from edutable.models.course import CourseType
from edutable.schemas.common import CamelModel, normalize_unique_strings


class CourseBase(CamelModel):
    code: str = Field(min_length=1, max_length=50)
    title: str = Field(min_length=1, max_length=200)
    credits: int = Field(ge=1, le=40)
    type: CourseType
    theory_hours: int = Field(default=0, ge=0, le=40)
    practical_hours: int = Field(default=0, ge=0, le=40)
    max_enrollment: int | None = Field(default=None, ge=1, le=5000)
    prerequisites: list[str] = Field(default_factory=list, max_length=50)
    department: str | None = Field(default=None, max_length=200)
    semester: int | None = Field(default=None, ge=1, le=20)
    is_elective: bool = False

    @field_validator("code")
    @classmethod
    def normalize_code(cls, value: str) -> str:
        code = value.strip()
        if not code:
            raise ValueError("Course code cannot be blank")
        return code

    @field_validator("prerequisites")
    @classmethod
    def normalize_prerequisites(cls, value: list[str]) -> list[str]:
        return normalize_unique_strings(value)


class CourseCreate(CourseBase):
    pass


class CourseUpdate(CamelModel):
    code: str | None = Field(default=None, min_length=1, max_length=50)
    title: str | None = Field(default=None, min_length=1, max_length=200)
    credits: int | None = Field(default=None, ge=1, le=40)
    type: CourseType | None = None
    theory_hours: int | None = Field(default=None, ge=0, le=40)
    practical_hours: int | None = Field(default=None, ge=0, le=40)
    max_enrollment: int | None = Field(default=None, ge=1, le=5000)
    prerequisites: list[str] | None = Field(default=None, max_length=50)
    department: str | None = Field(default=None, max_length=200)
    semester: int | None = Field(default=None, ge=1, le=20)
    is_elective: bool | None = None


class CourseOut(CourseBase):
    id: str
    created_at: datetime
