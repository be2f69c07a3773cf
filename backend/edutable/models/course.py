import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from edutable.db.base import Base


class CourseType(str, Enum):
    major = "Major"
    minor = "Minor"
    skill = "Skill"
    aec = "AEC"
    vac = "VAC"
    lab = "Lab"
    tp = "TP"


class Course(Base):
    __tablename__ = "courses"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    code: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    credits: Mapped[int] = mapped_column(Integer, nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    theory_hours: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    practical_hours: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    max_enrollment: Mapped[int | None] = mapped_column(Integer, nullable=True)
    prerequisites: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    department: Mapped[str | None] = mapped_column(String(200), nullable=True)
    semester: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_elective: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
