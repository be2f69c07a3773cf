from datetime import datetime

from pydantic import Field

from edutable.schemas.common import CamelModel


class ScenarioMetrics(CamelModel):
    conflicts: int = Field(default=0, ge=0)
    student_satisfaction: int = Field(default=0, ge=0, le=100)
    faculty_balance: int = Field(default=0, ge=0, le=100)
    room_utilization: int = Field(default=0, ge=0, le=100)


class ScenarioBase(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    is_active: bool = False
    metrics: ScenarioMetrics = Field(default_factory=ScenarioMetrics)


class ScenarioCreate(ScenarioBase):
    pass


class ScenarioUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    is_active: bool | None = None
    metrics: ScenarioMetrics | None = None


class ScenarioOut(ScenarioBase):
    id: str
    created_at: datetime
