from datetime import datetime

from pydantic import Field

from edutable.schemas.common import CamelModel
from edutable.schemas.scenario import ScenarioMetrics


class MetricsSnapshot(CamelModel):
    conflicts: int = Field(ge=0)
    student_satisfaction: int = Field(ge=0, le=100)
    faculty_balance: int = Field(ge=0, le=100)
    room_utilization: int = Field(ge=0, le=100)
    timestamp: datetime

    def to_metrics(self) -> ScenarioMetrics:
        return ScenarioMetrics.model_validate(self.model_dump(exclude={"timestamp"}))


class GenerateTimetableResponse(CamelModel):
    message: str
    metrics: ScenarioMetrics
    timestamp: datetime
