from fastapi import APIRouter, Depends

from edutable.api.deps import get_generator
from edutable.core.config import Settings, get_settings
from edutable.schemas.generator import GenerateTimetableResponse
from edutable.services.generator import TimetableGenerator, run_generation

router = APIRouter()


@router.post("/timetable/generate", response_model=GenerateTimetableResponse)
async def generate_timetable(
    generator: TimetableGenerator = Depends(get_generator),
    settings: Settings = Depends(get_settings),
) -> GenerateTimetableResponse:
    snapshot = await run_generation(generator, settings.generation_timeout_seconds)
    return GenerateTimetableResponse(
        message="Timetable generated successfully",
        metrics=snapshot.to_metrics(),
        timestamp=snapshot.timestamp,
    )
