from fastapi import Depends, Request

from edutable.core.config import Settings, get_settings
from edutable.repositories.store import EntityStore
from edutable.services.generator import TimetableGenerator
from edutable.services.metrics import TeachingGrid
from edutable.services.scenarios import ScenarioService
from edutable.services.timetable import TimetableService


def get_store(request: Request) -> EntityStore:
    return request.app.state.store


def get_generator(request: Request) -> TimetableGenerator:
    return request.app.state.generator


def get_scenario_service(
    store: EntityStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> ScenarioService:
    return ScenarioService(store, TeachingGrid.from_settings(settings))


def get_timetable_service(
    store: EntityStore = Depends(get_store),
    scenarios: ScenarioService = Depends(get_scenario_service),
    settings: Settings = Depends(get_settings),
) -> TimetableService:
    return TimetableService(
        store,
        scenarios,
        faculty_hours_policy=settings.faculty_hours_policy,
        room_capacity_policy=settings.room_capacity_policy,
    )
