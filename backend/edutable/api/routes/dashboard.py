from fastapi import APIRouter, Depends

from edutable.api.deps import get_scenario_service
from edutable.schemas.dashboard import DashboardStats
from edutable.services.scenarios import ScenarioService

router = APIRouter()


@router.get("/dashboard/stats", response_model=DashboardStats)
def dashboard_stats(service: ScenarioService = Depends(get_scenario_service)) -> DashboardStats:
    return service.dashboard_summary()
