from fastapi import APIRouter, Depends, status

from edutable.api.deps import get_scenario_service, get_store
from edutable.core.exceptions import NotFoundError
from edutable.repositories.store import EntityStore
from edutable.schemas.scenario import ScenarioCreate, ScenarioOut, ScenarioUpdate
from edutable.services.scenarios import ScenarioService

router = APIRouter()


@router.get("", response_model=list[ScenarioOut])
def list_scenarios(store: EntityStore = Depends(get_store)) -> list[ScenarioOut]:
    return store.scenarios.list_all()


@router.get("/active", response_model=ScenarioOut | None)
def get_active_scenario(service: ScenarioService = Depends(get_scenario_service)) -> ScenarioOut | None:
    return service.get_active()


@router.get("/{scenario_id}", response_model=ScenarioOut)
def get_scenario(scenario_id: str, store: EntityStore = Depends(get_store)) -> ScenarioOut:
    scenario = store.scenarios.get(scenario_id)
    if scenario is None:
        raise NotFoundError("Scenario", scenario_id)
    return scenario


@router.post("", response_model=ScenarioOut, status_code=status.HTTP_201_CREATED)
def create_scenario(payload: ScenarioCreate, service: ScenarioService = Depends(get_scenario_service)) -> ScenarioOut:
    return service.create(payload)


@router.put("/{scenario_id}", response_model=ScenarioOut)
def update_scenario(
    scenario_id: str,
    payload: ScenarioUpdate,
    service: ScenarioService = Depends(get_scenario_service),
) -> ScenarioOut:
    return service.update(scenario_id, payload)


@router.delete("/{scenario_id}")
def delete_scenario(scenario_id: str, service: ScenarioService = Depends(get_scenario_service)) -> dict:
    service.delete(scenario_id)
    return {"message": "Scenario deleted successfully"}


@router.post("/{scenario_id}/activate", response_model=ScenarioOut)
def activate_scenario(scenario_id: str, service: ScenarioService = Depends(get_scenario_service)) -> ScenarioOut:
    return service.activate(scenario_id)


@router.post("/{scenario_id}/recompute", response_model=ScenarioOut)
def recompute_scenario(scenario_id: str, service: ScenarioService = Depends(get_scenario_service)) -> ScenarioOut:
    return service.recompute(scenario_id)
