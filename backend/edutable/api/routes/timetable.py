from fastapi import APIRouter, Depends, Query, status

from edutable.api.deps import get_timetable_service
from edutable.core.exceptions import NotFoundError
from edutable.schemas.timetable import (
    MoveEntryRequest,
    TimetableEntryCreate,
    TimetableEntryOut,
    TimetableEntryUpdate,
)
from edutable.schemas.validation import EntryCheckResult, TimetableEntryResult
from edutable.services.timetable import TimetableService

router = APIRouter()


@router.get("", response_model=list[TimetableEntryOut])
def list_timetable_entries(
    scenario_id: str | None = Query(default=None, alias="scenarioId"),
    service: TimetableService = Depends(get_timetable_service),
) -> list[TimetableEntryOut]:
    return service.list_entries(scenario_id)


@router.post("/check", response_model=EntryCheckResult)
def check_timetable_entry(
    payload: TimetableEntryCreate,
    service: TimetableService = Depends(get_timetable_service),
) -> EntryCheckResult:
    return service.check_entry(payload)


@router.get("/{entry_id}", response_model=TimetableEntryOut)
def get_timetable_entry(entry_id: str, service: TimetableService = Depends(get_timetable_service)) -> TimetableEntryOut:
    entry = service.get_entry(entry_id)
    if entry is None:
        raise NotFoundError("TimetableEntry", entry_id)
    return entry


@router.post("", response_model=TimetableEntryResult, status_code=status.HTTP_201_CREATED)
def create_timetable_entry(
    payload: TimetableEntryCreate,
    service: TimetableService = Depends(get_timetable_service),
) -> TimetableEntryResult:
    return service.create_entry(payload)


@router.put("/{entry_id}", response_model=TimetableEntryResult)
def update_timetable_entry(
    entry_id: str,
    payload: TimetableEntryUpdate,
    service: TimetableService = Depends(get_timetable_service),
) -> TimetableEntryResult:
    return service.update_entry(entry_id, payload)


@router.post("/{entry_id}/move", response_model=TimetableEntryResult)
def move_timetable_entry(
    entry_id: str,
    payload: MoveEntryRequest,
    service: TimetableService = Depends(get_timetable_service),
) -> TimetableEntryResult:
    return service.move_entry(entry_id, payload)


@router.delete("/{entry_id}")
def delete_timetable_entry(entry_id: str, service: TimetableService = Depends(get_timetable_service)) -> dict:
    if not service.delete_entry(entry_id):
        raise NotFoundError("TimetableEntry", entry_id)
    return {"message": "Timetable entry deleted successfully"}
