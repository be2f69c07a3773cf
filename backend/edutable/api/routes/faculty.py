from fastapi import APIRouter, Depends, status

from edutable.api.deps import get_store
from edutable.core.exceptions import NotFoundError
from edutable.repositories.store import EntityStore
from edutable.schemas.faculty import FacultyCreate, FacultyOut, FacultyUpdate

router = APIRouter()


@router.get("", response_model=list[FacultyOut])
def list_faculty(store: EntityStore = Depends(get_store)) -> list[FacultyOut]:
    return store.faculty.list_all()


@router.get("/{faculty_id}", response_model=FacultyOut)
def get_faculty(faculty_id: str, store: EntityStore = Depends(get_store)) -> FacultyOut:
    member = store.faculty.get(faculty_id)
    if member is None:
        raise NotFoundError("Faculty", faculty_id)
    return member


@router.post("", response_model=FacultyOut, status_code=status.HTTP_201_CREATED)
def create_faculty(payload: FacultyCreate, store: EntityStore = Depends(get_store)) -> FacultyOut:
    return store.faculty.create(payload)


@router.put("/{faculty_id}", response_model=FacultyOut)
def update_faculty(faculty_id: str, payload: FacultyUpdate, store: EntityStore = Depends(get_store)) -> FacultyOut:
    member = store.faculty.update(faculty_id, payload)
    if member is None:
        raise NotFoundError("Faculty", faculty_id)
    return member


@router.delete("/{faculty_id}")
def delete_faculty(faculty_id: str, store: EntityStore = Depends(get_store)) -> dict:
    if not store.faculty.delete(faculty_id):
        raise NotFoundError("Faculty", faculty_id)
    return {"message": "Faculty deleted successfully"}
