from fastapi import APIRouter, Depends, status

from edutable.api.deps import get_store
from edutable.core.exceptions import NotFoundError
from edutable.repositories.store import EntityStore
from edutable.schemas.student import StudentCreate, StudentOut, StudentUpdate
from edutable.schemas.validation import CreditLoadReport
from edutable.services.validators import credit_load_report

router = APIRouter()


@router.get("", response_model=list[StudentOut])
def list_students(store: EntityStore = Depends(get_store)) -> list[StudentOut]:
    return store.students.list_all()


@router.get("/credit-load", response_model=CreditLoadReport)
def get_credit_load(store: EntityStore = Depends(get_store)) -> CreditLoadReport:
    return credit_load_report(store.students.list_all())


@router.get("/{student_id}", response_model=StudentOut)
def get_student(student_id: str, store: EntityStore = Depends(get_store)) -> StudentOut:
    student = store.students.get(student_id)
    if student is None:
        raise NotFoundError("Student", student_id)
    return student


@router.post("", response_model=StudentOut, status_code=status.HTTP_201_CREATED)
def create_student(payload: StudentCreate, store: EntityStore = Depends(get_store)) -> StudentOut:
    return store.students.create(payload)


@router.put("/{student_id}", response_model=StudentOut)
def update_student(student_id: str, payload: StudentUpdate, store: EntityStore = Depends(get_store)) -> StudentOut:
    student = store.students.update(student_id, payload)
    if student is None:
        raise NotFoundError("Student", student_id)
    return student


@router.delete("/{student_id}")
def delete_student(student_id: str, store: EntityStore = Depends(get_store)) -> dict:
    if not store.students.delete(student_id):
        raise NotFoundError("Student", student_id)
    return {"message": "Student deleted successfully"}
