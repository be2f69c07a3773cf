from fastapi import APIRouter, Depends, status

from edutable.api.deps import get_store
from edutable.core.exceptions import NotFoundError
from edutable.repositories.store import EntityStore
from edutable.schemas.course import CourseCreate, CourseOut, CourseUpdate

router = APIRouter()


@router.get("", response_model=list[CourseOut])
def list_courses(store: EntityStore = Depends(get_store)) -> list[CourseOut]:
    return store.courses.list_all()


@router.get("/{course_id}", response_model=CourseOut)
def get_course(course_id: str, store: EntityStore = Depends(get_store)) -> CourseOut:
    course = store.courses.get(course_id)
    if course is None:
        raise NotFoundError("Course", course_id)
    return course


@router.post("", response_model=CourseOut, status_code=status.HTTP_201_CREATED)
def create_course(payload: CourseCreate, store: EntityStore = Depends(get_store)) -> CourseOut:
    return store.courses.create(payload)


@router.put("/{course_id}", response_model=CourseOut)
def update_course(course_id: str, payload: CourseUpdate, store: EntityStore = Depends(get_store)) -> CourseOut:
    course = store.courses.update(course_id, payload)
    if course is None:
        raise NotFoundError("Course", course_id)
    return course


@router.delete("/{course_id}")
def delete_course(course_id: str, store: EntityStore = Depends(get_store)) -> dict:
    if not store.courses.delete(course_id):
        raise NotFoundError("Course", course_id)
    return {"message": "Course deleted successfully"}
