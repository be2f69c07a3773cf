from fastapi import APIRouter, Depends, status

from edutable.api.deps import get_store
from edutable.core.exceptions import NotFoundError
from edutable.repositories.store import EntityStore
from edutable.schemas.room import RoomCreate, RoomOut, RoomUpdate

router = APIRouter()


@router.get("", response_model=list[RoomOut])
def list_rooms(store: EntityStore = Depends(get_store)) -> list[RoomOut]:
    return store.rooms.list_all()


@router.get("/{room_id}", response_model=RoomOut)
def get_room(room_id: str, store: EntityStore = Depends(get_store)) -> RoomOut:
    room = store.rooms.get(room_id)
    if room is None:
        raise NotFoundError("Room", room_id)
    return room


@router.post("", response_model=RoomOut, status_code=status.HTTP_201_CREATED)
def create_room(payload: RoomCreate, store: EntityStore = Depends(get_store)) -> RoomOut:
    return store.rooms.create(payload)


@router.put("/{room_id}", response_model=RoomOut)
def update_room(room_id: str, payload: RoomUpdate, store: EntityStore = Depends(get_store)) -> RoomOut:
    room = store.rooms.update(room_id, payload)
    if room is None:
        raise NotFoundError("Room", room_id)
    return room


@router.delete("/{room_id}")
def delete_room(room_id: str, store: EntityStore = Depends(get_store)) -> dict:
    if not store.rooms.delete(room_id):
        raise NotFoundError("Room", room_id)
    return {"message": "Room deleted successfully"}
