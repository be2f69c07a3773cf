from datetime import datetime

from pydantic import Field, field_validator

from edutable.models.room import RoomType
from edutable.schemas.common import Availability, CamelModel, normalize_availability, normalize_unique_strings


class RoomBase(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    type: RoomType
    capacity: int = Field(ge=1, le=5000)
    building: str | None = Field(default=None, max_length=200)
    floor: int | None = Field(default=None, ge=-5, le=200)
    features: list[str] = Field(default_factory=list, max_length=50)
    availability: Availability = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("Room name cannot be blank")
        return trimmed

    @field_validator("features")
    @classmethod
    def normalize_features(cls, value: list[str]) -> list[str]:
        return normalize_unique_strings(value)

    @field_validator("availability")
    @classmethod
    def normalize_weekdays(cls, value: Availability) -> Availability:
        return normalize_availability(value)


class RoomCreate(RoomBase):
    pass


class RoomUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    type: RoomType | None = None
    capacity: int | None = Field(default=None, ge=1, le=5000)
    building: str | None = Field(default=None, max_length=200)
    floor: int | None = Field(default=None, ge=-5, le=200)
    features: list[str] | None = Field(default=None, max_length=50)
    availability: Availability | None = None


class RoomOut(RoomBase):
    id: str
    created_at: datetime
