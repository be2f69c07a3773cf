from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel

WEEKDAY_NAMES = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def parse_time_to_minutes(value: str) -> int:
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM 24-hour format")
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def format_minutes(value: int) -> str:
    return f"{value // 60:02d}:{value % 60:02d}"


class CamelModel(BaseModel):
    """Snake-case attributes in Python, camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def normalize_unique_strings(values: list[str]) -> list[str]:
    seen: set[str] = set()
    normalized: list[str] = []
    for item in values:
        value = item.strip()
        if not value or value in seen:
            continue
        seen.add(value)
        normalized.append(value)
    return normalized


class AvailabilityWindow(CamelModel):
    start: str
    end: str
    available: bool = True

    @field_validator("start", "end")
    @classmethod
    def validate_time_format(cls, value: str) -> str:
        if not TIME_PATTERN.match(value):
            raise ValueError("Time must be in HH:MM 24-hour format")
        return value

    @model_validator(mode="after")
    def validate_order(self) -> "AvailabilityWindow":
        if parse_time_to_minutes(self.end) <= parse_time_to_minutes(self.start):
            raise ValueError("end must be after start")
        return self


Availability = dict[str, list[AvailabilityWindow]]


def normalize_availability(value: Availability | None) -> Availability | None:
    if value is None:
        return None
    normalized: Availability = {}
    for day, windows in value.items():
        key = str(day).strip().lower()
        if key not in WEEKDAY_NAMES:
            raise ValueError(f"Invalid weekday name: {day}")
        merged = normalized.get(key, []) + list(windows)
        normalized[key] = sorted(merged, key=lambda window: parse_time_to_minutes(window.start))
    return normalized
