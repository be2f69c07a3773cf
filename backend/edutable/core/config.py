from functools import lru_cache
import json
from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from edutable.schemas.common import TIME_PATTERN, parse_time_to_minutes


BACKEND_ENV_FILE = Path(__file__).resolve().parents[2] / ".env"

LoadPolicy = Literal["advisory", "enforce"]


class Settings(BaseSettings):
    # Resolve to backend/.env so `uvicorn --app-dir backend` works from any cwd.
    model_config = SettingsConfigDict(env_file=str(BACKEND_ENV_FILE), env_file_encoding="utf-8")

    project_name: str = "EduTable API"
    api_prefix: str = "/api"
    log_level: str = "INFO"

    storage_backend: Literal["memory", "sql"] = "memory"
    database_url: str = "sqlite+pysqlite:///./edutable.db"
    seed_fixtures: bool = True

    # Teaching grid used for room utilization.
    working_days: int = 5
    day_start: str = "09:00"
    day_end: str = "17:00"
    period_minutes: int = 60

    faculty_hours_policy: LoadPolicy = "advisory"
    room_capacity_policy: LoadPolicy = "advisory"

    generation_delay_seconds: float = 2.0
    generation_timeout_seconds: float = 10.0

    cors_origins: list[str] = [
        "http://localhost:5000",
        "http://127.0.0.1:5000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_cors_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            stripped = value.strip()
            if stripped.startswith("["):
                try:
                    parsed = json.loads(stripped)
                    if isinstance(parsed, list):
                        return [str(item).strip() for item in parsed if str(item).strip()]
                except json.JSONDecodeError:
                    pass
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("day_start", "day_end")
    @classmethod
    def validate_grid_time(cls, value: str) -> str:
        if not TIME_PATTERN.match(value):
            raise ValueError("Time must be in HH:MM 24-hour format")
        return value

    @model_validator(mode="after")
    def validate_grid(self) -> "Settings":
        if not 1 <= self.working_days <= 7:
            raise ValueError("working_days must be between 1 and 7")
        if self.period_minutes < 1:
            raise ValueError("period_minutes must be positive")
        if parse_time_to_minutes(self.day_end) <= parse_time_to_minutes(self.day_start):
            raise ValueError("day_end must be after day_start")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
