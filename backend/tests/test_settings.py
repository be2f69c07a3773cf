import pytest
from pydantic import ValidationError

from edutable.core.config import Settings


def test_cors_origins_accept_comma_separated_string():
    settings = Settings(cors_origins="http://localhost:5000, http://example.edu ,")

    assert settings.cors_origins == ["http://localhost:5000", "http://example.edu"]


def test_cors_origins_accept_json_list():
    settings = Settings(cors_origins='["http://localhost:5173"]')

    assert settings.cors_origins == ["http://localhost:5173"]


def test_load_policies_default_to_advisory():
    settings = Settings()

    assert settings.faculty_hours_policy == "advisory"
    assert settings.room_capacity_policy == "advisory"


@pytest.mark.parametrize(
    "overrides",
    [
        {"day_start": "17:00", "day_end": "09:00"},
        {"day_start": "9am"},
        {"working_days": 0},
        {"period_minutes": 0},
        {"faculty_hours_policy": "strict"},
    ],
)
def test_invalid_grid_settings_are_rejected(overrides):
    with pytest.raises(ValidationError):
        Settings(**overrides)
