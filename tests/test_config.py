import pytest
from pydantic import ValidationError

from caffeine_tracker.config import Settings, get_settings


def test_defaults_match_the_one_cup_five_hour_model() -> None:
    settings = get_settings()
    assert settings.caffeine_per_cup_mg == 95.0
    assert settings.half_life_hours == 5.0
    assert settings.forecast_horizon_hours == 24
    assert settings.forecast_step_minutes == 30
    assert settings.forecast_intake_match == "minute"
    assert settings.reject_non_positive_doses is False
    assert settings.port == 8080
    assert (settings.static_path / "index.html").is_file()


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("FORECAST_INTAKE_MATCH", "exact")
    monkeypatch.setenv("PORT", "9000")
    get_settings.cache_clear()

    settings = get_settings()
    assert settings.forecast_intake_match == "exact"
    assert settings.port == 9000


def test_unknown_intake_match_is_rejected(monkeypatch) -> None:
    monkeypatch.setenv("FORECAST_INTAKE_MATCH", "hourly")
    with pytest.raises(ValidationError):
        Settings()
