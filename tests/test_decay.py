from datetime import timedelta

import pytest

from caffeine_tracker.tracking.decay import DecayModel, residual_mg
from caffeine_tracker.tracking.events import IntakeEvent

from tests.conftest import T0


def _event(offset_hours: float = 0.0, dose_mg: float = 95.0) -> IntakeEvent:
    return IntakeEvent(occurred_at=T0 + timedelta(hours=offset_hours), dose_mg=dose_mg)


def test_level_with_no_events_is_zero() -> None:
    assert DecayModel().level_at((), T0) == 0.0


def test_single_dose_halves_every_half_life() -> None:
    model = DecayModel()
    events = (_event(),)

    assert model.level_at(events, T0) == 95.0
    assert model.level_at(events, T0 + timedelta(hours=5)) == 47.5
    assert model.level_at(events, T0 + timedelta(hours=10)) == 23.75


def test_overlapping_doses_add_up() -> None:
    model = DecayModel()
    events = (_event(0), _event(1))

    level = model.level_at(events, T0 + timedelta(hours=1))
    assert level == pytest.approx(95 * 0.5 ** (1 / 5) + 95)


def test_future_event_contributes_nothing() -> None:
    event = _event(offset_hours=2)
    assert residual_mg(event, T0) == 0.0
    assert DecayModel().level_at((event,), T0 + timedelta(hours=1, minutes=59)) == 0.0


def test_level_does_not_increase_between_doses() -> None:
    model = DecayModel()
    events = (_event(0), _event(3, dose_mg=60.0), _event(7))

    for start, end in ((0, 3), (3, 7)):
        samples = [T0 + timedelta(hours=start, minutes=m) for m in range(1, (end - start) * 60)]
        levels = [model.level_at(events, t) for t in samples]
        assert all(later <= earlier for earlier, later in zip(levels, levels[1:]))


def test_custom_half_life_is_respected() -> None:
    model = DecayModel(half_life_hours=2.0)
    assert model.level_at((_event(),), T0 + timedelta(hours=2)) == 47.5


def test_forecast_has_48_points_30_minutes_apart() -> None:
    points = DecayModel().forecast((_event(),), T0)

    assert len(points) == 48
    assert points[0].time == T0
    assert points[-1].time == T0 + timedelta(hours=23, minutes=30)
    for prev, cur in zip(points, points[1:]):
        assert cur.time - prev.time == timedelta(minutes=30)
    assert points[0].level_mg == 95.0
    assert points[10].level_mg == 47.5


def test_forecast_without_events_is_flat_zero() -> None:
    points = DecayModel().forecast((), T0)
    assert len(points) == 48
    assert all(p.level_mg == 0.0 and not p.has_intake for p in points)


def test_forecast_flags_intake_in_same_minute() -> None:
    events = (
        IntakeEvent(occurred_at=T0 + timedelta(hours=1, seconds=20), dose_mg=80.0),
        IntakeEvent(occurred_at=T0 + timedelta(hours=1, seconds=40), dose_mg=30.0),
    )
    points = DecayModel().forecast(events, T0)

    flagged = [p for p in points if p.has_intake]
    assert len(flagged) == 1
    assert flagged[0].time == T0 + timedelta(hours=1)
    # First event logged in that minute wins.
    assert flagged[0].intake_mg == 80.0
    assert points[0].intake_mg is None


def test_forecast_exact_match_ignores_same_minute_neighbours() -> None:
    events = (IntakeEvent(occurred_at=T0 + timedelta(hours=1, seconds=20), dose_mg=80.0),)
    points = DecayModel(intake_match="exact").forecast(events, T0)
    assert not any(p.has_intake for p in points)

    exact = (IntakeEvent(occurred_at=T0 + timedelta(hours=1), dose_mg=80.0),)
    points = DecayModel(intake_match="exact").forecast(exact, T0)
    assert [p.time for p in points if p.has_intake] == [T0 + timedelta(hours=1)]


def test_forecast_point_count_follows_step_and_horizon() -> None:
    model = DecayModel(horizon_hours=6, step_minutes=45)
    points = model.forecast((), T0)
    assert len(points) == 8
    assert points[-1].time < T0 + timedelta(hours=6)


def test_invalid_model_parameters_raise() -> None:
    with pytest.raises(ValueError):
        DecayModel(half_life_hours=0)
    with pytest.raises(ValueError):
        DecayModel(horizon_hours=0)
    with pytest.raises(ValueError):
        DecayModel(step_minutes=0)
    with pytest.raises(ValueError):
        DecayModel(horizon_hours=1, step_minutes=90)
    with pytest.raises(ValueError):
        DecayModel(intake_match="hourly")  # type: ignore[arg-type]
