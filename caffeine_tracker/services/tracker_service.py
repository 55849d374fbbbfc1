from __future__ import annotations

import math
from datetime import datetime
from time import perf_counter

import structlog

from caffeine_tracker.config import Settings, get_settings
from caffeine_tracker.observability.metrics import get_metrics
from caffeine_tracker.tracking.clock import Clock, utc_now
from caffeine_tracker.tracking.decay import DecayModel, ForecastPoint
from caffeine_tracker.tracking.events import EventStore, IntakeEvent

logger = structlog.get_logger("tracker")


class InvalidDoseError(ValueError):
    pass


class CaffeineTracker:
    """The operations the HTTP layer calls: log an intake, read levels, forecast, history."""

    def __init__(
        self,
        store: EventStore,
        model: DecayModel,
        clock: Clock = utc_now,
        default_dose_mg: float = 95.0,
        reject_non_positive_doses: bool = False,
    ) -> None:
        self.store = store
        self.model = model
        self.clock = clock
        self.default_dose_mg = default_dose_mg
        self.reject_non_positive_doses = reject_non_positive_doses

    def _check_dose(self, dose_mg: float) -> None:
        if not self.reject_non_positive_doses:
            return
        if not math.isfinite(dose_mg) or dose_mg <= 0:
            raise InvalidDoseError("dose_mg must be a positive number")

    def log_intake(self, dose_mg: float | None = None) -> IntakeEvent:
        dose = self.default_dose_mg if dose_mg is None else float(dose_mg)
        self._check_dose(dose)

        event = self.store.append(dose)
        get_metrics().observe_intake()
        logger.info(
            "intake_logged",
            occurred_at=event.occurred_at.isoformat(),
            dose_mg=event.dose_mg,
            event_count=len(self.store),
        )
        return event

    def current_level(self) -> float:
        return self.model.level_at(self.store.snapshot(), self.clock())

    def level_at(self, at: datetime) -> float:
        return self.model.level_at(self.store.snapshot(), at)

    def forecast(self) -> list[ForecastPoint]:
        events = self.store.snapshot()
        start = perf_counter()
        points = self.model.forecast(events, self.clock())
        get_metrics().observe_forecast(elapsed_ms=(perf_counter() - start) * 1000.0)
        return points

    def history(self) -> tuple[IntakeEvent, ...]:
        return self.store.snapshot()


def build_tracker(settings: Settings | None = None, clock: Clock = utc_now) -> CaffeineTracker:
    settings = settings or get_settings()
    model = DecayModel(
        half_life_hours=settings.half_life_hours,
        horizon_hours=settings.forecast_horizon_hours,
        step_minutes=settings.forecast_step_minutes,
        intake_match=settings.forecast_intake_match,
    )
    return CaffeineTracker(
        store=EventStore(clock=clock),
        model=model,
        clock=clock,
        default_dose_mg=settings.caffeine_per_cup_mg,
        reject_non_positive_doses=settings.reject_non_positive_doses,
    )
