from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Literal

from caffeine_tracker.tracking.events import IntakeEvent

HALF_LIFE_HOURS = 5.0
FORECAST_HORIZON_HOURS = 24
FORECAST_STEP_MINUTES = 30

IntakeMatch = Literal["minute", "exact"]


@dataclass(frozen=True)
class ForecastPoint:
    time: datetime
    level_mg: float
    has_intake: bool = False
    intake_mg: float | None = None


def residual_mg(event: IntakeEvent, at: datetime, half_life_hours: float = HALF_LIFE_HOURS) -> float:
    """Caffeine left from one dose at ``at``: C0 * 0.5 ** (elapsed_hours / half_life).

    Doses logged after ``at`` have not been taken yet and contribute 0.
    """
    elapsed_hours = (at - event.occurred_at).total_seconds() / 3600.0
    if elapsed_hours < 0:
        return 0.0
    return event.dose_mg * 0.5 ** (elapsed_hours / half_life_hours)


def _truncate_to_minute(value: datetime) -> datetime:
    return value.replace(second=0, microsecond=0)


class DecayModel:
    """Exponential-decay estimator over a snapshot of intake events.

    Pure computation: no locking, no clock. Callers pass the events and the
    instant(s) to evaluate.
    """

    def __init__(
        self,
        half_life_hours: float = HALF_LIFE_HOURS,
        horizon_hours: int = FORECAST_HORIZON_HOURS,
        step_minutes: int = FORECAST_STEP_MINUTES,
        intake_match: IntakeMatch = "minute",
    ) -> None:
        if half_life_hours <= 0:
            raise ValueError("half_life_hours must be greater than zero")

        if horizon_hours <= 0:
            raise ValueError("horizon_hours must be greater than zero")

        if step_minutes <= 0:
            raise ValueError("step_minutes must be greater than zero")

        if step_minutes > horizon_hours * 60:
            raise ValueError("step_minutes must not exceed the forecast horizon")

        if intake_match not in ("minute", "exact"):
            raise ValueError("intake_match must be 'minute' or 'exact'")

        self.half_life_hours = float(half_life_hours)
        self.horizon = timedelta(hours=horizon_hours)
        self.step = timedelta(minutes=step_minutes)
        self.intake_match = intake_match

    @property
    def point_count(self) -> int:
        return int(self.horizon / self.step)

    def level_at(self, events: Sequence[IntakeEvent], at: datetime) -> float:
        total = 0.0
        for event in events:
            total += residual_mg(event, at, self.half_life_hours)
        return total

    def _intake_at(self, events: Sequence[IntakeEvent], at: datetime) -> IntakeEvent | None:
        if self.intake_match == "exact":
            for event in events:
                if event.occurred_at == at:
                    return event
            return None

        # Minute resolution: first event logged in the same minute wins.
        target = _truncate_to_minute(at)
        for event in events:
            if _truncate_to_minute(event.occurred_at) == target:
                return event
        return None

    def forecast(self, events: Sequence[IntakeEvent], now: datetime) -> list[ForecastPoint]:
        """Sample the level every ``step`` from ``now`` (inclusive) to ``now + horizon`` (exclusive)."""
        points: list[ForecastPoint] = []
        for i in range(self.point_count):
            at = now + i * self.step
            intake = self._intake_at(events, at)
            points.append(
                ForecastPoint(
                    time=at,
                    level_mg=self.level_at(events, at),
                    has_intake=intake is not None,
                    intake_mg=intake.dose_mg if intake is not None else None,
                )
            )
        return points
