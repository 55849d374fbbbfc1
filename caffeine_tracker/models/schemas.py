from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from caffeine_tracker.tracking.decay import ForecastPoint
from caffeine_tracker.tracking.events import IntakeEvent


class AddCoffeeRequest(BaseModel):
    dose_mg: float | None = None


class IntakeEventOut(BaseModel):
    time: datetime
    amount: float

    @classmethod
    def from_event(cls, event: IntakeEvent) -> IntakeEventOut:
        return cls(time=event.occurred_at, amount=event.dose_mg)


class AddCoffeeResponse(BaseModel):
    status: str = "success"
    event: IntakeEventOut


class LevelResponse(BaseModel):
    level: float


class ForecastPointOut(BaseModel):
    time: datetime
    level: float
    has_intake: bool
    intake_amount: float | None = None

    @classmethod
    def from_point(cls, point: ForecastPoint) -> ForecastPointOut:
        return cls(
            time=point.time,
            level=point.level_mg,
            has_intake=point.has_intake,
            intake_amount=point.intake_mg,
        )
