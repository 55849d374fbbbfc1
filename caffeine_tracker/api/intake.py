from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException

from caffeine_tracker.models.schemas import (
    AddCoffeeRequest,
    AddCoffeeResponse,
    ForecastPointOut,
    IntakeEventOut,
    LevelResponse,
)
from caffeine_tracker.services.tracker_dependencies import get_tracker
from caffeine_tracker.services.tracker_service import CaffeineTracker, InvalidDoseError

router = APIRouter(prefix="/api", tags=["caffeine"])


@router.post("/add-coffee", response_model=AddCoffeeResponse)
async def add_coffee(
    payload: AddCoffeeRequest | None = None,
    tracker: CaffeineTracker = Depends(get_tracker),
) -> AddCoffeeResponse:
    dose_mg = payload.dose_mg if payload is not None else None
    try:
        event = tracker.log_intake(dose_mg=dose_mg)
    except InvalidDoseError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return AddCoffeeResponse(event=IntakeEventOut.from_event(event))


@router.get("/caffeine-level", response_model=LevelResponse)
async def caffeine_level(
    at: datetime | None = None,
    tracker: CaffeineTracker = Depends(get_tracker),
) -> LevelResponse:
    if at is None:
        return LevelResponse(level=tracker.current_level())
    if at.tzinfo is None:
        raise HTTPException(status_code=400, detail="'at' must include a UTC offset")
    return LevelResponse(level=tracker.level_at(at))


@router.get("/forecast", response_model=list[ForecastPointOut])
async def forecast(tracker: CaffeineTracker = Depends(get_tracker)) -> list[ForecastPointOut]:
    return [ForecastPointOut.from_point(point) for point in tracker.forecast()]


@router.get("/events", response_model=list[IntakeEventOut])
async def events(tracker: CaffeineTracker = Depends(get_tracker)) -> list[IntakeEventOut]:
    return [IntakeEventOut.from_event(event) for event in tracker.history()]
