from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from caffeine_tracker.config import get_settings
from caffeine_tracker.main import create_app
from caffeine_tracker.observability.metrics import reset_metrics
from caffeine_tracker.services.tracker_service import CaffeineTracker, build_tracker

T0 = datetime(2024, 3, 4, 8, 0, 0, tzinfo=timezone.utc)


class ManualClock:
    def __init__(self, now: datetime = T0) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "CAFFEINE_PER_CUP_MG",
        "HALF_LIFE_HOURS",
        "FORECAST_HORIZON_HOURS",
        "FORECAST_STEP_MINUTES",
        "FORECAST_INTAKE_MATCH",
        "REJECT_NON_POSITIVE_DOSES",
        "ENABLE_METRICS_ENDPOINT",
        "STATIC_DIR",
        "HOST",
        "PORT",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    reset_metrics()

    yield

    get_settings.cache_clear()
    reset_metrics()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def tracker(clock: ManualClock) -> CaffeineTracker:
    return build_tracker(get_settings(), clock=clock)


@pytest.fixture
async def api_client(tracker: CaffeineTracker) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=create_app(tracker=tracker))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
