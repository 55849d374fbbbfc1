from __future__ import annotations

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from caffeine_tracker.api.intake import router as intake_router
from caffeine_tracker.api.metrics import router as metrics_router
from caffeine_tracker.config import get_settings
from caffeine_tracker.observability.logging import configure_logging
from caffeine_tracker.observability.middleware import RequestContextMiddleware
from caffeine_tracker.services.tracker_service import CaffeineTracker, build_tracker


def create_app(tracker: CaffeineTracker | None = None) -> FastAPI:
    """Build the application around an explicitly constructed tracker.

    Each call gets its own event store unless a tracker is passed in.
    """
    settings = get_settings()

    app = FastAPI(title="Caffeine Tracker", version="0.1.0")
    app.state.tracker = tracker if tracker is not None else build_tracker(settings)
    app.add_middleware(RequestContextMiddleware)
    app.include_router(intake_router)
    app.include_router(metrics_router)

    @app.on_event("startup")
    def _startup() -> None:
        configure_logging(get_settings().log_level)
        structlog.get_logger("startup").info(
            "tracker_ready",
            half_life_hours=app.state.tracker.model.half_life_hours,
            forecast_points=app.state.tracker.model.point_count,
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/", include_in_schema=False)
    async def index() -> FileResponse:
        index_path = get_settings().static_path / "index.html"
        if not index_path.is_file():
            raise HTTPException(status_code=404, detail="Not found")
        return FileResponse(index_path)

    if settings.static_path.is_dir():
        app.mount("/static", StaticFiles(directory=str(settings.static_path)), name="static")

    return app


app = create_app()
