from __future__ import annotations

from fastapi import HTTPException, Request

from caffeine_tracker.services.tracker_service import CaffeineTracker


def get_tracker(request: Request) -> CaffeineTracker:
    tracker = getattr(request.app.state, "tracker", None)
    if tracker is None:
        raise HTTPException(status_code=503, detail="Tracker not initialised")
    return tracker
