from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from threading import Lock

from caffeine_tracker.tracking.clock import Clock, utc_now


@dataclass(frozen=True)
class IntakeEvent:
    occurred_at: datetime
    dose_mg: float


class EventStore:
    """Thread-safe, append-only log of intake events (resets on restart).

    The lock covers only the append and the copy in ``snapshot``; callers do
    their decay math on the returned tuple, outside the lock.
    """

    def __init__(self, clock: Clock = utc_now) -> None:
        self._lock = Lock()
        self._clock = clock
        self._events: list[IntakeEvent] = []

    def append(self, dose_mg: float) -> IntakeEvent:
        with self._lock:
            event = IntakeEvent(occurred_at=self._clock(), dose_mg=float(dose_mg))
            self._events.append(event)
            return event

    def snapshot(self) -> tuple[IntakeEvent, ...]:
        with self._lock:
            return tuple(self._events)

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
