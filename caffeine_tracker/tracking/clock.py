from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

# Zero-argument time source. Everything that needs "now" takes one of these.
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
