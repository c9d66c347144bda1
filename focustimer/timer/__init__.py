"""Timer package."""

from .engine import (
    TimerEngine,
    AlertPlayer,
    MAX_SECONDS,
    ADJUST_SECONDS,
    TICK_INTERVAL_MS,
)

__all__ = [
    "TimerEngine",
    "AlertPlayer",
    "MAX_SECONDS",
    "ADJUST_SECONDS",
    "TICK_INTERVAL_MS",
]
