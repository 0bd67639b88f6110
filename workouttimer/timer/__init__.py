"""Timer package."""

from .engine import (
    IntervalTimer,
    Phase,
    TimerSession,
    ProgressEvent,
    TimerError,
    InvalidDurationError,
    parse_duration,
    TICK_INTERVAL_MS,
    DEFAULT_WORKOUT_SECONDS,
    DEFAULT_REST_SECONDS,
)

__all__ = [
    "IntervalTimer",
    "Phase",
    "TimerSession",
    "ProgressEvent",
    "TimerError",
    "InvalidDurationError",
    "parse_duration",
    "TICK_INTERVAL_MS",
    "DEFAULT_WORKOUT_SECONDS",
    "DEFAULT_REST_SECONDS",
]
