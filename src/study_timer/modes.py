from __future__ import annotations

"""Mode selector: maps a timer mode (and custom minutes) to a fresh session."""

import math
from typing import Union

from .models import StudySession, TimerMode

POMODORO_SECONDS = 25 * 60
REVERSE_POMODORO_SECONDS = 5 * 60
CUSTOM_MIN_SECONDS = 60
CUSTOM_MAX_SECONDS = 180 * 60


class TimerConfigError(ValueError):
    """Invalid timer configuration; raised before any state is touched."""


MinutesInput = Union[int, float, str, None]


def parse_mode(value: Union[str, TimerMode]) -> TimerMode:
    if isinstance(value, TimerMode):
        return value
    try:
        return TimerMode(str(value).strip().lower())
    except ValueError:
        raise TimerConfigError(f"Unknown timer mode: {value!r}") from None


def custom_duration_seconds(minutes: MinutesInput) -> int:
    """Clamp user supplied whole minutes to [60s, 10800s].

    Fractions are truncated ("1.9" is one minute). Returns 0 when nothing was
    entered yet. Values that do not parse or truncate below one minute raise
    TimerConfigError.
    """
    if minutes is None or (isinstance(minutes, str) and not minutes.strip()):
        return 0
    try:
        value = float(minutes)
    except (TypeError, ValueError):
        raise TimerConfigError(f"Custom time must be a number of minutes, got {minutes!r}") from None
    if not math.isfinite(value) or int(value) < 1:
        raise TimerConfigError("Invalid custom time. Please enter 1-180 minutes.")
    seconds = int(value) * 60
    return max(CUSTOM_MIN_SECONDS, min(seconds, CUSTOM_MAX_SECONDS))


def initial_duration(mode: TimerMode, custom_minutes: MinutesInput = None) -> int:
    if mode is TimerMode.POMODORO:
        return POMODORO_SECONDS
    if mode is TimerMode.REVERSE_POMODORO:
        return REVERSE_POMODORO_SECONDS
    if mode is TimerMode.CUSTOM:
        return custom_duration_seconds(custom_minutes)
    return 0


def select_mode(mode: Union[str, TimerMode], custom_minutes: MinutesInput = None) -> StudySession:
    """Build an idle session configured for ``mode``."""
    parsed = parse_mode(mode)
    return StudySession(mode=parsed, initial_study_seconds=initial_duration(parsed, custom_minutes))


__all__ = [
    "POMODORO_SECONDS",
    "REVERSE_POMODORO_SECONDS",
    "CUSTOM_MIN_SECONDS",
    "CUSTOM_MAX_SECONDS",
    "TimerConfigError",
    "parse_mode",
    "custom_duration_seconds",
    "initial_duration",
    "select_mode",
]
