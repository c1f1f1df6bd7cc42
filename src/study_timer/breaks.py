from __future__ import annotations

"""Break scheduler."""

from .models import TimerMode

POMODORO_BREAK_SECONDS = 5 * 60
REVERSE_POMODORO_BREAK_SECONDS = 25 * 60


def compute_break(mode: TimerMode, actual_study_seconds: int) -> int:
    """Break length in seconds for a study segment that just ended.

    Pomodoro variants use fixed breaks; custom and stopwatch rest for a third
    of the time studied. A result of 0 means the break is skipped.
    """
    mode = TimerMode(mode)
    if mode is TimerMode.POMODORO:
        return POMODORO_BREAK_SECONDS
    if mode is TimerMode.REVERSE_POMODORO:
        return REVERSE_POMODORO_BREAK_SECONDS
    return max(0, int(actual_study_seconds)) // 3


__all__ = ["compute_break", "POMODORO_BREAK_SECONDS", "REVERSE_POMODORO_BREAK_SECONDS"]
