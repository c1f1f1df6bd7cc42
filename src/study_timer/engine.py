from __future__ import annotations

"""Interval engine: pure transition functions over a StudySession.

Every function mutates the session it is given and returns a Transition
describing what happened. ``commit_seconds`` on a Transition is the study
time the caller must hand to the persistence bridge; the engine itself never
performs I/O and never owns a timer. Driving the 1-second tick is the job of
TimerService.

State machine::

    idle --start--> studying --tick (countdown hits 0)--> on_break
                    studying --pause (custom/stopwatch)--> on_break
    on_break --tick (break hits 0)--> studying (countdown) | idle (stopwatch)
    any --stop--> idle
"""

from collections.abc import Collection
from dataclasses import dataclass
from typing import Optional

from .breaks import compute_break
from .models import Phase, StudySession, TimerMode
from .modes import TimerConfigError

EVENT_STARTED = "started"
EVENT_TICK = "tick"
EVENT_BREAK_STARTED = "break_started"
EVENT_CYCLE_FINISHED = "cycle_finished"
EVENT_STOPPED = "stopped"
EVENT_IGNORED = "ignored"

STOPWATCH_PROGRESS_CAP_SECONDS = 180 * 60


class TimerStateError(RuntimeError):
    """Transition requested from a phase that can never legally receive it."""


@dataclass(frozen=True, slots=True)
class Transition:
    event: str
    phase: Phase
    commit_seconds: int = 0
    rearmed: bool = False


def study_seconds_so_far(session: StudySession) -> int:
    if session.mode is TimerMode.STOPWATCH:
        return session.elapsed_stopwatch_seconds
    return max(0, session.initial_study_seconds - session.remaining_study_seconds)


def start(session: StudySession, subject: str, subjects: Optional[Collection[str]] = None) -> Transition:
    if session.is_active:
        raise TimerStateError("Timer already active; stop it before starting a new session")
    name = (subject or "").strip().lower()
    if not name:
        raise TimerConfigError("Please select a subject before starting the timer.")
    if subjects is not None and name not in subjects:
        raise TimerConfigError(f"Unknown subject: {name!r}")
    if session.mode is TimerMode.CUSTOM and session.initial_study_seconds <= 0:
        raise TimerConfigError("Please enter a valid custom time (1-180 minutes).")
    session.subject = name
    _arm_study(session)
    return Transition(EVENT_STARTED, session.phase)


def tick(session: StudySession) -> Transition:
    if session.phase is Phase.STUDYING:
        if session.mode is TimerMode.STOPWATCH:
            session.elapsed_stopwatch_seconds += 1
            return Transition(EVENT_TICK, session.phase)
        if session.remaining_study_seconds <= 1:
            session.remaining_study_seconds = 0
            return _end_study(session, session.initial_study_seconds)
        session.remaining_study_seconds -= 1
        return Transition(EVENT_TICK, session.phase)

    if session.phase is Phase.ON_BREAK:
        if session.remaining_break_seconds <= 1:
            session.remaining_break_seconds = 0
            return _finish_break(session)
        session.remaining_break_seconds -= 1
        return Transition(EVENT_TICK, session.phase)

    raise TimerStateError("tick received while idle")


def pause(session: StudySession) -> Transition:
    """Custom/stopwatch: take a break now. Pomodoro variants: same as stop."""
    if session.phase is not Phase.STUDYING:
        return Transition(EVENT_IGNORED, session.phase)
    if session.mode in (TimerMode.POMODORO, TimerMode.REVERSE_POMODORO):
        return stop(session)
    return _end_study(session, study_seconds_so_far(session))


def stop(session: StudySession) -> Transition:
    if session.phase is Phase.IDLE:
        return Transition(EVENT_IGNORED, session.phase)
    if session.phase is Phase.ON_BREAK:
        studied = session.pre_break_study_seconds
    else:
        studied = study_seconds_so_far(session)
    reset(session)
    return Transition(EVENT_STOPPED, session.phase, commit_seconds=studied)


def reset(session: StudySession) -> None:
    session.phase = Phase.IDLE
    session.remaining_study_seconds = session.initial_study_seconds if session.mode.is_countdown else 0
    session.elapsed_stopwatch_seconds = 0
    session.break_duration_seconds = 0
    session.remaining_break_seconds = 0
    session.pre_break_study_seconds = 0


# --- Internal ---------------------------------------------------------------

def _arm_study(session: StudySession) -> None:
    session.phase = Phase.STUDYING
    session.remaining_study_seconds = session.initial_study_seconds if session.mode.is_countdown else 0
    session.elapsed_stopwatch_seconds = 0
    session.break_duration_seconds = 0
    session.remaining_break_seconds = 0


def _end_study(session: StudySession, studied: int) -> Transition:
    break_seconds = compute_break(session.mode, studied)
    if break_seconds <= 0:
        reset(session)
        return Transition(EVENT_CYCLE_FINISHED, session.phase, commit_seconds=studied)
    session.phase = Phase.ON_BREAK
    session.break_duration_seconds = break_seconds
    session.remaining_break_seconds = break_seconds
    session.pre_break_study_seconds = studied
    return Transition(EVENT_BREAK_STARTED, session.phase)


def _finish_break(session: StudySession) -> Transition:
    studied = session.pre_break_study_seconds
    session.pre_break_study_seconds = 0
    if session.mode.is_countdown:
        # Next study phase starts on this same tick.
        _arm_study(session)
        return Transition(EVENT_CYCLE_FINISHED, session.phase, commit_seconds=studied, rearmed=True)
    reset(session)
    return Transition(EVENT_CYCLE_FINISHED, session.phase, commit_seconds=studied)


# --- Display helpers --------------------------------------------------------

def format_clock(seconds: int) -> str:
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def display_seconds(session: StudySession) -> int:
    if session.phase is Phase.ON_BREAK:
        return session.remaining_break_seconds
    if session.mode is TimerMode.STOPWATCH:
        return session.elapsed_stopwatch_seconds
    return session.remaining_study_seconds


def progress(session: StudySession) -> float:
    """Fraction (0..1) of the current interval already elapsed."""
    if session.phase is Phase.ON_BREAK:
        total = session.break_duration_seconds
        return (total - session.remaining_break_seconds) / total if total > 0 else 0.0
    if session.mode is TimerMode.STOPWATCH:
        return min(1.0, session.elapsed_stopwatch_seconds / STOPWATCH_PROGRESS_CAP_SECONDS)
    total = session.initial_study_seconds
    return (total - session.remaining_study_seconds) / total if total > 0 else 0.0


__all__ = [
    "Transition",
    "TimerStateError",
    "EVENT_STARTED",
    "EVENT_TICK",
    "EVENT_BREAK_STARTED",
    "EVENT_CYCLE_FINISHED",
    "EVENT_STOPPED",
    "EVENT_IGNORED",
    "study_seconds_so_far",
    "start",
    "tick",
    "pause",
    "stop",
    "reset",
    "format_clock",
    "display_seconds",
    "progress",
]
