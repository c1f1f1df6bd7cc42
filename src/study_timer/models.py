from __future__ import annotations

"""Dataclass models for the study timer and its collaborators."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional


class TimerMode(str, Enum):
    POMODORO = "pomodoro"
    REVERSE_POMODORO = "reverse_pomodoro"
    CUSTOM = "custom"
    STOPWATCH = "stopwatch"

    @property
    def is_countdown(self) -> bool:
        return self is not TimerMode.STOPWATCH


class Phase(str, Enum):
    IDLE = "idle"
    STUDYING = "studying"
    ON_BREAK = "on_break"


def utc_today_iso() -> str:
    return datetime.now(timezone.utc).date().isoformat()


@dataclass(slots=True)
class StudySession:
    """Mutable state of one timer run; owned by a single TimerService."""

    mode: TimerMode
    initial_study_seconds: int = 0
    subject: str = ""
    phase: Phase = Phase.IDLE
    remaining_study_seconds: int = 0
    elapsed_stopwatch_seconds: int = 0
    break_duration_seconds: int = 0
    remaining_break_seconds: int = 0
    pre_break_study_seconds: int = 0

    def __post_init__(self) -> None:
        if self.mode.is_countdown and self.phase is Phase.IDLE:
            self.remaining_study_seconds = self.initial_study_seconds

    @property
    def is_active(self) -> bool:
        return self.phase is not Phase.IDLE


@dataclass(slots=True)
class PreferencesSnapshot:
    subjects: List[str] = field(default_factory=list)
    colors: Dict[str, str] = field(default_factory=dict)

    def color_for(self, subject: str) -> Optional[str]:
        return self.colors.get(subject)

    def copy(self) -> "PreferencesSnapshot":
        return PreferencesSnapshot(subjects=list(self.subjects), colors=dict(self.colors))


@dataclass(slots=True)
class CommitResult:
    subject: str
    date: str
    seconds: int
    hours: float
    committed: bool
    error: Optional[str] = None


__all__ = [
    "TimerMode",
    "Phase",
    "StudySession",
    "PreferencesSnapshot",
    "CommitResult",
    "utc_today_iso",
]
