from __future__ import annotations

"""Protocols for the timer's external collaborators and their errors."""

from typing import Dict, Protocol

from .models import PreferencesSnapshot


class StoreError(Exception):
    """Base error for collaborator failures."""


class LedgerError(StoreError):
    """Writing to or reading from the study-time ledger failed."""


class PreferencesError(StoreError):
    """Loading or saving subject preferences failed."""


class PreferencesStore(Protocol):
    """Subject list plus one colour per subject."""

    def load_preferences(self) -> PreferencesSnapshot:
        ...

    def save_preferences(self, snapshot: PreferencesSnapshot) -> None:
        ...


class StudyTimeLedger(Protocol):
    """Cumulative hours per (user, date, subject); writes are additive."""

    def add_study_time(self, subject: str, date: str, hours: float) -> None:
        ...

    def study_time_for(self, date: str) -> Dict[str, float]:
        ...


__all__ = [
    "StoreError",
    "LedgerError",
    "PreferencesError",
    "PreferencesStore",
    "StudyTimeLedger",
]
