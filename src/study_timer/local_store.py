from __future__ import annotations

"""SQLite implementation of the preferences store and study-time ledger."""

import sqlite3

from .database_manager import DatabaseManager
from .models import PreferencesSnapshot
from .repositories import add_study_hours, get_study_hours, load_subjects, replace_subjects
from .stores import LedgerError, PreferencesError


class SqliteStudyStore:
    def __init__(self, db: DatabaseManager, user_id: str) -> None:
        self._db = db
        self._user_id = user_id

    # --- PreferencesStore -------------------------------------------------
    def load_preferences(self) -> PreferencesSnapshot:
        try:
            return load_subjects(self._db, self._user_id)
        except sqlite3.Error as e:
            raise PreferencesError(f"Failed to load preferences: {e}") from e

    def save_preferences(self, snapshot: PreferencesSnapshot) -> None:
        try:
            replace_subjects(self._db, self._user_id, snapshot)
        except sqlite3.Error as e:
            raise PreferencesError(f"Failed to save preferences: {e}") from e

    # --- StudyTimeLedger --------------------------------------------------
    def add_study_time(self, subject: str, date: str, hours: float) -> None:
        try:
            add_study_hours(self._db, self._user_id, date, subject, hours)
        except sqlite3.Error as e:
            raise LedgerError(f"Failed to save study hours: {e}") from e

    def study_time_for(self, date: str) -> dict[str, float]:
        """Hours per known subject on ``date``; every subject is present."""
        try:
            recorded = get_study_hours(self._db, self._user_id, date)
            subjects = load_subjects(self._db, self._user_id).subjects
        except sqlite3.Error as e:
            raise LedgerError(f"Failed to load study time: {e}") from e
        return {s: recorded.get(s, 0.0) for s in subjects}


__all__ = ["SqliteStudyStore"]
