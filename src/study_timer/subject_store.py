from __future__ import annotations

"""SubjectStore caches the user's subjects and colours with change signals."""

import logging
import re
from typing import List, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from .models import PreferencesSnapshot
from .stores import PreferencesError, PreferencesStore

logger = logging.getLogger(__name__)

DEFAULT_SUBJECT_COLOR = "#f97316"
_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


def normalize_subject(name: str) -> str:
    return name.strip().lower()


class SubjectStore(QObject):
    changed = pyqtSignal()
    error = pyqtSignal(str)

    def __init__(self, store: PreferencesStore):
        super().__init__()
        self._store = store
        self._snapshot = PreferencesSnapshot()
        self._loaded = False

    # --- Loading --------------------------------------------------------
    def load(self) -> bool:
        try:
            self._snapshot = self._store.load_preferences()
        except PreferencesError as e:
            logger.warning("preferences load failed: %s", e)
            self._snapshot = PreferencesSnapshot()
            self.error.emit(f"Failed to load necessary data: {e}")
            return False
        finally:
            self._loaded = True
        self.changed.emit()
        return True

    # --- Access ---------------------------------------------------------
    def snapshot(self) -> PreferencesSnapshot:
        return self._snapshot.copy()

    def subjects(self) -> List[str]:
        if not self._loaded:
            self.load()
        return list(self._snapshot.subjects)

    def color_for(self, subject: str) -> str:
        return self._snapshot.color_for(subject) or DEFAULT_SUBJECT_COLOR

    # --- Mutations ------------------------------------------------------
    def add(self, name: str, color: str) -> Optional[str]:
        """Add a subject; returns the normalized name or None on rejection."""
        subject = normalize_subject(name)
        if not subject:
            self.error.emit("Subject name cannot be empty.")
            return None
        if subject in self._snapshot.subjects:
            self.error.emit("Subject already exists.")
            return None
        if not _COLOR_RE.match(color or ""):
            self.error.emit("Color must look like #rrggbb.")
            return None
        used = {c.lower() for c in self._snapshot.colors.values()}
        if color.lower() in used:
            self.error.emit("Color already in use. Please choose a different one.")
            return None
        updated = self._snapshot.copy()
        updated.subjects.append(subject)
        updated.colors[subject] = color
        return subject if self._commit(updated, f"Failed to add subject {subject!r}") else None

    def remove(self, name: str) -> bool:
        subject = normalize_subject(name)
        if subject not in self._snapshot.subjects:
            self.error.emit("Please select a subject to delete.")
            return False
        updated = self._snapshot.copy()
        updated.subjects.remove(subject)
        updated.colors.pop(subject, None)
        return self._commit(updated, f"Failed to delete subject {subject!r}")

    def _commit(self, updated: PreferencesSnapshot, failure: str) -> bool:
        previous = self._snapshot
        # Optimistic update; reverted below if the store rejects it.
        self._snapshot = updated
        self.changed.emit()
        try:
            self._store.save_preferences(updated)
        except PreferencesError as e:
            logger.warning("%s: %s", failure, e)
            self._snapshot = previous
            self.changed.emit()
            self.error.emit(f"{failure}: {e}")
            return False
        return True


__all__ = ["SubjectStore", "DEFAULT_SUBJECT_COLOR", "normalize_subject"]
