from __future__ import annotations

"""Repository helper functions for subjects and study hours."""

from .database_manager import DatabaseManager
from .models import PreferencesSnapshot


# --- Subjects ---------------------------------------------------------------

def load_subjects(db: DatabaseManager, user_id: str) -> PreferencesSnapshot:
    rows = db.query_all(
        "SELECT name, color FROM subjects WHERE user_id=? ORDER BY position",
        (user_id,),
    )
    return PreferencesSnapshot(
        subjects=[r["name"] for r in rows],
        colors={r["name"]: r["color"] for r in rows},
    )


def replace_subjects(db: DatabaseManager, user_id: str, snapshot: PreferencesSnapshot) -> None:
    """Overwrite the stored subject document with ``snapshot``."""
    with db.transaction() as conn:
        conn.execute("DELETE FROM subjects WHERE user_id=?", (user_id,))
        conn.executemany(
            "INSERT INTO subjects (user_id, name, color, position) VALUES (?,?,?,?)",
            [
                (user_id, name, snapshot.colors.get(name, ""), pos)
                for pos, name in enumerate(snapshot.subjects)
            ],
        )


# --- Study hours ------------------------------------------------------------

def add_study_hours(db: DatabaseManager, user_id: str, date: str, subject: str, hours: float) -> None:
    db.execute(
        """
        INSERT INTO study_hours (user_id, date, subject, hours) VALUES (?,?,?,?)
        ON CONFLICT(user_id, date, subject) DO UPDATE SET
            hours = round(hours + excluded.hours, 1),
            updated_at = strftime('%Y-%m-%dT%H:%M:%fZ','now')
        """,
        (user_id, date, subject, hours),
    )


def get_study_hours(db: DatabaseManager, user_id: str, date: str) -> dict[str, float]:
    rows = db.query_all(
        "SELECT subject, hours FROM study_hours WHERE user_id=? AND date=?",
        (user_id, date),
    )
    return {r["subject"]: float(r["hours"]) for r in rows}


__all__ = [
    "load_subjects",
    "replace_subjects",
    "add_study_hours",
    "get_study_hours",
]
