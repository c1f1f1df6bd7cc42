from __future__ import annotations

"""SQLite access and migrations for the local study store.

Each schema change is a function in MIGRATIONS; applied versions are kept in
``schema_migrations`` so ``init_db`` can run on every launch.

The single connection is shared with the commit worker thread, so every
statement runs under ``_lock`` and multi-statement writes go through
``transaction()``.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
import sqlite3
import threading
from typing import Callable, Iterable, Iterator


@dataclass(slots=True)
class DBConfig:
    path: Path
    pragmas: tuple[tuple[str, str | int], ...] = (
        ("journal_mode", "WAL"),
        ("synchronous", "NORMAL"),
    )


class DatabaseManager:
    def __init__(self, config: DBConfig):
        self.config = config
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.RLock()

    def connect(self) -> sqlite3.Connection:
        with self._lock:
            if self._conn is None:
                self.config.path.parent.mkdir(parents=True, exist_ok=True)
                self._conn = sqlite3.connect(self.config.path, check_same_thread=False)
                self._conn.row_factory = sqlite3.Row
                for key, value in self.config.pragmas:
                    self._conn.execute(f"PRAGMA {key}={value}")
            return self._conn

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Hold the connection for one commit-or-rollback unit of work."""
        with self._lock:
            conn = self.connect()
            try:
                yield conn
                conn.commit()
            except Exception:
                conn.rollback()
                raise

    # --- Migrations -------------------------------------------------------
    def init_db(self) -> None:
        with self.transaction() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS schema_migrations (
                    version INTEGER PRIMARY KEY,
                    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ','now'))
                )
                """
            )
        applied = {row[0] for row in self.query_all("SELECT version FROM schema_migrations")}
        for version, migration_fn in enumerate(MIGRATIONS, start=1):
            if version in applied:
                continue
            with self.transaction() as conn:
                migration_fn(conn)
                conn.execute("INSERT INTO schema_migrations (version) VALUES (?)", (version,))

    # --- Convenience ------------------------------------------------------
    def execute(self, sql: str, params: Iterable | None = None) -> sqlite3.Cursor:
        with self.transaction() as conn:
            return conn.execute(sql, tuple(params or ()))

    def query_all(self, sql: str, params: Iterable | None = None) -> list[sqlite3.Row]:
        with self._lock:
            return self.connect().execute(sql, tuple(params or ())).fetchall()

    def query_one(self, sql: str, params: Iterable | None = None) -> sqlite3.Row | None:
        with self._lock:
            return self.connect().execute(sql, tuple(params or ())).fetchone()


# --- Migration definitions --------------------------------------------------

def migration_001_create_study_tables(conn: sqlite3.Connection) -> None:
    conn.executescript(
        """
        CREATE TABLE subjects (
            user_id TEXT NOT NULL,
            name TEXT NOT NULL,
            color TEXT NOT NULL,
            position INTEGER NOT NULL,
            PRIMARY KEY (user_id, name),
            UNIQUE (user_id, color)
        );

        CREATE TABLE study_hours (
            user_id TEXT NOT NULL,
            date TEXT NOT NULL,
            subject TEXT NOT NULL,
            hours REAL NOT NULL DEFAULT 0,
            updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ','now')),
            PRIMARY KEY (user_id, date, subject)
        );

        CREATE INDEX idx_study_hours_date ON study_hours(user_id, date);
        """
    )


MIGRATIONS: list[Callable[[sqlite3.Connection], None]] = [
    migration_001_create_study_tables,
]

__all__ = ["DBConfig", "DatabaseManager"]
