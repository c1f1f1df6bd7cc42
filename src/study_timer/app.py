from __future__ import annotations

import sys
import logging
from dataclasses import dataclass
from typing import Optional, Union

from PyQt6.QtWidgets import QApplication, QMainWindow

from .api_client import ApiClientConfig, LuminaApiClient
from .config import AppConfig
from .database_manager import DBConfig, DatabaseManager
from .local_store import SqliteStudyStore
from .logging_setup import configure_logging
from .persistence import PersistenceBridge
from .subject_store import SubjectStore
from .timer_page import TimerPage
from .timer_service import TimerService

APP_NAME = "Lumina Study Timer"

StudyBackend = Union[SqliteStudyStore, LuminaApiClient]


@dataclass(slots=True)
class AppState:
    config: AppConfig
    backend: StudyBackend
    subject_store: SubjectStore
    timer_service: TimerService
    db: DatabaseManager | None = None


def build_backend(config: AppConfig) -> tuple[StudyBackend, DatabaseManager | None]:
    if config.backend == "http":
        client = LuminaApiClient(
            ApiClientConfig(base_url=config.api_url, user_id=config.user_id, timeout=config.http_timeout)
        )
        return client, None
    db = DatabaseManager(DBConfig(path=config.db_path))
    db.init_db()
    return SqliteStudyStore(db, config.user_id), db


def get_app_state(config: Optional[AppConfig] = None) -> AppState:
    config = config or AppConfig.from_env()
    config.data_dir.mkdir(parents=True, exist_ok=True)
    configure_logging(config.data_dir, config.log_level)
    backend, db = build_backend(config)
    subject_store = SubjectStore(backend)
    subject_store.load()
    timer_service = TimerService(PersistenceBridge(backend), subjects_provider=subject_store.subjects)
    logging.getLogger(__name__).info(
        "app_state_created", extra={"_json_backend": config.backend, "_json_user": config.user_id}
    )
    return AppState(
        config=config,
        backend=backend,
        subject_store=subject_store,
        timer_service=timer_service,
        db=db,
    )


class MainWindow(QMainWindow):  # pragma: no cover - simple UI
    def __init__(self, state: AppState) -> None:
        super().__init__()
        self.state = state
        self.setWindowTitle(APP_NAME)
        self.resize(520, 420)
        self.setCentralWidget(TimerPage(state.timer_service, state.subject_store, state.backend))


def run(argv: Optional[list[str]] = None) -> int:  # pragma: no cover
    if argv is None:
        argv = sys.argv
    app = QApplication(argv)
    state = get_app_state()
    window = MainWindow(state)
    window.show()
    return app.exec()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(run())
