import os
from pathlib import Path
import sys
import pytest

# Ensure src/ is on sys.path for direct test invocation without an editable install
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from study_timer.database_manager import DBConfig, DatabaseManager
from study_timer.models import PreferencesSnapshot
from study_timer.stores import LedgerError, PreferencesError


class FakeLedger:
    def __init__(self, fail: bool = False):
        self.calls: list[tuple[str, str, float]] = []
        self.fail = fail

    def add_study_time(self, subject, date, hours):
        if self.fail:
            raise LedgerError("ledger offline")
        self.calls.append((subject, date, hours))

    def study_time_for(self, date):
        out: dict[str, float] = {}
        for subject, d, hours in self.calls:
            if d == date:
                out[subject] = round(out.get(subject, 0.0) + hours, 1)
        return out


class FakePreferences:
    def __init__(self, snapshot: PreferencesSnapshot | None = None, fail_load: bool = False, fail_save: bool = False):
        self.snapshot = snapshot or PreferencesSnapshot()
        self.fail_load = fail_load
        self.fail_save = fail_save
        self.saved: list[PreferencesSnapshot] = []

    def load_preferences(self):
        if self.fail_load:
            raise PreferencesError("preferences offline")
        return self.snapshot.copy()

    def save_preferences(self, snapshot):
        if self.fail_save:
            raise PreferencesError("write rejected")
        self.saved.append(snapshot.copy())
        self.snapshot = snapshot.copy()


@pytest.fixture()
def db(tmp_path: Path):
    manager = DatabaseManager(DBConfig(path=tmp_path / "test.sqlite"))
    manager.init_db()
    yield manager
    manager.close()


@pytest.fixture()
def ledger():
    return FakeLedger()


@pytest.fixture()
def preferences():
    return FakePreferences(
        PreferencesSnapshot(subjects=["math", "physics"], colors={"math": "#f97316", "physics": "#22c55e"})
    )

