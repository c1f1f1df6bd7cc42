import pytest

from conftest import FakeLedger
from study_timer.persistence import PersistenceBridge, seconds_to_hours


def test_seconds_to_hours_rounds_to_one_decimal():
    assert seconds_to_hours(1500) == 0.4
    assert seconds_to_hours(3600) == 1.0
    assert seconds_to_hours(180) == 0.1
    assert seconds_to_hours(179) == 0.0
    assert seconds_to_hours(-10) == 0.0


@pytest.mark.parametrize("seconds, hours", [(900, 0.3), (1260, 0.4), (4500, 1.3), (8100, 2.3), (540, 0.2)])
def test_seconds_to_hours_rounds_halves_up(seconds, hours):
    assert seconds_to_hours(seconds) == hours


def test_fifteen_minute_session_commits_three_tenths(ledger):
    bridge = PersistenceBridge(ledger, date_provider=lambda: "2025-03-04")
    assert bridge.commit("math", bridge.today(), 900).hours == 0.3
    assert ledger.calls == [("math", "2025-03-04", 0.3)]


def test_commit_writes_hours(ledger):
    bridge = PersistenceBridge(ledger, date_provider=lambda: "2025-03-04")
    result = bridge.commit("math", bridge.today(), 1500)
    assert result.committed
    assert result.hours == 0.4
    assert ledger.calls == [("math", "2025-03-04", 0.4)]


def test_commit_skips_zero_hours(ledger):
    bridge = PersistenceBridge(ledger)
    result = bridge.commit("math", "2025-03-04", 100)
    assert not result.committed
    assert result.error is None
    assert ledger.calls == []


def test_commit_skips_missing_subject(ledger):
    result = PersistenceBridge(ledger).commit("", "2025-03-04", 3600)
    assert not result.committed
    assert ledger.calls == []


def test_commit_reports_ledger_failure():
    result = PersistenceBridge(FakeLedger(fail=True)).commit("math", "2025-03-04", 3600)
    assert not result.committed
    assert result.error == "ledger offline"
