import pytest

from study_timer import engine
from study_timer.engine import TimerStateError
from study_timer.models import Phase, TimerMode
from study_timer.modes import TimerConfigError, select_mode


def _started(mode, minutes=None, subject="math"):
    session = select_mode(mode, minutes)
    engine.start(session, subject)
    return session


@pytest.mark.parametrize("mode", list(TimerMode))
def test_start_without_subject_leaves_session_idle(mode):
    session = select_mode(mode, 25 if mode is TimerMode.CUSTOM else None)
    with pytest.raises(TimerConfigError):
        engine.start(session, "")
    assert session.phase is Phase.IDLE


def test_start_checks_subject_membership_and_normalizes():
    session = select_mode("pomodoro")
    with pytest.raises(TimerConfigError):
        engine.start(session, "art", subjects=["math"])
    assert session.phase is Phase.IDLE
    result = engine.start(session, "  Math ", subjects=["math"])
    assert result.event == engine.EVENT_STARTED
    assert session.subject == "math"
    assert session.phase is Phase.STUDYING


def test_custom_start_requires_duration():
    session = select_mode("custom")
    with pytest.raises(TimerConfigError):
        engine.start(session, "math")
    assert session.phase is Phase.IDLE


def test_start_while_active_is_an_invariant_violation():
    session = _started("pomodoro")
    with pytest.raises(TimerStateError):
        engine.start(session, "math")


def test_tick_while_idle_is_an_invariant_violation():
    with pytest.raises(TimerStateError):
        engine.tick(select_mode("pomodoro"))


@pytest.mark.parametrize("mode, minutes", [("pomodoro", None), ("reverse_pomodoro", None), ("custom", 2)])
def test_countdown_decreases_by_one_until_exactly_zero(mode, minutes):
    session = _started(mode, minutes)
    total = session.initial_study_seconds
    for i in range(1, total):
        engine.tick(session)
        assert session.remaining_study_seconds == total - i
        assert session.phase is Phase.STUDYING
    result = engine.tick(session)
    assert session.remaining_study_seconds == 0
    assert result.event == engine.EVENT_BREAK_STARTED
    assert session.phase is Phase.ON_BREAK
    assert session.pre_break_study_seconds == total


def test_pomodoro_cycle_rearms_after_break():
    session = _started("pomodoro")
    for _ in range(1500):
        engine.tick(session)
    assert session.break_duration_seconds == 300
    results = [engine.tick(session) for _ in range(300)]
    commits = [r.commit_seconds for r in results if r.commit_seconds]
    assert commits == [1500]
    assert results[-1].event == engine.EVENT_CYCLE_FINISHED
    assert results[-1].rearmed
    assert session.phase is Phase.STUDYING
    assert session.remaining_study_seconds == 1500
    assert session.pre_break_study_seconds == 0


def test_reverse_pomodoro_has_long_break():
    session = _started("reverse_pomodoro")
    for _ in range(300):
        engine.tick(session)
    assert session.remaining_break_seconds == 1500


def test_stopwatch_pause_takes_third_as_break_then_idles():
    session = _started("stopwatch")
    for _ in range(125):
        engine.tick(session)
    assert session.elapsed_stopwatch_seconds == 125
    result = engine.pause(session)
    assert result.event == engine.EVENT_BREAK_STARTED
    assert session.break_duration_seconds == 41
    assert session.pre_break_study_seconds == 125
    results = [engine.tick(session) for _ in range(41)]
    assert results[-1].commit_seconds == 125
    assert not results[-1].rearmed
    assert session.phase is Phase.IDLE
    assert session.elapsed_stopwatch_seconds == 0


def test_custom_pause_uses_elapsed_and_rearms_full_duration():
    session = _started("custom", 30)
    for _ in range(300):
        engine.tick(session)
    engine.pause(session)
    assert session.break_duration_seconds == 100
    for _ in range(100):
        last = engine.tick(session)
    assert last.commit_seconds == 300
    assert session.phase is Phase.STUDYING
    assert session.remaining_study_seconds == 1800


def test_zero_break_skips_on_break():
    session = _started("stopwatch")
    engine.tick(session)
    engine.tick(session)
    result = engine.pause(session)
    assert result.event == engine.EVENT_CYCLE_FINISHED
    assert result.commit_seconds == 2
    assert session.phase is Phase.IDLE


def test_pause_in_pomodoro_behaves_like_stop():
    session = _started("pomodoro")
    for _ in range(720):
        engine.tick(session)
    result = engine.pause(session)
    assert result.event == engine.EVENT_STOPPED
    assert result.commit_seconds == 720
    assert session.phase is Phase.IDLE
    assert session.remaining_study_seconds == 1500


def test_pause_ignored_outside_study():
    session = select_mode("stopwatch")
    assert engine.pause(session).event == engine.EVENT_IGNORED


def test_stop_during_break_commits_pending_study_once():
    session = _started("custom", 30)
    for _ in range(600):
        engine.tick(session)
    engine.pause(session)
    result = engine.stop(session)
    assert result.commit_seconds == 600
    assert session.phase is Phase.IDLE
    assert session.pre_break_study_seconds == 0
    assert engine.stop(session).event == engine.EVENT_IGNORED


def test_stop_is_idempotent():
    session = _started("stopwatch")
    for _ in range(10):
        engine.tick(session)
    first = engine.stop(session)
    second = engine.stop(session)
    assert first.commit_seconds == 10
    assert second.event == engine.EVENT_IGNORED
    assert second.commit_seconds == 0


def test_display_helpers():
    assert engine.format_clock(1500) == "25:00"
    assert engine.format_clock(125) == "02:05"
    assert engine.format_clock(-4) == "00:00"
    session = _started("pomodoro")
    for _ in range(750):
        engine.tick(session)
    assert engine.progress(session) == pytest.approx(0.5)
    assert engine.display_seconds(session) == 750
    sw = _started("stopwatch")
    for _ in range(60):
        engine.tick(sw)
    assert engine.progress(sw) == pytest.approx(60 / (180 * 60))
