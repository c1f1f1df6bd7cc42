from __future__ import annotations

"""Timer service: drives the interval engine from a single QTimer.

Design:
 - One QTimer (1s) is the only tick source; study and break share it, so two
   loops can never run at once. Every phase change restarts it.
 - All state lives in one StudySession owned by the service; transition
   logic lives in ``engine`` and never touches Qt.
 - Ledger commits go through an injectable dispatcher (daemon thread by
   default) so the tick path never waits on I/O. Results come back as Qt
   signals.
 - Mode switches while active discard unsaved study time.
"""

import logging
import threading
from collections.abc import Collection
from typing import Callable, Optional, Union

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from . import engine
from .models import CommitResult, Phase, StudySession, TimerMode
from .modes import MinutesInput, select_mode
from .persistence import PersistenceBridge

logger = logging.getLogger(__name__)

Job = Callable[[], None]
Dispatcher = Callable[[Job], None]
SubjectsProvider = Callable[[], Collection[str]]

TICK_INTERVAL_MS = 1000


def run_in_thread(job: Job) -> None:
    threading.Thread(target=job, daemon=True).start()


class TimerService(QObject):
    tick = pyqtSignal(int, str)  # display seconds, phase
    phase_changed = pyqtSignal(str)  # idle|studying|on_break
    mode_changed = pyqtSignal(str)
    started = pyqtSignal(str)  # subject
    break_started = pyqtSignal(int)  # break seconds
    cycle_completed = pyqtSignal(int)  # studied seconds handed to the ledger
    stopped = pyqtSignal(int)  # studied seconds handed to the ledger
    committed = pyqtSignal(str, str, float)  # subject, date, hours
    persistence_error = pyqtSignal(str)

    def __init__(
        self,
        bridge: PersistenceBridge,
        subjects_provider: Optional[SubjectsProvider] = None,
        dispatch: Optional[Dispatcher] = None,
        mode: Union[str, TimerMode] = TimerMode.POMODORO,
    ) -> None:
        super().__init__()
        self._bridge = bridge
        self._subjects_provider = subjects_provider
        self._dispatch: Dispatcher = dispatch or run_in_thread
        self._timer = QTimer(self)
        self._timer.setInterval(TICK_INTERVAL_MS)
        self._timer.timeout.connect(self._on_tick)
        self._session: StudySession = select_mode(mode)

    # --- Properties -----------------------------------------------------
    @property
    def session(self) -> StudySession:
        return self._session

    @property
    def phase(self) -> Phase:
        return self._session.phase

    @property
    def mode(self) -> TimerMode:
        return self._session.mode

    def today(self) -> str:
        return self._bridge.today()

    @property
    def loop_active(self) -> bool:
        return self._timer.isActive()

    # --- Public API -----------------------------------------------------
    def select_mode(self, mode: Union[str, TimerMode], custom_minutes: MinutesInput = None) -> StudySession:
        """Replace the session with an idle one for ``mode``.

        Validation happens before teardown, so a rejected configuration
        leaves the running session untouched.
        """
        fresh = select_mode(mode, custom_minutes)
        previous = self._session
        self._timer.stop()
        if previous.is_active:
            discarded = previous.pre_break_study_seconds or engine.study_seconds_so_far(previous)
            logger.info(
                "mode switched while active; discarding %ss of study", discarded,
                extra={"_json_from": previous.mode.value, "_json_to": fresh.mode.value},
            )
        fresh.subject = previous.subject
        self._session = fresh
        self.mode_changed.emit(fresh.mode.value)
        if previous.is_active:
            self.phase_changed.emit(fresh.phase.value)
        self._emit_tick()
        return fresh

    def set_custom_minutes(self, minutes: MinutesInput) -> bool:
        """Reconfigure the custom duration; only honoured while idle."""
        if self._session.mode is not TimerMode.CUSTOM or self._session.is_active:
            return False
        self.select_mode(TimerMode.CUSTOM, minutes)
        return True

    def start(self, subject: str) -> None:
        subjects = self._subjects_provider() if self._subjects_provider else None
        self._apply(engine.start(self._session, subject, subjects))

    def pause(self) -> None:
        self._apply(engine.pause(self._session))

    def stop(self) -> None:
        self._apply(engine.stop(self._session))

    # --- Internal -------------------------------------------------------
    def _on_tick(self) -> None:
        self._apply(engine.tick(self._session))

    def _apply(self, transition: engine.Transition) -> None:
        event = transition.event
        if event == engine.EVENT_IGNORED:
            return
        subject = self._session.subject
        if event == engine.EVENT_TICK:
            self._emit_tick()
            return

        if transition.phase is Phase.IDLE:
            self._timer.stop()
        else:
            # Cancel then arm: restarting resets the 1s cadence for the new phase.
            self._timer.start()

        logger.info(
            "timer %s", event,
            extra={"_json_mode": self._session.mode.value, "_json_phase": transition.phase.value},
        )
        if event == engine.EVENT_STARTED:
            self.started.emit(subject)
        elif event == engine.EVENT_BREAK_STARTED:
            self.break_started.emit(self._session.break_duration_seconds)
        elif event == engine.EVENT_CYCLE_FINISHED:
            self.cycle_completed.emit(transition.commit_seconds)
        elif event == engine.EVENT_STOPPED:
            self.stopped.emit(transition.commit_seconds)
        self.phase_changed.emit(transition.phase.value)
        self._emit_tick()
        self._request_commit(subject, transition.commit_seconds)

    def _request_commit(self, subject: str, seconds: int) -> None:
        if seconds <= 0:
            return
        date_iso = self._bridge.today()
        bridge = self._bridge

        def job() -> None:
            self._on_commit_result(bridge.commit(subject, date_iso, seconds))

        self._dispatch(job)

    def _on_commit_result(self, result: CommitResult) -> None:
        if result.error:
            self.persistence_error.emit(f"Error saving study time: {result.error}")
        elif result.committed:
            self.committed.emit(result.subject, result.date, result.hours)

    def _emit_tick(self) -> None:
        self.tick.emit(engine.display_seconds(self._session), self._session.phase.value)


__all__ = ["TimerService", "run_in_thread", "TICK_INTERVAL_MS"]
