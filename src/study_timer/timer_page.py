from __future__ import annotations

"""Timer page: mode buttons, subject picker, progress and controls."""

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QButtonGroup,
    QColorDialog,
    QComboBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from . import engine
from .models import Phase, TimerMode
from .modes import TimerConfigError
from .stats import summary_text, weekly_totals
from .stores import LedgerError, StudyTimeLedger
from .subject_store import DEFAULT_SUBJECT_COLOR, SubjectStore
from .timer_service import TimerService
from .toast import show_toast

BREAK_COLOR = "#60a5fa"
MODE_LABELS = {
    TimerMode.POMODORO: "Pomodoro",
    TimerMode.REVERSE_POMODORO: "Reverse Pomodoro",
    TimerMode.CUSTOM: "Custom",
    TimerMode.STOPWATCH: "Stopwatch",
}


class TimerPage(QWidget):  # pragma: no cover UI heavy
    def __init__(self, service: TimerService, subjects: SubjectStore, ledger: StudyTimeLedger):
        super().__init__()
        self._service = service
        self._subjects = subjects
        self._ledger = ledger
        self._new_color = DEFAULT_SUBJECT_COLOR

        layout = QVBoxLayout(self)

        mode_row = QHBoxLayout()
        self.mode_group = QButtonGroup(self)
        self.mode_group.setExclusive(True)
        self._mode_buttons: dict[TimerMode, QPushButton] = {}
        for mode, label in MODE_LABELS.items():
            btn = QPushButton(label)
            btn.setCheckable(True)
            self.mode_group.addButton(btn)
            self._mode_buttons[mode] = btn
            mode_row.addWidget(btn)
            btn.clicked.connect(lambda _checked, m=mode: self._on_mode(m))
        self._mode_buttons[service.mode].setChecked(True)
        layout.addLayout(mode_row)

        self.subject_combo = QComboBox()
        layout.addWidget(QLabel("Subject:"))
        layout.addWidget(self.subject_combo)

        self.custom_edit = QLineEdit()
        self.custom_edit.setPlaceholderText("Minutes (1-180)")
        self.custom_edit.editingFinished.connect(self._on_custom_minutes)
        layout.addWidget(self.custom_edit)

        self.time_label = QLabel("00:00")
        self.time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        font = self.time_label.font()
        font.setPointSize(32)
        self.time_label.setFont(font)
        layout.addWidget(self.time_label)
        self.progress = QProgressBar()
        self.progress.setRange(0, 1000)
        self.progress.setTextVisible(False)
        layout.addWidget(self.progress)

        btn_row = QHBoxLayout()
        self.btn_start = QPushButton("Start")
        self.btn_pause = QPushButton("Pause")
        self.btn_stop = QPushButton("Stop")
        for b in (self.btn_start, self.btn_pause, self.btn_stop):
            btn_row.addWidget(b)
        layout.addLayout(btn_row)

        add_row = QHBoxLayout()
        self.new_subject_edit = QLineEdit()
        self.new_subject_edit.setPlaceholderText("Subject name")
        self.btn_color = QPushButton("Color")
        self.btn_add = QPushButton("Add Subject")
        self.btn_remove = QPushButton("Delete Selected")
        for w in (self.new_subject_edit, self.btn_color, self.btn_add, self.btn_remove):
            add_row.addWidget(w)
        layout.addLayout(add_row)

        self.today_label = QLabel("")
        layout.addWidget(self.today_label)
        layout.addStretch(1)

        self.btn_start.clicked.connect(self._on_start)
        self.btn_pause.clicked.connect(self._service.pause)
        self.btn_stop.clicked.connect(self._service.stop)
        self.btn_color.clicked.connect(self._pick_color)
        self.btn_add.clicked.connect(self._on_add_subject)
        self.btn_remove.clicked.connect(self._on_remove_subject)
        self._service.tick.connect(self._on_tick)
        self._service.phase_changed.connect(lambda _p: self._refresh_controls())
        self._service.mode_changed.connect(lambda _m: self._refresh_controls())
        self._service.committed.connect(lambda *_: self.refresh_today())
        self._service.persistence_error.connect(lambda msg: show_toast(self, msg, "warning"))
        self._subjects.changed.connect(self.refresh_subjects)
        self._subjects.error.connect(lambda msg: show_toast(self, msg, "warning"))

        self.refresh_subjects()
        self.refresh_today()
        self._refresh_controls()
        self._on_tick(engine.display_seconds(service.session), service.phase.value)

    # --- Slots ----------------------------------------------------------
    def _on_mode(self, mode: TimerMode) -> None:
        minutes = self.custom_edit.text() if mode is TimerMode.CUSTOM else None
        try:
            self._service.select_mode(mode, minutes)
        except TimerConfigError as e:
            self.custom_edit.clear()
            show_toast(self, str(e), "warning")
            self._service.select_mode(mode)

    def _on_custom_minutes(self) -> None:
        try:
            self._service.set_custom_minutes(self.custom_edit.text())
        except TimerConfigError as e:
            self.custom_edit.clear()
            show_toast(self, str(e), "warning")

    def _on_start(self) -> None:
        try:
            self._service.start(self.subject_combo.currentText())
        except TimerConfigError as e:
            show_toast(self, str(e), "warning")

    def _on_tick(self, seconds: int, phase: str) -> None:
        text = engine.format_clock(seconds)
        self.time_label.setText(f"Break: {text}" if phase == Phase.ON_BREAK.value else text)
        self.progress.setValue(int(engine.progress(self._service.session) * 1000))
        color = BREAK_COLOR if phase == Phase.ON_BREAK.value else self._subjects.color_for(self._current_subject())
        self.progress.setStyleSheet(f"QProgressBar::chunk {{ background: {color}; }}")
        self.time_label.setStyleSheet(f"color: {color};")

    def _pick_color(self) -> None:
        chosen = QColorDialog.getColor(QColor(self._new_color), self, "Subject color")
        if chosen.isValid():
            self._new_color = chosen.name()
            self.btn_color.setStyleSheet(f"background: {self._new_color};")

    def _on_add_subject(self) -> None:
        had_subjects = bool(self._subjects.subjects())
        added = self._subjects.add(self.new_subject_edit.text(), self._new_color)
        if added:
            self.new_subject_edit.clear()
            if not had_subjects:
                self.subject_combo.setCurrentText(added)

    def _on_remove_subject(self) -> None:
        self._subjects.remove(self.subject_combo.currentText())

    # --- Refresh --------------------------------------------------------
    def _current_subject(self) -> str:
        return self._service.session.subject or self.subject_combo.currentText()

    def refresh_subjects(self) -> None:
        current = self.subject_combo.currentText()
        self.subject_combo.blockSignals(True)
        self.subject_combo.clear()
        self.subject_combo.addItems(self._subjects.subjects())
        if current:
            self.subject_combo.setCurrentText(current)
        self.subject_combo.blockSignals(False)
        self._refresh_controls()

    def refresh_today(self) -> None:
        try:
            day = self._service.today()
            today = self._ledger.study_time_for(day)
            week = weekly_totals(self._ledger, day)
        except LedgerError as e:
            self.today_label.setText(f"Today: unavailable ({e})")
            return
        self.today_label.setText(summary_text(today, week))

    def _refresh_controls(self) -> None:
        session = self._service.session
        idle = session.phase is Phase.IDLE
        has_subjects = self.subject_combo.count() > 0
        self.btn_start.setEnabled(idle and has_subjects)
        self.btn_pause.setEnabled(
            session.phase is Phase.STUDYING and session.mode in (TimerMode.CUSTOM, TimerMode.STOPWATCH)
        )
        self.btn_stop.setEnabled(not idle)
        self.btn_stop.setText("Stop Break & Save" if session.phase is Phase.ON_BREAK else "Stop")
        self.subject_combo.setEnabled(idle and has_subjects)
        self.custom_edit.setVisible(session.mode is TimerMode.CUSTOM)
        self._mode_buttons[session.mode].setChecked(True)


__all__ = ["TimerPage"]
