from __future__ import annotations

"""Transient message overlay for timer warnings and confirmations."""

from PyQt6.QtCore import QTimer, Qt
from PyQt6.QtWidgets import QLabel, QWidget

_STYLES = {
    "info": "background: rgba(40,40,40,0.85); color: #fff;",
    "warning": "background: rgba(153,27,27,0.9); color: #fff;",
}


class Toast(QLabel):  # pragma: no cover - UI utility
    def __init__(self, parent: QWidget, message: str, level: str = "info", timeout_ms: int = 3000):
        super().__init__(parent)
        self.setText(message)
        self.setStyleSheet(_STYLES.get(level, _STYLES["info"]) + " padding: 6px 12px; border-radius: 6px;")
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        self.adjustSize()
        self.move(int((parent.width() - self.width()) / 2), 20)
        self.show()
        QTimer.singleShot(timeout_ms, self.close)


def show_toast(parent: QWidget, message: str, level: str = "info") -> None:  # pragma: no cover
    Toast(parent, message, level)


__all__ = ["show_toast"]
