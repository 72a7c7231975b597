"""Window shown instead of the editor when startup configuration fails."""

from __future__ import annotations

from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget

__all__ = ["StartupErrorWindow"]


class StartupErrorWindow(QWidget):
    def __init__(self, message: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Hypr Magic")
        self.resize(480, 120)
        self._label = QLabel(message)
        self._label.setWordWrap(True)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.addWidget(self._label)

    def message(self) -> str:
        return self._label.text()
