"""Editor window hosting the scratchpad and the Magic/Copy/Clear actions."""

from __future__ import annotations

import logging
from typing import Callable

from PySide6.QtGui import QGuiApplication, QTextOption
from PySide6.QtWidgets import QHBoxLayout, QLabel, QPlainTextEdit, QPushButton, QVBoxLayout, QWidget

from ..polish.bridge import PollTimer, PolishBridge, QtPollTimer
from ..polish.service import PolishService

__all__ = ["EditorWindow"]

LOGGER = logging.getLogger(__name__)

HEADER_TEXT = "Write or paste text, then click Magic to polish."


class EditorWindow(QWidget):
    """Scratchpad window; doubles as the view driven by :class:`PolishBridge`."""

    def __init__(
        self,
        service: PolishService,
        *,
        parent: QWidget | None = None,
        timer: PollTimer | None = None,
        spawn: Callable[[Callable[[], None]], None] | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Hypr Magic")
        self.resize(640, 420)

        self._header = QLabel(HEADER_TEXT)
        self._header.setWordWrap(True)

        self._editor = QPlainTextEdit()
        self._editor.setWordWrapMode(QTextOption.WrapMode.WrapAtWordBoundaryOrAnywhere)

        self._magic_button = QPushButton("Magic")
        self._magic_button.setObjectName("magic-btn")
        self._copy_button = QPushButton("Copy")
        self._clear_button = QPushButton("Clear")

        self._status = QLabel("Idle")
        self._status.setObjectName("status-label")

        actions = QHBoxLayout()
        actions.setSpacing(8)
        actions.addWidget(self._magic_button)
        actions.addWidget(self._copy_button)
        actions.addWidget(self._clear_button)
        actions.addStretch(1)

        root = QVBoxLayout(self)
        root.setContentsMargins(12, 12, 12, 12)
        root.setSpacing(10)
        root.addWidget(self._header)
        root.addWidget(self._editor, 1)
        root.addLayout(actions)
        root.addWidget(self._status)

        self._bridge = PolishBridge(
            service,
            self,
            timer=timer if timer is not None else QtPollTimer(self),
            spawn=spawn,
        )

        self._magic_button.clicked.connect(self._on_magic_clicked)
        self._copy_button.clicked.connect(self.copy_to_clipboard)
        self._clear_button.clicked.connect(self._editor.clear)

    @property
    def bridge(self) -> PolishBridge:
        return self._bridge

    @property
    def magic_button(self) -> QPushButton:
        return self._magic_button

    @property
    def copy_button(self) -> QPushButton:
        return self._copy_button

    @property
    def clear_button(self) -> QPushButton:
        return self._clear_button

    def text(self) -> str:
        return self._editor.toPlainText()

    def status_text(self) -> str:
        return self._status.text()

    # ------------------------------------------------------------------
    # PolishView
    # ------------------------------------------------------------------
    def set_status(self, text: str) -> None:
        self._status.setText(text)

    def set_trigger_enabled(self, enabled: bool) -> None:
        self._magic_button.setEnabled(enabled)

    def set_text(self, text: str) -> None:
        self._editor.setPlainText(text)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def copy_to_clipboard(self) -> None:
        clipboard = QGuiApplication.clipboard()
        if clipboard is None:  # pragma: no cover - headless platforms
            LOGGER.debug("No clipboard available; copy skipped")
            return
        clipboard.setText(self.text())

    def toggle_visible(self) -> None:
        if self.isVisible():
            self.hide()
        else:
            self.show()
            self.raise_()
            self.activateWindow()

    def _on_magic_clicked(self) -> None:
        self._bridge.request_polish(self.text())
