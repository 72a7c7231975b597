"""Frameless floating icon that toggles the editor window."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QPoint, Qt
from PySide6.QtGui import QCloseEvent, QMouseEvent
from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget

__all__ = ["IconWindow"]

ICON_SIZE = 56
ICON_GLYPH = "✦"
# Pointer travel (in pixels) below which a press/release counts as a click.
_DRAG_THRESHOLD = 4


class IconWindow(QWidget):
    """Small draggable window; a click runs ``on_activate``, closing runs ``on_close``."""

    def __init__(
        self,
        on_activate: Callable[[], None],
        *,
        on_close: Callable[[], None] | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("icon-window")
        self.setWindowTitle("Hypr Magic Icon")
        self.setWindowFlags(Qt.WindowType.FramelessWindowHint | Qt.WindowType.WindowStaysOnTopHint)
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)
        self.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self.setFixedSize(ICON_SIZE, ICON_SIZE)

        self._on_activate = on_activate
        self._on_close = on_close
        self._press_pos: QPoint | None = None
        self._window_origin: QPoint | None = None
        self._dragged = False

        shell = QWidget(self)
        shell.setObjectName("icon-shell")
        label = QLabel(ICON_GLYPH, shell)
        label.setObjectName("icon-label")
        label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        shell_layout = QVBoxLayout(shell)
        shell_layout.setContentsMargins(0, 0, 0, 0)
        shell_layout.addWidget(label)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(shell)

    def mousePressEvent(self, event: QMouseEvent) -> None:  # noqa: N802 - Qt override
        if event.button() == Qt.MouseButton.LeftButton:
            self._press_pos = event.globalPosition().toPoint()
            self._window_origin = self.frameGeometry().topLeft()
            self._dragged = False
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:  # noqa: N802 - Qt override
        if self._press_pos is not None and self._window_origin is not None:
            delta = event.globalPosition().toPoint() - self._press_pos
            if self._dragged or delta.manhattanLength() > _DRAG_THRESHOLD:
                self._dragged = True
                self.move(self._window_origin + delta)
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:  # noqa: N802 - Qt override
        clicked = event.button() == Qt.MouseButton.LeftButton and self._press_pos is not None and not self._dragged
        self._press_pos = None
        self._window_origin = None
        self._dragged = False
        super().mouseReleaseEvent(event)
        if clicked:
            self._on_activate()

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802 - Qt override
        super().closeEvent(event)
        if self._on_close is not None:
            self._on_close()
