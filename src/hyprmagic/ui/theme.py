"""Qt stylesheet shared by the icon and editor windows."""

from __future__ import annotations

from typing import Any

__all__ = ["STYLESHEET", "apply_stylesheet"]

STYLESHEET = """
#icon-window {
  background: transparent;
}

#icon-shell {
  background: transparent;
  border: none;
  padding: 0;
}

#icon-label {
  color: #eaf0ff;
  font-size: 24px;
  font-weight: 700;
}

#magic-btn {
  font-weight: 700;
  background: #14378a;
  color: #f6f8ff;
}

#magic-btn:disabled {
  background: #3a4566;
  color: #9aa3bd;
}

#status-label {
  color: #9aa3bd;
  font-size: 12px;
}
"""


def apply_stylesheet(app: Any) -> None:
    """Install :data:`STYLESHEET` on the running ``QApplication``."""

    app.setStyleSheet(STYLESHEET)
