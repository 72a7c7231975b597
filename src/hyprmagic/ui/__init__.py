"""UI package holding the desktop application's windows."""

from .editor_window import EditorWindow
from .error_window import StartupErrorWindow
from .icon_window import IconWindow
from .theme import STYLESHEET, apply_stylesheet

__all__ = ["EditorWindow", "IconWindow", "STYLESHEET", "StartupErrorWindow", "apply_stylesheet"]
