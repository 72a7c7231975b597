"""Application bootstrap helpers for the Hypr Magic desktop app."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence, TextIO, cast

from .polish.errors import ConfigError
from .polish.service import PolishService
from .services.settings import Settings, SettingsStore, dump_settings
from .utils import logging as logging_utils

APP_ID = "com.seydemann.hyprmagic"
_TRUE_VALUES = {"1", "true", "yes", "on", "debug"}
_LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class AppWindows:
    """Top-level windows created by :func:`build_windows`."""

    icon: Any | None = None
    editor: Any | None = None
    error: Any | None = None


def configure_logging(debug: bool = False, *, force: bool = False) -> None:
    """Configure structured logging for the application."""

    level = logging.DEBUG if debug else logging.INFO
    logging_utils.setup_logging(level, force=force)
    _LOGGER.debug("Logging configured (level=%s)", logging.getLevelName(level))
    logging_utils.install_qt_message_handler()


def load_settings(path: Optional[Path] = None, *, store: SettingsStore | None = None) -> Settings:
    """Load settings from disk and the environment."""

    active_store = store or SettingsStore(path)
    return active_store.load()


def create_qapp(argv: Sequence[str] | None = None) -> Any:
    """Create (or reuse) the QApplication driving the UI."""

    from PySide6.QtWidgets import QApplication

    from .ui.theme import apply_stylesheet

    app = cast(Any, QApplication.instance() or QApplication(list(argv or sys.argv)))
    app.setApplicationName("Hypr Magic")
    app.setApplicationDisplayName("Hypr Magic")
    app.setDesktopFileName(APP_ID)
    # The editor hides on close; only the icon window ends the session.
    app.setQuitOnLastWindowClosed(False)
    apply_stylesheet(app)
    return app


def build_windows(settings: Settings, app: Any) -> AppWindows:
    """Create the editor and icon windows, or the startup error window."""

    from .ui.editor_window import EditorWindow
    from .ui.error_window import StartupErrorWindow
    from .ui.icon_window import IconWindow

    try:
        config = settings.to_polish_config()
    except ConfigError as exc:
        _LOGGER.error("Cannot start: %s", exc.user_message())
        print(exc.user_message(), file=sys.stderr)
        app.setQuitOnLastWindowClosed(True)
        error_window = StartupErrorWindow(exc.user_message())
        error_window.show()
        return AppWindows(error=error_window)

    _LOGGER.info("Using model %s", config.model)
    editor = EditorWindow(PolishService(config))
    icon = IconWindow(editor.toggle_visible, on_close=app.quit)
    editor.hide()
    icon.show()
    return AppWindows(icon=icon, editor=editor)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point invoked by the `hyprmagic` console script."""

    args, passthrough = _parse_cli_args(argv)

    debug = _env_flag("HYPRMAGIC_DEBUG", default=False)
    configure_logging(debug)

    settings_path = args.settings_path or os.environ.get("HYPRMAGIC_SETTINGS_PATH")
    resolved_path = Path(settings_path).expanduser() if settings_path else None
    settings_store = SettingsStore(resolved_path)
    settings = load_settings(store=settings_store)

    if args.dump_settings:
        _dump_settings(settings, settings_store)
        return 0

    if settings.debug_logging and not debug:
        configure_logging(True, force=True)

    app = create_qapp([sys.argv[0] if sys.argv else "hyprmagic", *passthrough])
    windows = build_windows(settings, app)
    _LOGGER.debug("Windows ready: %s", windows)
    try:
        return int(app.exec())
    except KeyboardInterrupt:  # pragma: no cover - manual shutdown path
        _LOGGER.info("Shutdown requested by user.")
        return 0


def _env_flag(name: str, *, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _parse_cli_args(argv: Sequence[str] | None) -> tuple[argparse.Namespace, list[str]]:
    parser = argparse.ArgumentParser(
        prog="hyprmagic",
        add_help=True,
        description="Launch the Hypr Magic text polisher or inspect its configuration.",
    )
    parser.add_argument(
        "--dump-settings",
        action="store_true",
        help="Print the effective settings payload (with secrets redacted) and exit.",
    )
    parser.add_argument(
        "--settings-path",
        metavar="PATH",
        help="Override the default ~/.hyprmagic/settings.json path.",
    )
    return parser.parse_known_args(argv)


def _dump_settings(settings: Settings, store: SettingsStore, *, stream: TextIO | None = None) -> None:
    destination = stream or sys.stdout
    output = {
        "settings": dump_settings(settings),
        "meta": {
            "path": str(store.path),
            "environment_variables": _active_env_overrides(),
        },
    }
    json.dump(output, destination, indent=2)
    destination.write("\n")


def _active_env_overrides() -> list[str]:
    prefixes = ("HYPRMAGIC_", "GEMINI_")
    return sorted(name for name in os.environ if name.startswith(prefixes))


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
