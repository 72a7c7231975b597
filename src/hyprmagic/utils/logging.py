"""Logging for Hypr Magic.

The UI thread and the ``polish-worker`` threads write to one rotating file;
every line carries the thread name so a request can be followed from trigger
to outcome. Qt's own diagnostics are routed into ``qt.<category>`` loggers.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

__all__ = ["LOG_FILE_NAME", "setup_logging", "install_qt_message_handler"]

LOG_FILE_NAME = "hyprmagic.log"
LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(threadName)s] %(name)s: %(message)s"
_DEFAULT_LOG_DIR = Path.home() / ".hyprmagic" / "logs"
_MAX_BYTES = 512_000
_BACKUP_COUNT = 2
# httpx logs every request line at INFO.
_HTTP_LOGGERS = ("httpx", "httpcore")

_log_path: Path | None = None


def setup_logging(
    level: int = logging.INFO,
    *,
    log_dir: Path | str | None = None,
    console: bool = True,
    force: bool = False,
) -> Path:
    """Attach the rotating file handler (and stderr when ``console``) to the root logger.

    ``log_dir`` falls back to ``HYPRMAGIC_LOG_DIR`` and then ``~/.hyprmagic/logs``.
    Later calls are no-ops returning the same path unless ``force`` is set,
    which the app uses to switch to DEBUG once the settings file asks for it.
    """

    global _log_path
    if _log_path is not None and not force:
        return _log_path

    directory = Path(log_dir or os.environ.get("HYPRMAGIC_LOG_DIR") or _DEFAULT_LOG_DIR).expanduser()
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / LOG_FILE_NAME

    handlers: list[logging.Handler] = [
        logging.handlers.RotatingFileHandler(
            path, maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8"
        )
    ]
    if console:
        handlers.append(logging.StreamHandler())
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    for name in _HTTP_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    _log_path = path
    return path


def install_qt_message_handler() -> None:
    """Send qDebug/qWarning/... output to ``qt.<category>`` loggers."""

    from PySide6.QtCore import QtMsgType, qInstallMessageHandler

    levels = {
        QtMsgType.QtDebugMsg: logging.DEBUG,
        QtMsgType.QtInfoMsg: logging.INFO,
        QtMsgType.QtWarningMsg: logging.WARNING,
        QtMsgType.QtCriticalMsg: logging.ERROR,
        QtMsgType.QtFatalMsg: logging.CRITICAL,
    }

    def _handler(mode, context, message):  # type: ignore[no-untyped-def]
        category = getattr(context, "category", None) or "default"
        logging.getLogger(f"qt.{category}").log(levels.get(mode, logging.INFO), message)

    qInstallMessageHandler(_handler)
