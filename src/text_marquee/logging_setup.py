"""Logging setup for text-marquee.

Records go to a rotating file. The console only gets warnings and worse,
because Textual owns the terminal while a marquee is on screen.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
import os
from pathlib import Path

LOG_DIR_ENV = "TEXT_MARQUEE_LOG_DIR"
LOG_LEVEL_ENV = "TEXT_MARQUEE_LOG_LEVEL"
LOG_FILE_NAME = "marquee.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_MAX_LOG_BYTES = 2_000_000
_LOG_BACKUPS = 5


def log_dir() -> Path:
    """Where the log file lives: the env override, else a per-user folder."""
    override = os.getenv(LOG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    local_appdata = os.getenv("LOCALAPPDATA")
    if local_appdata:
        return Path(local_appdata) / "TextMarquee" / "logs"
    return Path.home() / ".text_marquee" / "logs"


def resolve_level(name: str | None = None) -> int:
    """Map a level name (default: from the environment) to a logging level."""
    if name is None:
        name = os.getenv(LOG_LEVEL_ENV, "INFO")
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def init_logging(app_name: str = "text_marquee") -> Path:
    """Attach the file and console handlers once; return the log file path."""
    level = resolve_level()
    log_path = log_dir() / LOG_FILE_NAME
    root = logging.getLogger()
    root.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    file_error: OSError | None = None
    try:
        if not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
            root.addHandler(_file_handler(log_path, level, formatter))
    except OSError as exc:
        file_error = exc
    if not any(_is_console(h) for h in root.handlers):
        console = logging.StreamHandler()
        console.setLevel(max(level, logging.WARNING))
        console.setFormatter(formatter)
        root.addHandler(console)

    app_logger = logging.getLogger(app_name)
    if file_error is not None:
        app_logger.warning("Cannot write log file %s: %s", log_path, file_error)
    else:
        app_logger.info("Logging initialized at %s", log_path)
    return log_path


def set_console_level(level: int) -> None:
    """Adjust console (stderr) handler level."""
    for handler in logging.getLogger().handlers:
        if _is_console(handler):
            handler.setLevel(level)


def _file_handler(
    path: Path, level: int, formatter: logging.Formatter
) -> RotatingFileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path, maxBytes=_MAX_LOG_BYTES, backupCount=_LOG_BACKUPS, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _is_console(handler: logging.Handler) -> bool:
    return isinstance(handler, logging.StreamHandler) and not isinstance(
        handler, logging.FileHandler
    )
