"""Logging setup for dirplay."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
import os
from pathlib import Path

LOG_LEVEL_ENV = "DIRPLAY_LOG_LEVEL"
_CONSOLE_TAG = "_dirplay_console"


def _default_log_dir() -> Path:
    local_appdata = os.getenv("LOCALAPPDATA")
    if local_appdata:
        return Path(local_appdata) / "dirplay" / "logs"
    state_home = os.getenv("XDG_STATE_HOME")
    if state_home:
        return Path(state_home) / "dirplay" / "logs"
    return Path.home() / ".dirplay" / "logs"


def _resolve_level() -> int:
    level = logging.getLevelName(os.getenv(LOG_LEVEL_ENV, "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def _is_console_handler(handler: logging.Handler) -> bool:
    # Our tagged handler or a plain basicConfig one; subclasses are left alone.
    return bool(getattr(handler, _CONSOLE_TAG, False)) or (
        type(handler) is logging.StreamHandler
    )


def init_logging(app_name: str = "dirplay") -> Path:
    """Install file and console handlers on the root logger.

    Returns the path of the rotating log file. When the log directory cannot
    be created the root logger falls back to ``basicConfig`` on stderr.
    """
    log_path = _default_log_dir() / "app.log"
    level = _resolve_level()
    root = logging.getLogger()
    root.setLevel(level)
    formatter = logging.Formatter(
        "%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s"
    )

    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        if not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
            file_handler = RotatingFileHandler(
                log_path,
                maxBytes=2_000_000,
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
    except OSError:
        logging.basicConfig(level=level, format=str(formatter._fmt))

    if not any(_is_console_handler(h) for h in root.handlers):
        console = logging.StreamHandler()
        setattr(console, _CONSOLE_TAG, True)
        console.setLevel(level)
        console.setFormatter(formatter)
        root.addHandler(console)

    logging.getLogger(app_name).info("Logging initialized at %s", log_path)
    return log_path


def _console_handlers() -> list[logging.Handler]:
    return [h for h in logging.getLogger().handlers if _is_console_handler(h)]


def get_console_levels() -> dict[logging.Handler, int]:
    """Return the current level of each console handler."""
    return {handler: handler.level for handler in _console_handlers()}


def set_console_level(level: int) -> dict[logging.Handler, int]:
    """Adjust console (stderr) handler level; return the previous levels."""
    previous = get_console_levels()
    for handler in previous:
        handler.setLevel(level)
    return previous


def restore_console_levels(levels: dict[logging.Handler, int]) -> None:
    for handler, level in levels.items():
        handler.setLevel(level)
