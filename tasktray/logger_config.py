# -*- coding: utf-8 -*-
"""Logging configuration for tasktray.

Uses loguru. Each run gets a session directory ``log_<timestamp>`` under the
log base directory (``.tasktray/logs`` in the working directory unless
``TASKTRAY_LOG_BASE_DIR`` is set). The console sink is removed while the TUI
owns the terminal and put back afterwards.
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from loguru import logger

LOG_BASE_DIR_ENV = "TASKTRAY_LOG_BASE_DIR"
DEFAULT_LOG_BASE_DIR = Path(".tasktray") / "logs"
LOG_FILE_NAME = "tasktray.log"

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"

_LOG_BASE_SESSION_DIR: Optional[Path] = None
_LOG_SESSION_DIR: Optional[Path] = None
_CONSOLE_HANDLER_ID: Optional[int] = None
_FILE_HANDLER_ID: Optional[int] = None
_DEBUG_MODE = False


def get_log_base_dir() -> Path:
    """Return the directory that holds all log sessions."""
    override = os.environ.get(LOG_BASE_DIR_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return DEFAULT_LOG_BASE_DIR


def set_log_base_session_dir(name: str) -> None:
    """Reuse a named session directory under the log base directory."""
    global _LOG_BASE_SESSION_DIR, _LOG_SESSION_DIR
    _LOG_BASE_SESSION_DIR = get_log_base_dir() / name
    _LOG_SESSION_DIR = None


def set_log_base_session_dir_absolute(path: Path) -> None:
    """Use ``path`` itself as the session directory."""
    global _LOG_BASE_SESSION_DIR, _LOG_SESSION_DIR
    _LOG_BASE_SESSION_DIR = Path(path)
    _LOG_SESSION_DIR = None


def reset_logging_session() -> None:
    """Forget the current session so the next lookup starts a new one."""
    global _LOG_BASE_SESSION_DIR, _LOG_SESSION_DIR
    _LOG_BASE_SESSION_DIR = None
    _LOG_SESSION_DIR = None


def get_log_session_dir() -> Path:
    """Return (and create) the log directory for this run."""
    global _LOG_BASE_SESSION_DIR, _LOG_SESSION_DIR
    if _LOG_SESSION_DIR is not None:
        return _LOG_SESSION_DIR

    if _LOG_BASE_SESSION_DIR is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        _LOG_BASE_SESSION_DIR = get_log_base_dir() / f"log_{timestamp}"

    _LOG_SESSION_DIR = _LOG_BASE_SESSION_DIR
    _LOG_SESSION_DIR.mkdir(parents=True, exist_ok=True)
    return _LOG_SESSION_DIR


def _add_console_sink() -> int:
    level = "DEBUG" if _DEBUG_MODE else "WARNING"
    return logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)


def setup_logging(debug: bool = False, log_file: Optional[Path] = None) -> Path:
    """Configure console and file sinks.

    Args:
        debug: Log DEBUG and above to the console (default WARNING).
        log_file: Explicit log file; defaults to the session directory.

    Returns:
        Path of the log file being written.
    """
    global _CONSOLE_HANDLER_ID, _FILE_HANDLER_ID, _DEBUG_MODE
    _DEBUG_MODE = debug

    logger.remove()
    _CONSOLE_HANDLER_ID = _add_console_sink()

    target = Path(log_file) if log_file else get_log_session_dir() / LOG_FILE_NAME
    target.parent.mkdir(parents=True, exist_ok=True)
    _FILE_HANDLER_ID = logger.add(
        str(target),
        level="DEBUG",
        format=FILE_FORMAT,
        enqueue=False,
        encoding="utf-8",
    )
    logger.info(f"Logging to {target}")
    return target


def suppress_console_logging() -> None:
    """Remove the console sink so log lines do not corrupt the TUI."""
    global _CONSOLE_HANDLER_ID
    if _CONSOLE_HANDLER_ID is None:
        return
    try:
        logger.remove(_CONSOLE_HANDLER_ID)
    except ValueError:
        pass
    _CONSOLE_HANDLER_ID = None


def restore_console_logging() -> None:
    """Re-add the console sink after the TUI exits."""
    global _CONSOLE_HANDLER_ID
    if _CONSOLE_HANDLER_ID is not None:
        return
    _CONSOLE_HANDLER_ID = _add_console_sink()


__all__ = [
    "logger",
    "get_log_base_dir",
    "get_log_session_dir",
    "reset_logging_session",
    "restore_console_logging",
    "set_log_base_session_dir",
    "set_log_base_session_dir_absolute",
    "setup_logging",
    "suppress_console_logging",
]
