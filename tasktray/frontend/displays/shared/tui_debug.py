# -*- coding: utf-8 -*-
"""Trace log for the modal subsystem.

Set ``TASKTRAY_TUI_DEBUG=1`` to append focus-trap and queue events to
``TASKTRAY_TUI_DEBUG_LOG`` (default ``/tmp/tasktray_tui_debug.log``). The
trace never writes to the terminal the TUI is drawing on.
"""

import logging
import os

TRACE_LOGGER_NAME = "tasktray.tui_trace"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def tui_debug_enabled() -> bool:
    return os.environ.get("TASKTRAY_TUI_DEBUG", "").lower() in ("1", "true", "yes", "on")


def _trace_logger(path: str) -> logging.Logger:
    trace = logging.getLogger(TRACE_LOGGER_NAME)
    trace.setLevel(logging.DEBUG)
    trace.propagate = False
    target = os.path.abspath(path)
    # One file handler at a time; reopened when the target path changes.
    for handler in list(trace.handlers):
        if getattr(handler, "baseFilename", None) == target:
            return trace
        handler.close()
        trace.removeHandler(handler)
    handler = logging.FileHandler(target, mode="a")
    handler.setFormatter(logging.Formatter("[%(asctime)s] %(message)s"))
    trace.addHandler(handler)
    return trace


def tui_log(msg: str, level: str = "debug") -> None:
    """Append ``msg`` to the trace file when tracing is enabled.

    An unwritable trace path is ignored.
    """
    if not tui_debug_enabled():
        return
    try:
        trace = _trace_logger(os.environ.get("TASKTRAY_TUI_DEBUG_LOG", "/tmp/tasktray_tui_debug.log"))
    except OSError:
        return
    trace.log(_LEVELS.get(level.lower(), logging.DEBUG), msg)
