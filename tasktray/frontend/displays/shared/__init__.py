# -*- coding: utf-8 -*-
"""Shared TUI utilities.

- tui_debug.py: file trace log for the modal subsystem
"""

from .tui_debug import TRACE_LOGGER_NAME, tui_debug_enabled, tui_log

__all__ = [
    "TRACE_LOGGER_NAME",
    "tui_debug_enabled",
    "tui_log",
]
