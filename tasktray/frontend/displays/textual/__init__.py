# -*- coding: utf-8 -*-
"""
Textual TUI components for tasktray.

This package contains the Textual-based widgets:
- widgets/modals/: the modal dialog subsystem (alert, confirm, form)

The TodoApp itself lives in the parent directory (textual_todo_app.py).
"""

from .widgets import (
    ModalCoordinator,
    ModalOutcome,
    ModalRequest,
    get_modal_coordinator,
)

__all__ = [
    "ModalCoordinator",
    "ModalOutcome",
    "ModalRequest",
    "get_modal_coordinator",
]
