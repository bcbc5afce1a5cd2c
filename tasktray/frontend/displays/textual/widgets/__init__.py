# -*- coding: utf-8 -*-
"""Widgets for the tasktray TUI."""

from .modals import (
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
