# -*- coding: utf-8 -*-
"""
Modal dialog subsystem for the tasktray TUI.

- modal_types: ModalRequest, field descriptors, ModalOutcome
- focus_trap: Tab/Shift+Tab cycling and Escape handling inside a panel
- form_fields: ModalField rendering, validation and value extraction
- modal_panel: ModalOverlay/ModalPanel construction
- modal_service: ModalCoordinator (single active modal, FIFO queue)
"""

from .focus_trap import activate_focus_trap, focusable_widgets, set_initial_focus
from .form_fields import (
    REQUIRED_ERROR_TEXT,
    ModalField,
    gather_values,
    render_field,
    validate_fields,
)
from .modal_panel import (
    CANCEL_BUTTON_ID,
    CONFIRM_BUTTON_ID,
    ModalOverlay,
    ModalPanel,
    build_modal,
)
from .modal_service import (
    MODAL_ROOT_ID,
    SCROLL_LOCK_CLASS,
    ModalCoordinator,
    ModalHost,
    get_modal_coordinator,
)
from .modal_types import (
    UNSET,
    DateField,
    FieldDescriptor,
    ModalOutcome,
    ModalRequest,
    ModalRequestError,
    SelectField,
    SelectOption,
    TextareaField,
    TextField,
    field_from_dict,
)

__all__ = [
    # Types
    "UNSET",
    "DateField",
    "FieldDescriptor",
    "ModalOutcome",
    "ModalRequest",
    "ModalRequestError",
    "SelectField",
    "SelectOption",
    "TextareaField",
    "TextField",
    "field_from_dict",
    # Focus trap
    "activate_focus_trap",
    "focusable_widgets",
    "set_initial_focus",
    # Fields
    "REQUIRED_ERROR_TEXT",
    "ModalField",
    "gather_values",
    "render_field",
    "validate_fields",
    # Panel
    "CANCEL_BUTTON_ID",
    "CONFIRM_BUTTON_ID",
    "ModalOverlay",
    "ModalPanel",
    "build_modal",
    # Coordinator
    "MODAL_ROOT_ID",
    "SCROLL_LOCK_CLASS",
    "ModalCoordinator",
    "ModalHost",
    "get_modal_coordinator",
]
