# -*- coding: utf-8 -*-
"""Form field rendering for modal dialogs.

Each field descriptor becomes one ``ModalField``: label, control, optional
description caption and a hidden error caption. The error is revealed by a
failed validation pass and hidden again on the control's next change.
"""

from typing import Dict, Iterable, List, Union

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Input, Label, Select, Static, TextArea

from .modal_types import (
    DateField,
    FieldDescriptor,
    SelectField,
    TextareaField,
    TextField,
)

FieldControl = Union[Input, TextArea, Select]

REQUIRED_ERROR_TEXT = "Please fill out this field."
DATE_PLACEHOLDER = "YYYY-MM-DD"
DATE_CHARACTERS = r"[0-9-]*"


def _build_control(descriptor: FieldDescriptor) -> FieldControl:
    if isinstance(descriptor, TextareaField):
        control: FieldControl = TextArea(descriptor.initial_value, classes="modal-control modal-textarea")
        control.styles.height = descriptor.rows + 2
    elif isinstance(descriptor, SelectField):
        control = Select(
            [(option.label, option.value) for option in descriptor.options],
            value=descriptor.selected_value,
            allow_blank=False,
            classes="modal-control modal-select",
        )
    elif isinstance(descriptor, DateField):
        control = Input(
            value=descriptor.initial_value,
            placeholder=descriptor.placeholder or DATE_PLACEHOLDER,
            restrict=DATE_CHARACTERS,
            max_length=len(DATE_PLACEHOLDER),
            classes="modal-control modal-date",
        )
    elif isinstance(descriptor, TextField):
        control = Input(
            value=descriptor.initial_value,
            placeholder=descriptor.placeholder,
            classes="modal-control modal-text",
        )
    else:
        raise TypeError(f"Unsupported field descriptor: {descriptor!r}")

    if descriptor.required:
        control.add_class("required")
    return control


class ModalField(Vertical):
    """One labelled form control with description and error captions."""

    DEFAULT_CSS = """
    ModalField {
        height: auto;
        margin-bottom: 1;
    }
    ModalField .modal-field-label {
        text-style: bold;
    }
    ModalField .modal-field-description {
        color: $text-muted;
    }
    ModalField .modal-field-error {
        display: none;
        color: $error;
    }
    ModalField .modal-field-error.-active {
        display: block;
    }
    """

    def __init__(self, descriptor: FieldDescriptor) -> None:
        super().__init__(classes="modal-field")
        self.descriptor = descriptor
        self.control = _build_control(descriptor)
        self.error_caption = Static(REQUIRED_ERROR_TEXT, classes="modal-field-error", markup=False)

    @property
    def field_name(self) -> str:
        return self.descriptor.name

    def compose(self) -> ComposeResult:
        if self.descriptor.label:
            yield Label(self.descriptor.label, classes="modal-field-label", markup=False)
        yield self.control
        if self.descriptor.description:
            yield Static(self.descriptor.description, classes="modal-field-description", markup=False)
        yield self.error_caption

    @property
    def value(self) -> str:
        """Raw control value, untrimmed."""
        if isinstance(self.control, TextArea):
            return self.control.text
        if isinstance(self.control, Select):
            return str(self.control.value)
        return self.control.value

    @property
    def error_visible(self) -> bool:
        return self.error_caption.has_class("-active")

    def show_error(self) -> None:
        self.error_caption.add_class("-active")

    def clear_error(self) -> None:
        self.error_caption.remove_class("-active")

    def validate(self) -> bool:
        """Check the required rule, revealing the error caption on failure."""
        if self.descriptor.required and not self.value.strip():
            self.show_error()
            return False
        return True

    def on_input_changed(self, event: Input.Changed) -> None:
        self.clear_error()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        self.clear_error()

    def on_select_changed(self, event: Select.Changed) -> None:
        self.clear_error()


def render_field(descriptor: FieldDescriptor) -> ModalField:
    return ModalField(descriptor)


def validate_fields(fields: Iterable[ModalField]) -> bool:
    """Validate every field so all failures are shown at once."""
    results = [field.validate() for field in fields]
    return all(results)


def gather_values(fields: Iterable[ModalField]) -> Dict[str, str]:
    return {field.field_name: field.value for field in fields}


def fields_with_errors(fields: Iterable[ModalField]) -> List[ModalField]:
    return [field for field in fields if field.error_visible]
