# -*- coding: utf-8 -*-
"""Overlay and panel widgets for modal dialogs.

``build_modal`` turns a resolved ``ModalRequest`` into an overlay/panel
subtree and wires backdrop, cancel and confirm/submit to a single
``on_resolve(confirmed)`` callback. Open/close timing belongs to the
coordinator, not to these widgets.
"""

from typing import Callable, List, Optional

from textual import events
from textual.app import ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Button, Input, Static

from .focus_trap import KeyListener
from .form_fields import ModalField, render_field
from .modal_types import ModalRequest

ResolveCallback = Callable[[bool], None]

CONFIRM_BUTTON_ID = "modal-confirm"
CANCEL_BUTTON_ID = "modal-cancel"


class ModalPanel(Vertical):
    """The dialog box: title, message, optional form and footer buttons."""

    DEFAULT_CSS = """
    ModalPanel {
        width: 64;
        max-width: 100%;
        height: auto;
        max-height: 100%;
        padding: 1 2;
        background: $surface;
        border: round $primary;
    }
    ModalPanel.-danger {
        border: round $error;
    }
    ModalPanel .modal-title {
        text-style: bold;
        width: 100%;
    }
    ModalPanel .modal-message {
        color: $text-muted;
        margin-top: 1;
    }
    ModalPanel .modal-form {
        height: auto;
        margin-top: 1;
    }
    ModalPanel .modal-footer {
        height: auto;
        margin-top: 1;
        align-horizontal: right;
    }
    ModalPanel .modal-footer Button {
        margin-left: 1;
    }
    """

    def __init__(self, request: ModalRequest, fields: List[ModalField]) -> None:
        super().__init__(classes="modal-panel -danger" if request.variant == "danger" else "modal-panel")
        self.request = request
        self.form_fields = fields
        self._key_listeners: List[KeyListener] = []

    def compose(self) -> ComposeResult:
        request = self.request
        yield Static(request.title, classes="modal-title", markup=False)
        if request.message:
            yield Static(request.message, classes="modal-message", markup=False)

        if request.has_fields:
            with Vertical(classes="modal-form"):
                yield from self.form_fields
                yield self._compose_footer()
        else:
            yield self._compose_footer()

    def _compose_footer(self) -> Horizontal:
        request = self.request
        buttons: List[Button] = []
        cancel_label = request.resolved_cancel_label
        if cancel_label is not None:
            buttons.append(Button(cancel_label, id=CANCEL_BUTTON_ID, variant="default"))
        buttons.append(
            Button(
                request.resolved_confirm_label,
                id=CONFIRM_BUTTON_ID,
                variant="error" if request.variant == "danger" else "primary",
                classes="submit" if request.has_fields else None,
            ),
        )
        return Horizontal(*buttons, classes="modal-footer")

    def field(self, name: str) -> Optional[ModalField]:
        """Return the rendered field with the given name, if any."""
        for modal_field in self.form_fields:
            if modal_field.field_name == name:
                return modal_field
        return None

    def add_key_listener(self, listener: KeyListener) -> None:
        self._key_listeners.append(listener)

    def remove_key_listener(self, listener: KeyListener) -> None:
        if listener in self._key_listeners:
            self._key_listeners.remove(listener)

    def on_key(self, event: events.Key) -> None:
        for listener in list(self._key_listeners):
            listener(event)

    def on_click(self, event: events.Click) -> None:
        # Clicks inside the panel never count as backdrop clicks.
        event.stop()


class ModalOverlay(Container):
    """Full-size backdrop holding one ``ModalPanel``."""

    DEFAULT_CSS = """
    ModalOverlay {
        width: 100%;
        height: 100%;
        align: center middle;
        background: black 50%;
    }
    """

    def __init__(self, request: ModalRequest, panel: ModalPanel, on_resolve: ResolveCallback) -> None:
        super().__init__(classes="modal-overlay")
        self.request = request
        self.panel = panel
        self._on_resolve = on_resolve

    def compose(self) -> ComposeResult:
        yield self.panel

    def on_click(self, event: events.Click) -> None:
        event.stop()
        if self.request.dismissible:
            self._on_resolve(False)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == CONFIRM_BUTTON_ID:
            event.stop()
            self._on_resolve(True)
        elif event.button.id == CANCEL_BUTTON_ID:
            event.stop()
            self._on_resolve(False)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if self.request.has_fields:
            event.stop()
            self._on_resolve(True)


def build_modal(request: ModalRequest, on_resolve: ResolveCallback) -> ModalOverlay:
    """Build the overlay subtree for ``request``."""
    fields = [render_field(descriptor) for descriptor in request.fields or ()]
    panel = ModalPanel(request, fields)
    return ModalOverlay(request, panel, on_resolve)
