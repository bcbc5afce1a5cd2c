# -*- coding: utf-8 -*-
"""Keyboard focus trap for modal panels.

The trap keeps Tab / Shift+Tab cycling inside a panel and lets a dismissible
panel close itself on Escape. Printable keys that no control consumed stop at
the panel, so app shortcuts stay blocked while the dialog is up. The panel
must expose ``add_key_listener`` and ``remove_key_listener`` (see
``ModalPanel``).
"""

from typing import Callable, List, Optional

from textual import events
from textual.dom import NoScreen
from textual.widget import Widget
from textual.widgets import Select

from tasktray.frontend.displays.shared import tui_log

KeyListener = Callable[[events.Key], None]

FOCUS_NEXT_KEYS = ("tab",)
FOCUS_PREVIOUS_KEYS = ("shift+tab",)
DISMISS_KEYS = ("escape",)
# Activation keys must keep reaching the focused control's own bindings.
ACTIVATION_KEYS = ("enter", "space")


def focusable_widgets(container: Widget) -> List[Widget]:
    """Return the focusable widgets inside ``container`` in DOM order.

    Uses the screen's focus chain, so disabled and hidden widgets are
    already excluded.
    """
    try:
        chain = container.screen.focus_chain
    except NoScreen:
        return []
    return [widget for widget in chain if widget is not container and container in widget.ancestors]


def owning_select(widget: Optional[Widget]) -> Optional[Select]:
    """Return the ``Select`` that ``widget`` is or belongs to (its dropdown included)."""
    if widget is None:
        return None
    for node in widget.ancestors_with_self:
        if isinstance(node, Select):
            return node
    return None


def _swallows(event: events.Key) -> bool:
    return event.is_printable and event.key not in ACTIVATION_KEYS


def activate_focus_trap(panel: Widget, dismissible: bool, on_dismiss: Callable[[], None]) -> Callable[[], None]:
    """Trap focus inside ``panel`` until the returned function is called.

    The focusable set is a snapshot taken now; widgets added later are not
    part of the cycle.
    """
    focusable = focusable_widgets(panel)
    if not focusable:
        tui_log(f"[FocusTrap] no focusable widgets in {panel!r}, trap not installed")
        return lambda: None

    first = focusable[0]
    last = focusable[-1]

    def handle_key(event: events.Key) -> None:
        focused = panel.app.focused
        select = owning_select(focused)

        if event.key in FOCUS_NEXT_KEYS or event.key in FOCUS_PREVIOUS_KEYS:
            backwards = event.key in FOCUS_PREVIOUS_KEYS
            # An open dropdown counts as its Select.
            current = select if select is not None else focused
            if current not in focusable:
                target = last if backwards else first
            elif backwards and current is first:
                target = last
            elif not backwards and current is last:
                target = first
            else:
                return
            event.prevent_default()
            event.stop()
            target.focus()
            return

        if event.key in DISMISS_KEYS:
            if select is not None and select.expanded:
                # Escape closes the dropdown, not the dialog.
                tui_log("[FocusTrap] escape left to expanded select")
                return
            if dismissible:
                event.prevent_default()
                event.stop()
                on_dismiss()
            return

        if _swallows(event):
            event.prevent_default()
            event.stop()

    panel.add_key_listener(handle_key)
    tui_log(f"[FocusTrap] activated with {len(focusable)} focusable widgets")

    def release() -> None:
        panel.remove_key_listener(handle_key)
        tui_log("[FocusTrap] released")

    return release


def set_initial_focus(panel: Widget) -> None:
    """Focus the first focusable widget, or the panel itself if there is none."""
    focusable = focusable_widgets(panel)
    if focusable:
        focusable[0].focus()
        return
    panel.can_focus = True
    panel.focus()
