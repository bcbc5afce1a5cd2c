# -*- coding: utf-8 -*-
"""Modal coordinator: one visible dialog at a time, the rest queued FIFO.

Every request gets its own session with a one-shot future, so a dialog and
its outcome are paired one-to-one. The coordinator owns the host widget
(``#modal-root``), the scroll-lock class on the screen, and the focus trap of
the active dialog.

Callers must await the ``show_*`` coroutines from a worker (``@work``), not
from a message handler: the handler's message loop is what delivers the key
presses that close the dialog.
"""

import asyncio
from collections import deque
from dataclasses import dataclass
from functools import partial
from typing import (
    TYPE_CHECKING,
    Callable,
    Deque,
    Dict,
    Optional,
    Sequence,
    Union,
)
from weakref import WeakKeyDictionary

from textual.containers import Container
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widget import Widget

from tasktray.frontend.displays.shared import tui_log
from tasktray.logger_config import logger

from .focus_trap import activate_focus_trap, set_initial_focus
from .form_fields import fields_with_errors, gather_values, validate_fields
from .modal_panel import ModalOverlay, build_modal
from .modal_types import (
    UNSET,
    CancelLabel,
    FieldDescriptor,
    ModalOutcome,
    ModalRequest,
    ModalVariant,
)

if TYPE_CHECKING:
    from textual.app import App

MODAL_ROOT_ID = "modal-root"
SCROLL_LOCK_CLASS = "modal-open"


class ModalHost(Container):
    """Screen-level container that holds the active modal overlay."""

    DEFAULT_CSS = """
    ModalHost {
        overlay: screen;
        width: 100%;
        height: 100%;
        background: transparent;
    }
    """

    def __init__(self, id: str = MODAL_ROOT_ID) -> None:
        super().__init__(id=id)
        self.display = False


@dataclass(eq=False)
class _ModalSession:
    request: ModalRequest
    future: "asyncio.Future[ModalOutcome]"
    overlay: Optional[ModalOverlay] = None
    release_focus_trap: Optional[Callable[[], None]] = None
    previous_focus: Optional[Widget] = None
    inherited_focus: bool = False
    closed: bool = False


class ModalCoordinator:
    """Serializes modal presentation for one Textual app.

    Attributes:
        app: The app whose active screen hosts the dialogs.
        host_id: Id of the host container on the screen.
        restore_focus: Return focus to the widget focused before the dialog
            opened. Skipped while another queued dialog is about to open; the
            focus target is handed to that dialog instead.
    """

    def __init__(self, app: "App", host_id: str = MODAL_ROOT_ID, restore_focus: bool = True):
        self.app = app
        self.host_id = host_id
        self.restore_focus = restore_focus
        self._active: Optional[_ModalSession] = None
        self._queue: Deque[_ModalSession] = deque()
        self._locked_screen: Optional[Screen] = None

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self._active is not None

    @property
    def active(self) -> Optional[ModalOverlay]:
        """Overlay of the active dialog, once it is mounted."""
        if self._active is None:
            return None
        return self._active.overlay

    @property
    def pending_count(self) -> int:
        return len(self._queue)

    # ------------------------------------------------------------------
    # Host and scroll lock
    # ------------------------------------------------------------------

    def _find_host(self) -> Optional[ModalHost]:
        try:
            return self.app.screen.query_one(f"#{self.host_id}", ModalHost)
        except NoMatches:
            return None

    async def setup_host(self) -> ModalHost:
        """Create the host container on the active screen if it is missing."""
        host = self._find_host()
        if host is not None:
            return host
        host = ModalHost(id=self.host_id)
        screen = self.app.screen
        if screen.children:
            await screen.mount(host, before=0)
        else:
            await screen.mount(host)
        logger.debug(f"[ModalCoordinator] Created modal host #{self.host_id} on {screen!r}")
        return host

    def _lock_scroll(self, lock: bool) -> None:
        if lock:
            self._locked_screen = self.app.screen
            self._locked_screen.add_class(SCROLL_LOCK_CLASS)
        elif self._locked_screen is not None:
            self._locked_screen.remove_class(SCROLL_LOCK_CLASS)
            self._locked_screen = None

    # ------------------------------------------------------------------
    # Open / close
    # ------------------------------------------------------------------

    async def open(self, request: ModalRequest) -> ModalOutcome:
        """Show ``request`` now, or after the dialogs queued before it."""
        session = _ModalSession(request=request, future=asyncio.get_running_loop().create_future())
        if self._active is None:
            self._active = session
            await self._start(session)
        else:
            self._queue.append(session)
            tui_log(f"[ModalCoordinator] queued '{request.title}' ({len(self._queue)} pending)")
        return await session.future

    async def _start(self, session: _ModalSession) -> None:
        try:
            host = await self.setup_host()
            if not session.inherited_focus:
                session.previous_focus = self.app.focused
            overlay = build_modal(session.request, partial(self._resolve, session))
            session.overlay = overlay
            host.display = True
            await host.mount(overlay)
        except Exception as exc:
            logger.exception(f"[ModalCoordinator] Failed to open modal '{session.request.title}'")
            session.closed = True
            self._active = None
            if not session.future.done():
                session.future.set_exception(exc)
            self._start_next()
            return

        self._lock_scroll(True)
        session.release_focus_trap = activate_focus_trap(
            overlay.panel,
            session.request.dismissible,
            partial(self._resolve, session, False),
        )
        set_initial_focus(overlay.panel)
        logger.debug(f"[ModalCoordinator] Opened modal '{session.request.title}'")

    def _resolve(self, session: _ModalSession, confirmed: bool) -> None:
        """Handle a confirm or cancel attempt coming from the dialog."""
        if session.closed or session is not self._active or session.overlay is None:
            return

        request = session.request
        if confirmed and request.has_fields:
            fields = session.overlay.panel.form_fields
            if not validate_fields(fields):
                invalid = ", ".join(field.field_name for field in fields_with_errors(fields))
                tui_log(f"[ModalCoordinator] validation failed for '{request.title}': {invalid}")
                return
            outcome = ModalOutcome(confirmed=True, values=gather_values(fields))
        else:
            outcome = ModalOutcome(confirmed=confirmed)
        self._close(session, outcome)

    def _close(self, session: _ModalSession, outcome: ModalOutcome) -> None:
        has_pending = bool(self._queue)
        session.closed = True

        if session.overlay is not None:
            session.overlay.remove()
        self._lock_scroll(False)
        if session.release_focus_trap is not None:
            session.release_focus_trap()
            session.release_focus_trap = None
        self._active = None

        if not session.future.done():
            session.future.set_result(outcome)
        logger.debug(f"[ModalCoordinator] Closed modal '{session.request.title}' (confirmed={outcome.confirmed})")

        if self._should_restore_focus(has_pending):
            self._restore_focus(session.previous_focus)
        elif has_pending:
            self._queue[0].previous_focus = session.previous_focus
            self._queue[0].inherited_focus = True
        self._start_next()

    def _should_restore_focus(self, has_pending: bool) -> bool:
        return self.restore_focus and not has_pending

    def _restore_focus(self, widget: Optional[Widget]) -> None:
        if widget is None or not widget.is_attached or not widget.focusable:
            return
        widget.focus()

    def _start_next(self) -> None:
        if not self._queue:
            host = self._find_host()
            if host is not None:
                host.display = False
            return
        session = self._queue.popleft()
        self._active = session
        self.app.call_later(self._start, session)

    # ------------------------------------------------------------------
    # Public dialogs
    # ------------------------------------------------------------------

    async def show_alert(
        self,
        title: str,
        message: Optional[str] = None,
        *,
        confirm_label: Optional[str] = None,
        cancel_label: CancelLabel = UNSET,
        variant: ModalVariant = "default",
        dismissible: bool = True,
    ) -> None:
        """Show an informational dialog; returns once it is dismissed."""
        await self.open(
            ModalRequest(
                title=title,
                message=message,
                confirm_label=confirm_label,
                cancel_label=None if cancel_label is UNSET else cancel_label,
                variant=variant,
                dismissible=dismissible,
            ),
        )

    async def show_confirm(
        self,
        title: str,
        message: Optional[str] = None,
        *,
        confirm_label: Optional[str] = None,
        cancel_label: CancelLabel = UNSET,
        variant: ModalVariant = "default",
        dismissible: bool = True,
    ) -> bool:
        """Ask a yes/no question; returns True only on explicit confirm."""
        outcome = await self.open(
            ModalRequest(
                title=title,
                message=message,
                confirm_label=confirm_label if confirm_label is not None else "Confirm",
                cancel_label=cancel_label if isinstance(cancel_label, str) else "Cancel",
                variant=variant,
                dismissible=dismissible,
            ),
        )
        return outcome.confirmed

    async def show_form(
        self,
        title: str,
        fields: Sequence[Union[FieldDescriptor, Dict]],
        message: Optional[str] = None,
        *,
        confirm_label: Optional[str] = None,
        cancel_label: CancelLabel = UNSET,
        variant: ModalVariant = "default",
        dismissible: bool = True,
    ) -> Optional[Dict[str, str]]:
        """Collect field values; returns None when the dialog is cancelled."""
        outcome = await self.open(
            ModalRequest(
                title=title,
                message=message,
                confirm_label=confirm_label,
                cancel_label=cancel_label,
                variant=variant,
                dismissible=dismissible,
                fields=tuple(fields),
            ),
        )
        if not outcome.confirmed or outcome.values is None:
            return None
        return outcome.values


_coordinators: "WeakKeyDictionary[App, ModalCoordinator]" = WeakKeyDictionary()


def get_modal_coordinator(app: "App") -> ModalCoordinator:
    """Get the modal coordinator for ``app``, creating it on first use."""
    coordinator = _coordinators.get(app)
    if coordinator is None:
        coordinator = ModalCoordinator(app)
        _coordinators[app] = coordinator
    return coordinator
