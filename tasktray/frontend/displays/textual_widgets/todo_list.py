# -*- coding: utf-8 -*-
"""
Todo list widgets for the tasktray TUI.

One card per todo with a status badge, category, due date (flagged when
overdue) and Edit/Delete buttons. Cards post messages; the app decides what
the buttons do.
"""

from __future__ import annotations

from datetime import date
from typing import Callable, Iterable, Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.widgets import Button, Static

from tasktray.todo_store import Todo

STATUS_STYLES = {
    "pending": "bold black on #d29922",
    "in-progress": "bold white on #1f6feb",
    "completed": "bold white on #238636",
}


def format_due_date(value: date) -> str:
    """Format like ``Oct 10, 2025``."""
    return f"{value:%b} {value.day}, {value.year}"


class TodoCard(Vertical):
    """Single todo entry."""

    DEFAULT_CSS = """
    TodoCard {
        height: auto;
        padding: 0 1;
        margin-bottom: 1;
        border: round $panel;
    }

    TodoCard .todo-header {
        height: auto;
    }

    TodoCard .todo-meta {
        color: $text-muted;
    }

    TodoCard .todo-meta.-overdue {
        color: $error;
        text-style: bold;
    }

    TodoCard .todo-actions {
        height: auto;
        align-horizontal: right;
    }

    TodoCard .todo-actions Button {
        margin-left: 1;
        min-width: 10;
    }
    """

    class EditRequested(Message):
        def __init__(self, todo_id: str) -> None:
            super().__init__()
            self.todo_id = todo_id

    class DeleteRequested(Message):
        def __init__(self, todo_id: str) -> None:
            super().__init__()
            self.todo_id = todo_id

    def __init__(self, todo: Todo, category_name: str, today: Optional[date] = None) -> None:
        super().__init__(classes="todo-card")
        self.todo = todo
        self.category_name = category_name
        self.overdue = todo.is_overdue(today)

    def _header_text(self) -> Text:
        text = Text()
        text.append(self.todo.name, style="bold")
        text.append("  ")
        text.append(f" {self.todo.status_label} ", style=STATUS_STYLES.get(self.todo.status, "bold reverse"))
        return text

    def _meta_text(self) -> str:
        due = format_due_date(self.todo.due_date)
        if self.overdue:
            due = f"{due} (Overdue)"
        return f"{self.category_name}  ·  {due}"

    def compose(self) -> ComposeResult:
        yield Static(self._header_text(), classes="todo-header")
        yield Static(self._meta_text(), classes="todo-meta -overdue" if self.overdue else "todo-meta", markup=False)
        with Horizontal(classes="todo-actions"):
            yield Button("Edit", classes="edit-btn", variant="primary")
            yield Button("Delete", classes="delete-btn", variant="error")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.has_class("edit-btn"):
            self.post_message(self.EditRequested(self.todo.id))
        elif event.button.has_class("delete-btn"):
            self.post_message(self.DeleteRequested(self.todo.id))


class TodoList(VerticalScroll):
    """Scrollable list of ``TodoCard`` widgets."""

    DEFAULT_CSS = """
    TodoList {
        height: 1fr;
    }

    TodoList .todo-empty {
        width: 100%;
        content-align: center middle;
        color: $text-muted;
        padding: 2 0;
    }
    """

    EMPTY_TEXT = "No todos yet\nAdd your first todo to get started!"

    async def show_todos(
        self,
        todos: Iterable[Todo],
        category_name: Callable[[str], str],
        today: Optional[date] = None,
    ) -> None:
        """Replace the list contents with cards for ``todos``."""
        await self.remove_children()
        cards = [TodoCard(todo, category_name(todo.category_id), today=today) for todo in todos]
        if cards:
            await self.mount_all(cards)
        else:
            await self.mount(Static(self.EMPTY_TEXT, classes="todo-empty", markup=False))

    def card_for(self, todo_id: str) -> Optional[TodoCard]:
        for card in self.query(TodoCard):
            if card.todo.id == todo_id:
                return card
        return None
