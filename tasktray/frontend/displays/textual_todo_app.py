# -*- coding: utf-8 -*-
"""
Textual todo application for tasktray.

Every prompt, confirmation and notice goes through the modal coordinator.
Dialog flows run as workers because awaiting a modal inside a message
handler would block the very loop that delivers the user's input.
"""

from datetime import date, timedelta
from pathlib import Path
from typing import Optional, Tuple

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Footer, Static

from tasktray.frontend.displays.textual.widgets.modals import (
    DateField,
    ModalCoordinator,
    SelectField,
    SelectOption,
    TextField,
    get_modal_coordinator,
)
from tasktray.frontend.displays.textual_widgets.todo_list import TodoCard, TodoList
from tasktray.logger_config import logger
from tasktray.todo_store import TODO_STATUSES, TodoStore, TodoValidationError
from tasktray.user_settings import UserSettings, get_user_settings

THEMES_DIR = Path(__file__).parent / "textual_themes"

TODO_NOT_FOUND = "Todo not found"

# Shortcuts that must not act behind an open dialog.
DIALOG_BLOCKED_ACTIONS = frozenset({"add_todo", "add_category", "delete_category", "clear_completed", "close_app"})


class TodoApp(App):
    """Todo manager with categories, due dates and modal dialogs."""

    CSS_PATH = str(THEMES_DIR / "tasktray.tcss")
    TITLE = "My Todo App"

    BINDINGS = [
        Binding("n", "add_todo", "Add Todo"),
        Binding("c", "add_category", "Add Category"),
        Binding("x", "clear_completed", "Clear Completed"),
        Binding("q", "close_app", "Quit"),
    ]

    def __init__(
        self,
        store: Optional[TodoStore] = None,
        settings: Optional[UserSettings] = None,
        seed: Optional[bool] = None,
        today: Optional[date] = None,
    ):
        super().__init__()
        self.store = store if store is not None else TodoStore()
        self.settings = settings if settings is not None else get_user_settings()
        self._seed = self.settings.seed_data if seed is None else seed
        self._today = today

    @property
    def modals(self) -> ModalCoordinator:
        return get_modal_coordinator(self)

    @property
    def today(self) -> date:
        return self._today or date.today()

    def compose(self) -> ComposeResult:
        with Vertical(id="app-header"):
            yield Static("My Todo App", id="app-title")
            yield Static("Manage your tasks efficiently", id="app-subtitle")
        with Horizontal(id="main"):
            with Vertical(id="actions"):
                yield Static("Actions", classes="section-title")
                yield Button("Add Category", id="add-category", variant="success")
                yield Button("Add Todo", id="add-todo", variant="primary")
                yield Button("Delete Category", id="delete-category", variant="error")
                yield Button("Clear Completed", id="clear-completed")
            with Vertical(id="todo-panel"):
                yield Static("My Todos", classes="section-title")
                yield TodoList(id="todo-list")
        yield Footer()

    async def on_mount(self) -> None:
        theme = self.settings.theme
        if theme in self.available_themes:
            self.theme = theme
        await self.modals.setup_host()
        if self._seed:
            self.store.initialize_seed_data()
        await self.refresh_todos()

    async def refresh_todos(self) -> None:
        todo_list = self.query_one("#todo-list", TodoList)
        await todo_list.show_todos(self.store.get_all_todos(), self.store.category_name, today=self.today)

    def _start_flow(self, flow, name: str) -> None:
        self.run_worker(flow, name=name, group="dialogs", exclusive=False)

    # ------------------------------------------------------------------
    # Event wiring
    # ------------------------------------------------------------------

    def on_button_pressed(self, event: Button.Pressed) -> None:
        actions = {
            "add-category": self.action_add_category,
            "add-todo": self.action_add_todo,
            "delete-category": self.action_delete_category,
            "clear-completed": self.action_clear_completed,
        }
        action = actions.get(event.button.id or "")
        if action is not None:
            event.stop()
            action()

    def on_todo_card_edit_requested(self, message: TodoCard.EditRequested) -> None:
        self._start_flow(self.edit_todo_flow(message.todo_id), "edit-todo")

    def on_todo_card_delete_requested(self, message: TodoCard.DeleteRequested) -> None:
        self._start_flow(self.delete_todo_flow(message.todo_id), "delete-todo")

    def check_action(self, action: str, parameters: Tuple[object, ...]) -> Optional[bool]:
        if action in DIALOG_BLOCKED_ACTIONS and self.modals.is_open:
            return False
        return True

    def action_close_app(self) -> None:
        self.exit()

    def action_add_category(self) -> None:
        if not self.modals.is_open:
            self._start_flow(self.add_category_flow(), "add-category")

    def action_add_todo(self) -> None:
        if not self.modals.is_open:
            self._start_flow(self.add_todo_flow(), "add-todo")

    def action_delete_category(self) -> None:
        if not self.modals.is_open:
            self._start_flow(self.delete_category_flow(), "delete-category")

    def action_clear_completed(self) -> None:
        if not self.modals.is_open:
            self._start_flow(self.clear_completed_flow(), "clear-completed")

    # ------------------------------------------------------------------
    # Dialog flows
    # ------------------------------------------------------------------

    def _category_options(self):
        return tuple(SelectOption(label=c.name, value=c.id) for c in self.store.get_all_categories())

    async def add_category_flow(self) -> None:
        values = await self.modals.show_form(
            "Add category",
            [TextField(name="name", label="Category name", required=True, placeholder="e.g. School")],
        )
        if values is None:
            return
        existing = self.store.find_category_by_name(values["name"])
        if existing is not None:
            await self.modals.show_alert(
                "Category exists",
                f'Category "{existing.name}" already exists.',
                variant="danger",
            )
            return
        try:
            category = self.store.add_category(values["name"])
        except TodoValidationError as e:
            await self.modals.show_alert("Could not add category", str(e), variant="danger")
            return
        await self.modals.show_alert("Category added", f'Category "{category.name}" added successfully!')

    async def add_todo_flow(self) -> None:
        if not self.store.get_all_categories():
            await self.modals.show_alert("No categories yet", "Please add a category first!")
            return

        default_due = self.today + timedelta(days=self.settings.default_due_days)
        values = await self.modals.show_form(
            "Add todo",
            [
                TextField(name="name", label="Todo name", required=True, placeholder="What needs doing?"),
                SelectField(name="category", label="Category", options=self._category_options()),
                DateField(
                    name="due_date",
                    label="Due date",
                    required=True,
                    initial_value=default_due.isoformat(),
                    description="Format: YYYY-MM-DD",
                ),
            ],
        )
        if values is None:
            return
        try:
            todo = self.store.create_todo(values["name"], values["category"], values["due_date"])
        except TodoValidationError as e:
            logger.warning(f"Rejected new todo: {e}")
            await self.modals.show_alert("Invalid todo", str(e), variant="danger")
            return
        await self.refresh_todos()
        await self.modals.show_alert("Todo added", f'Todo "{todo.name}" added successfully!')

    async def edit_todo_flow(self, todo_id: str) -> None:
        todo = self.store.get_todo(todo_id)
        if todo is None:
            await self.modals.show_alert(TODO_NOT_FOUND)
            return

        category_options = self._category_options()
        if todo.category_id not in {option.value for option in category_options}:
            # The todo may point at a category that no longer exists.
            category_options += (SelectOption(label=self.store.category_name(todo.category_id), value=todo.category_id),)

        values = await self.modals.show_form(
            "Edit todo",
            [
                TextField(name="name", label="Todo name", required=True, initial_value=todo.name),
                SelectField(
                    name="status",
                    label="Status",
                    initial_value=todo.status,
                    options=tuple(SelectOption(label=s.replace("-", " ").title(), value=s) for s in TODO_STATUSES),
                ),
                SelectField(
                    name="category",
                    label="Category",
                    initial_value=todo.category_id,
                    options=category_options,
                ),
                DateField(name="due_date", label="Due date", required=True, initial_value=todo.due_date.isoformat()),
            ],
        )
        if values is None:
            return
        try:
            updated = self.store.edit_todo(
                todo_id,
                name=values["name"],
                status=values["status"],
                category_id=values["category"],
                due_date=values["due_date"],
            )
        except TodoValidationError as e:
            await self.modals.show_alert("Invalid todo", str(e), variant="danger")
            return
        if updated is None:
            await self.modals.show_alert(TODO_NOT_FOUND)
            return
        await self.refresh_todos()

    async def delete_todo_flow(self, todo_id: str) -> None:
        confirmed = await self.modals.show_confirm(
            "Delete todo",
            "Are you sure you want to delete this todo?",
            confirm_label="Delete",
            variant="danger",
        )
        if not confirmed:
            return
        if not self.store.delete_todo(todo_id):
            await self.modals.show_alert(TODO_NOT_FOUND)
            return
        await self.refresh_todos()

    async def delete_category_flow(self) -> None:
        if not self.store.get_all_categories():
            await self.modals.show_alert("No categories to delete!")
            return

        values = await self.modals.show_form(
            "Delete category",
            [SelectField(name="category", label="Category", options=self._category_options())],
            confirm_label="Continue",
        )
        if values is None:
            return
        category = self.store.get_category(values["category"])
        if category is None:
            await self.modals.show_alert("Category not found!")
            return
        in_use = self.store.todos_in_category(category.id)
        if in_use:
            await self.modals.show_alert(
                "Category in use",
                f'"{category.name}" still has {len(in_use)} todo(s). Move or delete them first.',
            )
            return
        confirmed = await self.modals.show_confirm(
            "Delete category",
            f'Are you sure you want to delete category "{category.name}"?',
            confirm_label="Delete",
            variant="danger",
        )
        if confirmed:
            self.store.delete_category(category.id)
            await self.refresh_todos()

    async def clear_completed_flow(self) -> None:
        confirmed = await self.modals.show_confirm(
            "Clear completed",
            "Remove every completed todo?",
            confirm_label="Clear",
            variant="danger",
        )
        if not confirmed:
            return
        removed = self.store.clear_completed_todos()
        await self.refresh_todos()
        self.notify(f"Removed {removed} completed todo(s)")
