# -*- coding: utf-8 -*-
"""End-to-end pilot tests for TodoApp dialog flows."""

from datetime import date

import pytest
from textual.widgets import Button, Select

from tasktray.frontend.displays.textual.widgets.modals import (
    CANCEL_BUTTON_ID,
    CONFIRM_BUTTON_ID,
)
from tasktray.frontend.displays.textual_todo_app import TodoApp
from tasktray.frontend.displays.textual_widgets.todo_list import TodoCard, TodoList
from tasktray.todo_store import TodoStore
from tasktray.user_settings import UserSettings

TODAY = date(2025, 10, 9)

pytestmark = pytest.mark.integration


def _make_app(tmp_path, seed: bool = True, store: TodoStore = None) -> TodoApp:
    return TodoApp(
        store=store if store is not None else TodoStore(),
        settings=UserSettings(config_dir=tmp_path / "config"),
        seed=seed,
        today=TODAY,
    )


async def _settle(pilot, rounds: int = 5) -> None:
    for _ in range(rounds):
        await pilot.pause()


def _active_title(app: TodoApp):
    overlay = app.modals.active
    return overlay.request.title if overlay is not None else None


def _press_modal(app: TodoApp, button_id: str) -> None:
    app.modals.active.panel.query_one(f"#{button_id}", Button).press()


def _card(app: TodoApp, name: str) -> TodoCard:
    return next(card for card in app.query(TodoCard) if card.todo.name == name)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_seeded_app_lists_todos_and_flags_overdue(tmp_path):
    app = _make_app(tmp_path)
    async with app.run_test(headless=True, size=(120, 40)) as pilot:
        await _settle(pilot)

        cards = list(app.query(TodoCard))
        assert [card.todo.name for card in cards] == [
            "Mow the Lawn",
            "Finish my homework",
            "Watch the October 2, 2025 class session video",
        ]
        assert [card.overdue for card in cards] == [False, True, False]
        assert all(card.category_name == "School" for card in cards)
        assert app.screen.query_one("#modal-root") is not None


@pytest.mark.asyncio
async def test_empty_store_shows_placeholder(tmp_path):
    app = _make_app(tmp_path, seed=False)
    async with app.run_test(headless=True, size=(120, 40)) as pilot:
        await _settle(pilot)

        assert len(app.query(TodoCard)) == 0
        assert len(app.query_one(TodoList).query(".todo-empty")) == 1


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_add_category_through_form(tmp_path):
    app = _make_app(tmp_path, seed=False)
    async with app.run_test(headless=True, size=(120, 40)) as pilot:
        await _settle(pilot)

        app.query_one("#add-category", Button).press()
        await _settle(pilot)
        assert _active_title(app) == "Add category"

        app.modals.active.panel.field("name").control.value = "  Work  "
        _press_modal(app, CONFIRM_BUTTON_ID)
        await _settle(pilot)

        assert _active_title(app) == "Category added"
        assert [c.name for c in app.store.get_all_categories()] == ["Work"]

        _press_modal(app, CONFIRM_BUTTON_ID)
        await _settle(pilot)
        assert not app.modals.is_open


@pytest.mark.asyncio
async def test_add_duplicate_category_is_refused(tmp_path):
    app = _make_app(tmp_path)
    async with app.run_test(headless=True, size=(120, 40)) as pilot:
        await _settle(pilot)

        app.query_one("#add-category", Button).press()
        await _settle(pilot)
        app.modals.active.panel.field("name").control.value = "school"
        _press_modal(app, CONFIRM_BUTTON_ID)
        await _settle(pilot)

        assert _active_title(app) == "Category exists"
        assert app.modals.active.panel.has_class("-danger")
        assert [c.name for c in app.store.get_all_categories()] == ["School"]

        _press_modal(app, CONFIRM_BUTTON_ID)
        await _settle(pilot)
        assert not app.modals.is_open

@pytest.mark.asyncio
async def test_delete_category_in_use_is_refused(tmp_path):
    app = _make_app(tmp_path)
    async with app.run_test(headless=True, size=(120, 40)) as pilot:
        await _settle(pilot)

        app.query_one("#delete-category", Button).press()
        await _settle(pilot)
        assert _active_title(app) == "Delete category"

        _press_modal(app, CONFIRM_BUTTON_ID)
        await _settle(pilot)
        assert _active_title(app) == "Category in use"

        _press_modal(app, CONFIRM_BUTTON_ID)
        await _settle(pilot)
        assert [c.name for c in app.store.get_all_categories()] == ["School"]


@pytest.mark.asyncio
async def test_delete_unused_category_after_danger_confirm(tmp_path):
    store = TodoStore()
    store.add_category("Spare")
    app = _make_app(tmp_path, seed=False, store=store)
    async with app.run_test(headless=True, size=(120, 40)) as pilot:
        await _settle(pilot)

        app.query_one("#delete-category", Button).press()
        await _settle(pilot)
        _press_modal(app, CONFIRM_BUTTON_ID)
        await _settle(pilot)

        assert _active_title(app) == "Delete category"
        assert app.modals.active.panel.has_class("-danger")
        _press_modal(app, CONFIRM_BUTTON_ID)
        await _settle(pilot)

        assert store.get_all_categories() == []
        assert not app.modals.is_open


# ---------------------------------------------------------------------------
# Todos
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_add_todo_without_categories_alerts(tmp_path):
    app = _make_app(tmp_path, seed=False)
    async with app.run_test(headless=True, size=(120, 40)) as pilot:
        await _settle(pilot)

        app.query_one("#add-todo", Button).press()
        await _settle(pilot)

        assert _active_title(app) == "No categories yet"
        _press_modal(app, CONFIRM_BUTTON_ID)
        await _settle(pilot)
        assert not app.modals.is_open


@pytest.mark.asyncio
async def test_add_todo_uses_default_due_date(tmp_path):
    app = _make_app(tmp_path)
    async with app.run_test(headless=True, size=(120, 40)) as pilot:
        await _settle(pilot)

        app.query_one("#add-todo", Button).press()
        await _settle(pilot)
        panel = app.modals.active.panel
        assert panel.field("due_date").value == "2025-10-16"

        panel.field("name").control.value = "Buy milk"
        _press_modal(app, CONFIRM_BUTTON_ID)
        await _settle(pilot)

        assert _active_title(app) == "Todo added"
        todos = app.store.get_all_todos()
        assert todos[-1].name == "Buy milk"
        assert todos[-1].due_date == date(2025, 10, 16)
        assert todos[-1].status == "pending"
        assert len(app.query(TodoCard)) == 4

        _press_modal(app, CONFIRM_BUTTON_ID)
        await _settle(pilot)


@pytest.mark.asyncio
async def test_add_todo_with_invalid_date_alerts(tmp_path):
    app = _make_app(tmp_path)
    async with app.run_test(headless=True, size=(120, 40)) as pilot:
        await _settle(pilot)

        app.query_one("#add-todo", Button).press()
        await _settle(pilot)
        panel = app.modals.active.panel
        panel.field("name").control.value = "Broken"
        panel.field("due_date").control.value = "2025-13-40"
        _press_modal(app, CONFIRM_BUTTON_ID)
        await _settle(pilot)

        assert _active_title(app) == "Invalid todo"
        assert len(app.store.get_all_todos()) == 3

        _press_modal(app, CONFIRM_BUTTON_ID)
        await _settle(pilot)


@pytest.mark.asyncio
async def test_edit_todo_updates_status(tmp_path):
    app = _make_app(tmp_path)
    async with app.run_test(headless=True, size=(120, 40)) as pilot:
        await _settle(pilot)

        card = _card(app, "Finish my homework")
        card.query_one(".edit-btn", Button).press()
        await _settle(pilot)

        panel = app.modals.active.panel
        assert _active_title(app) == "Edit todo"
        assert panel.field("name").value == "Finish my homework"
        assert panel.field("status").value == "in-progress"

        panel.field("status").control.value = "completed"
        await _settle(pilot)
        _press_modal(app, CONFIRM_BUTTON_ID)
        await _settle(pilot)

        todo = app.store.get_todo(card.todo.id)
        assert todo.status == "completed"
        assert not app.modals.is_open
        assert _card(app, "Finish my homework").overdue is False


@pytest.mark.asyncio
async def test_edit_missing_todo_alerts(tmp_path):
    app = _make_app(tmp_path)
    async with app.run_test(headless=True, size=(120, 40)) as pilot:
        await _settle(pilot)

        app.run_worker(app.edit_todo_flow("missing"))
        await _settle(pilot)

        assert _active_title(app) == "Todo not found"
        _press_modal(app, CONFIRM_BUTTON_ID)
        await _settle(pilot)


@pytest.mark.asyncio
async def test_delete_todo_confirm_and_cancel(tmp_path):
    app = _make_app(tmp_path)
    async with app.run_test(headless=True, size=(120, 40)) as pilot:
        await _settle(pilot)

        _card(app, "Mow the Lawn").query_one(".delete-btn", Button).press()
        await _settle(pilot)
        assert _active_title(app) == "Delete todo"
        _press_modal(app, CANCEL_BUTTON_ID)
        await _settle(pilot)
        assert len(app.store.get_all_todos()) == 3

        _card(app, "Mow the Lawn").query_one(".delete-btn", Button).press()
        await _settle(pilot)
        _press_modal(app, CONFIRM_BUTTON_ID)
        await _settle(pilot)

        assert [t.name for t in app.store.get_all_todos()] == [
            "Finish my homework",
            "Watch the October 2, 2025 class session video",
        ]
        assert len(app.query(TodoCard)) == 2


@pytest.mark.asyncio
async def test_clear_completed(tmp_path):
    app = _make_app(tmp_path)
    async with app.run_test(headless=True, size=(120, 40)) as pilot:
        await _settle(pilot)

        app.query_one("#clear-completed", Button).press()
        await _settle(pilot)
        _press_modal(app, CONFIRM_BUTTON_ID)
        await _settle(pilot)

        assert all(t.status != "completed" for t in app.store.get_all_todos())
        assert len(app.query(TodoCard)) == 2


@pytest.mark.asyncio
async def test_select_field_offers_categories(tmp_path):
    app = _make_app(tmp_path)
    async with app.run_test(headless=True, size=(120, 40)) as pilot:
        await _settle(pilot)

        app.query_one("#add-todo", Button).press()
        await _settle(pilot)
        select = app.modals.active.panel.field("category").control

        assert isinstance(select, Select)
        assert select.value == app.store.get_all_categories()[0].id

        _press_modal(app, CANCEL_BUTTON_ID)
        await _settle(pilot)
        assert len(app.store.get_all_todos()) == 3


# ---------------------------------------------------------------------------
# Keys and scrolling behind an open dialog
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_quit_key_is_ignored_while_dialog_is_open(tmp_path):
    app = _make_app(tmp_path, seed=False)
    async with app.run_test(headless=True, size=(120, 40)) as pilot:
        await _settle(pilot)

        app.action_add_todo()
        await _settle(pilot)
        assert _active_title(app) == "No categories yet"

        await pilot.press("q")
        await _settle(pilot)
        assert app.is_running
        assert _active_title(app) == "No categories yet"

        _press_modal(app, CONFIRM_BUTTON_ID)
        await _settle(pilot)
        assert not app.modals.is_open
        assert app.check_action("close_app", ()) is True


@pytest.mark.asyncio
async def test_shortcuts_do_not_queue_dialogs_behind_open_one(tmp_path):
    app = _make_app(tmp_path)
    async with app.run_test(headless=True, size=(120, 40)) as pilot:
        await _settle(pilot)

        app.query_one("#clear-completed", Button).press()
        await _settle(pilot)
        assert _active_title(app) == "Clear completed"

        for key in ("n", "c", "x"):
            await pilot.press(key)
        await _settle(pilot)
        assert app.modals.pending_count == 0
        assert _active_title(app) == "Clear completed"
        assert app.check_action("add_todo", ()) is False
        assert app.check_action("clear_completed", ()) is False

        _press_modal(app, CANCEL_BUTTON_ID)
        await _settle(pilot)
        assert app.check_action("add_todo", ()) is True

        await pilot.press("n")
        await _settle(pilot)
        assert _active_title(app) == "Add todo"
        _press_modal(app, CANCEL_BUTTON_ID)
        await _settle(pilot)


@pytest.mark.asyncio
async def test_todo_list_stops_scrolling_while_dialog_is_open(tmp_path):
    app = _make_app(tmp_path)
    async with app.run_test(headless=True, size=(120, 40)) as pilot:
        await _settle(pilot)
        todo_list = app.query_one(TodoList)
        assert todo_list.styles.overflow_y == "auto"

        app.query_one("#clear-completed", Button).press()
        await _settle(pilot)
        assert todo_list.styles.overflow_y == "hidden"

        _press_modal(app, CANCEL_BUTTON_ID)
        await _settle(pilot)
        assert todo_list.styles.overflow_y == "auto"
