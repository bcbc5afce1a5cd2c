# -*- coding: utf-8 -*-
"""In-memory store for todos and categories.

The store hands out copies of its lists; todos themselves are mutable
dataclasses and ``edit_todo`` updates them in place.
"""

import random
import string
import time
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Literal, Optional, Union

from tasktray.logger_config import logger

TodoStatus = Literal["pending", "in-progress", "completed"]
TODO_STATUSES = ("pending", "in-progress", "completed")

UNKNOWN_CATEGORY = "Unknown Category"

_ID_ALPHABET = string.digits + string.ascii_lowercase


class TodoValidationError(ValueError):
    """Raised when a todo or category update carries invalid data."""


def generate_id() -> str:
    """Return ``<epoch-ms>-<6 base36 chars>``."""
    now = int(time.time() * 1000)
    suffix = "".join(random.choice(_ID_ALPHABET) for _ in range(6))
    return f"{now}-{suffix}"


def parse_due_date(value: Union[date, str]) -> date:
    """Accept a ``date`` or an ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value.strip())
    except (AttributeError, ValueError) as e:
        raise TodoValidationError(f"Invalid due date {value!r}; use YYYY-MM-DD") from e


def _check_status(status: str) -> TodoStatus:
    if status not in TODO_STATUSES:
        raise TodoValidationError(f"Unknown status {status!r}; expected one of {', '.join(TODO_STATUSES)}")
    return status  # type: ignore[return-value]


@dataclass
class Category:
    id: str
    name: str


@dataclass
class Todo:
    id: str
    name: str
    status: TodoStatus
    category_id: str
    due_date: date

    def is_overdue(self, today: Optional[date] = None) -> bool:
        """Due before ``today`` and not completed."""
        today = today or date.today()
        return self.due_date < today and self.status != "completed"

    @property
    def status_label(self) -> str:
        return self.status.replace("-", " ").upper()


class TodoStore:
    """Holds todos and categories for one app session."""

    def __init__(self) -> None:
        self._todos: List[Todo] = []
        self._categories: List[Category] = []

    # ------------------------------------------------------------------
    # Todos
    # ------------------------------------------------------------------

    def create_todo(
        self,
        name: str,
        category_id: str,
        due_date: Union[date, str],
        status: str = "pending",
    ) -> Todo:
        name = name.strip()
        if not name:
            raise TodoValidationError("Todo name cannot be empty.")
        todo = Todo(
            id=generate_id(),
            name=name,
            status=_check_status(status or "pending"),
            category_id=category_id,
            due_date=parse_due_date(due_date),
        )
        self._todos = [*self._todos, todo]
        logger.info(f"Created todo '{todo.name}' ({todo.id}); {len(self._todos)} todos in store")
        return todo

    def get_todo(self, todo_id: str) -> Optional[Todo]:
        for todo in self._todos:
            if todo.id == todo_id:
                return todo
        return None

    def get_all_todos(self) -> List[Todo]:
        return list(self._todos)

    def edit_todo(
        self,
        todo_id: str,
        *,
        name: Optional[str] = None,
        status: Optional[str] = None,
        category_id: Optional[str] = None,
        due_date: Optional[Union[date, str]] = None,
    ) -> Optional[Todo]:
        """Apply the given updates; returns None when the todo does not exist."""
        todo = self.get_todo(todo_id)
        if todo is None:
            logger.warning(f"Todo with id {todo_id} not found.")
            return None

        # Validate everything before touching the todo.
        updates: Dict[str, object] = {}
        if name is not None:
            new_name = name.strip()
            if not new_name:
                raise TodoValidationError("Todo name cannot be empty.")
            updates["name"] = new_name
        if status is not None:
            updates["status"] = _check_status(status)
        if category_id is not None:
            updates["category_id"] = category_id
        if due_date is not None:
            updates["due_date"] = parse_due_date(due_date)

        for attr, value in updates.items():
            setattr(todo, attr, value)
        logger.info(f"Edited todo {todo_id}: {sorted(updates)}")
        return todo

    def delete_todo(self, todo_id: str) -> bool:
        original = len(self._todos)
        self._todos = [todo for todo in self._todos if todo.id != todo_id]
        deleted = len(self._todos) < original
        if deleted:
            logger.info(f"Deleted todo {todo_id}; {len(self._todos)} todos left")
        else:
            logger.warning(f"Todo with id {todo_id} not found for deletion.")
        return deleted

    def clear_completed_todos(self) -> int:
        original = len(self._todos)
        self._todos = [todo for todo in self._todos if todo.status != "completed"]
        removed = original - len(self._todos)
        logger.info(f"Cleared {removed} completed todos")
        return removed

    def todos_in_category(self, category_id: str) -> List[Todo]:
        return [todo for todo in self._todos if todo.category_id == category_id]

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def add_category(self, name: str) -> Category:
        name = name.strip()
        if not name:
            raise TodoValidationError("Category name cannot be empty.")
        category = Category(id=generate_id(), name=name)
        self._categories = [*self._categories, category]
        logger.info(f"Added category '{category.name}' ({category.id})")
        return category

    def get_category(self, category_id: str) -> Optional[Category]:
        for category in self._categories:
            if category.id == category_id:
                return category
        return None

    def find_category_by_name(self, name: str) -> Optional[Category]:
        """Case-insensitive lookup by name."""
        wanted = name.strip().lower()
        for category in self._categories:
            if category.name.lower() == wanted:
                return category
        return None

    def get_all_categories(self) -> List[Category]:
        return list(self._categories)

    def delete_category(self, category_id: str) -> bool:
        original = len(self._categories)
        self._categories = [c for c in self._categories if c.id != category_id]
        deleted = len(self._categories) < original
        if deleted:
            logger.info(f"Deleted category {category_id}")
        else:
            logger.warning(f"Category with id {category_id} not found for deletion.")
        return deleted

    def category_name(self, category_id: str) -> str:
        category = self.get_category(category_id)
        return category.name if category else UNKNOWN_CATEGORY

    # ------------------------------------------------------------------
    # Seed data
    # ------------------------------------------------------------------

    def initialize_seed_data(self) -> bool:
        """Fill an empty store with sample data. Returns True if it did."""
        if self._todos or self._categories:
            return False
        school = self.add_category("School")
        self.create_todo("Mow the Lawn", school.id, date(2025, 10, 10), status="pending")
        self.create_todo("Finish my homework", school.id, date(2025, 10, 8), status="in-progress")
        self.create_todo(
            "Watch the October 2, 2025 class session video",
            school.id,
            date(2025, 10, 3),
            status="completed",
        )
        logger.info("Seed data initialized")
        return True
