# -*- coding: utf-8 -*-
"""Todo list widgets for the tasktray TUI."""

from .todo_list import TodoCard, TodoList, format_due_date

__all__ = ["TodoCard", "TodoList", "format_due_date"]
