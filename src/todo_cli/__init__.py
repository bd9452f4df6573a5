"""
Personal TODO list package.

Exposes the domain model and the four list operations at package level so
callers can ``from todo_cli import add_todo, TodoItem``. The command-line
driver lives in ``todo_cli.cli``.
"""

from .errors import InvalidIdentifier, NoSuchTodo, NoTodoFile, TodoError, UnknownError  # noqa: F401
from .models import TodoFilter, TodoItem, TodoStatus  # noqa: F401
from .operations import add_todo, delete_todo, list_todos, update_todo  # noqa: F401

__version__ = "0.1.0"
