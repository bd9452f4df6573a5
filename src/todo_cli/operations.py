from __future__ import annotations

import logging
from typing import Iterable, List, MutableSequence
from uuid import UUID

from .errors import NoSuchTodo
from .models import TodoFilter, TodoItem, TodoStatus
from .utils import utc_now

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def add_todo(contents: str, todos: MutableSequence[TodoItem]) -> TodoItem:
    """
    Append a new open item to the collection.

    Example:
        >>> todos = []
        >>> item = add_todo("Buy Groceries", todos)
        >>> item.contents, len(todos)
        ('Buy Groceries', 1)
    """
    item = TodoItem.new(contents)
    todos.append(item)
    logger.debug("Added todo %s", item.id)
    return item


def _index_of(todo_id: UUID, todos: Iterable[TodoItem]) -> int:
    for idx, todo in enumerate(todos):
        if todo.id == todo_id:
            return idx
    raise NoSuchTodo()


# PUBLIC_INTERFACE
def delete_todo(todo_id: UUID, todos: MutableSequence[TodoItem]) -> None:
    """
    Remove the item with the given id, keeping the order of the rest.

    Raises:
        NoSuchTodo: if no item has that id. The collection is left untouched.
    """
    idx = _index_of(todo_id, todos)
    del todos[idx]
    logger.debug("Deleted todo %s", todo_id)


# PUBLIC_INTERFACE
def update_todo(todo_id: UUID, status: TodoStatus, todos: MutableSequence[TodoItem]) -> TodoItem:
    """
    Set the status of the item with the given id and return it.

    ``modified`` becomes the current time when reopening, or the completion
    timestamp carried by ``status`` when completing. A Completed status built
    with an older timestamp therefore backdates ``modified``.

    Raises:
        NoSuchTodo: if no item has that id. The collection is left untouched.
    """
    todo = todos[_index_of(todo_id, todos)]
    todo.modified = status.completed_at if status.is_completed else utc_now()
    todo.status = status
    logger.debug("Updated todo %s to %s", todo_id, status.kind.value)
    return todo


# PUBLIC_INTERFACE
def list_todos(todo_filter: TodoFilter, todos: Iterable[TodoItem]) -> List[TodoItem]:
    """
    Return the items matching the filter, in their original order.

    Status filtering uses the coarse status equality, so a Completed filter
    selects every completed item regardless of when it was completed.
    """
    return [todo for todo in todos if todo_filter.matches(todo)]
