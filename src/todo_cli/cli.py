from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from .errors import TodoError
from .models import TodoFilter, TodoItem, TodoStatus
from .operations import add_todo, delete_todo, list_todos, update_todo
from .settings import Settings, get_settings
from .storage import JsonTodoStore
from .utils import parse_todo_id

logger = logging.getLogger(__name__)

DEFAULT_EXIT_CODE_OK = 0
DEFAULT_ERROR_EXIT_CODE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="todo", description="Manage a personal list of TODO items")
    parser.add_argument("--file", help="Path of the JSON todo file (overrides TODO_FILE)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # new
    new_parser = subparsers.add_parser("new", help="Create a new TODO item")
    new_parser.add_argument("contents", help="Text of the TODO item")

    # update
    update_parser = subparsers.add_parser("update", help="Update the status of a TODO item by ID")
    update_parser.add_argument("id", help="ID of the TODO item")
    update_parser.add_argument("status", metavar="{open,closed}", help="New status")

    # list
    list_parser = subparsers.add_parser("list", help="Show all TODOs")
    list_parser.add_argument(
        "status", nargs="?", metavar="{open,closed}", help="Only show items with this status"
    )
    list_parser.add_argument("-v", "--verbose", action="store_true", help="Show the ID of each item")

    # delete
    delete_parser = subparsers.add_parser("delete", help="Deletes the specified TODO item")
    delete_parser.add_argument("id", help="ID of the TODO item")

    return parser


def handle_new(store: JsonTodoStore, todos: List[TodoItem], args: argparse.Namespace) -> None:
    added = add_todo(args.contents, todos)
    store.save(todos)
    print(f"Added new TODO: {added.id}")


def handle_update(store: JsonTodoStore, todos: List[TodoItem], args: argparse.Namespace) -> None:
    todo_id = parse_todo_id(args.id)
    status = TodoStatus.parse(args.status)
    update_todo(todo_id, status, todos)
    store.save(todos)
    print("Updated TODO")


def handle_delete(store: JsonTodoStore, todos: List[TodoItem], args: argparse.Namespace) -> None:
    todo_id = parse_todo_id(args.id)
    delete_todo(todo_id, todos)
    store.save(todos)
    print("Deleted TODO")


def handle_list(todos: List[TodoItem], args: argparse.Namespace, settings: Settings) -> None:
    status = TodoStatus.parse(args.status) if args.status is not None else None
    filtered = list_todos(TodoFilter(status=status), todos)
    verbose = args.verbose or settings.verbose
    print(f"{len(filtered)} todo items")
    for todo in filtered:
        print(todo)
        if verbose:
            print(f"({todo.id})")


def run(args: argparse.Namespace, settings: Settings) -> None:
    """
    Load the collection, apply one command and persist the result when it changed.

    Raises:
        TodoError: on any storage, lookup or input failure.
    """
    store = JsonTodoStore(args.file or settings.todo_file)
    todos = store.load_or_initialize()
    logger.debug("Loaded %d todo items from %s", len(todos), store.path)

    if args.command == "new":
        handle_new(store, todos, args)
    elif args.command == "update":
        handle_update(store, todos, args)
    elif args.command == "delete":
        handle_delete(store, todos, args)
    elif args.command == "list":
        handle_list(todos, args, settings)


# PUBLIC_INTERFACE
def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Command-line entry point.

    Returns:
        Process exit code: 0 on success, 1 when the command failed.
    """
    settings = get_settings()
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        run(args, settings)
    except TodoError as e:
        logger.debug("Command %s failed: %r", args.command, e)
        print(e, file=sys.stderr)
        return DEFAULT_ERROR_EXIT_CODE
    return DEFAULT_EXIT_CODE_OK


if __name__ == "__main__":
    sys.exit(main())
