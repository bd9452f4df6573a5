from __future__ import annotations


# PUBLIC_INTERFACE
class TodoError(Exception):
    """Base class for every failure raised by the todo core and its driver."""

    @property
    def is_file_not_found(self) -> bool:
        """True only when the error signals a missing todo file."""
        return False


class NoSuchTodo(TodoError):
    """The referenced id has no matching item in the collection."""

    def __init__(self) -> None:
        super().__init__("No such Todo exists")


class InvalidIdentifier(TodoError):
    """Caller supplied id text that is not a UUID."""

    def __init__(self) -> None:
        super().__init__("Not a valid UUID")


class UnknownError(TodoError):
    """Catch-all failure carrying a human-readable message."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Unknown: {message}")


class NoTodoFile(TodoError):
    """The todo file has not been created yet."""

    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(f"No TODO file found. File named '{filename}' is expected")

    @property
    def is_file_not_found(self) -> bool:
        return True
