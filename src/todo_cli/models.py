from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from .errors import UnknownError
from .utils import as_utc, new_todo_id, utc_now

OPEN = "open"
CLOSED = "closed"


class StatusKind(str, Enum):
    """Tag of a TodoStatus value. The values double as the persisted tags."""

    UNCOMPLETED = "Uncompleted"
    COMPLETED = "Completed"


# PUBLIC_INTERFACE
@dataclass(frozen=True, eq=False)
class TodoStatus:
    """
    Status of a todo item: either Uncompleted, or Completed at a timestamp.

    Equality is deliberately coarse and only compares the kind, so
    ``TodoStatus.completed(t1) == TodoStatus.completed(t2)`` holds for any two
    timestamps. Use ``completed_at`` when the timestamp itself matters.

    Conversions:
    - ``bool(status)`` is False for Uncompleted and True for Completed.
    - ``TodoStatus.from_bool(flag)`` maps False to Uncompleted and True to
      Completed at the moment of the call.
    - ``TodoStatus.parse(text)`` maps "open" to Uncompleted and "closed" to
      Completed now; anything else raises UnknownError.
    """

    kind: StatusKind
    completed_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.kind is StatusKind.COMPLETED and self.completed_at is None:
            raise ValueError("Completed status requires a completion timestamp")
        if self.kind is StatusKind.UNCOMPLETED and self.completed_at is not None:
            raise ValueError("Uncompleted status carries no timestamp")
        # Completion times are always aware UTC; naive input is taken as UTC
        object.__setattr__(self, "completed_at", as_utc(self.completed_at))

    @classmethod
    def uncompleted(cls) -> "TodoStatus":
        return cls(StatusKind.UNCOMPLETED)

    @classmethod
    def completed(cls, at: datetime) -> "TodoStatus":
        return cls(StatusKind.COMPLETED, at)

    @classmethod
    def from_bool(cls, value: bool) -> "TodoStatus":
        if value:
            return cls.completed(utc_now())
        return cls.uncompleted()

    @classmethod
    def parse(cls, value: str) -> "TodoStatus":
        """
        Parse status text as typed on the command line.

        Matching is exact and case-sensitive; no trimming is applied.

        Raises:
            UnknownError: if the text is neither "open" nor "closed".
        """
        if value == OPEN:
            return cls.uncompleted()
        if value == CLOSED:
            return cls.completed(utc_now())
        raise UnknownError("Invalid Status")

    @property
    def is_completed(self) -> bool:
        return self.kind is StatusKind.COMPLETED

    def __bool__(self) -> bool:
        return self.is_completed

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TodoStatus):
            return NotImplemented
        return self.kind is other.kind

    def __hash__(self) -> int:
        return hash(self.kind)

    def __repr__(self) -> str:
        if self.is_completed:
            return f"TodoStatus.completed({self.completed_at!r})"
        return "TodoStatus.uncompleted()"


# PUBLIC_INTERFACE
@dataclass
class TodoItem:
    """
    A single task.

    Fields:
    - id: time-ordered UUID assigned at construction, never reassigned
    - modified: time of the last status update, None until the first one
    - contents: free-form task text
    - status: current TodoStatus
    """

    id: UUID
    modified: Optional[datetime]
    contents: str
    status: TodoStatus = field(default_factory=TodoStatus.uncompleted)

    @classmethod
    def new(cls, contents: str) -> "TodoItem":
        """Create an open item with a fresh id."""
        return cls(id=new_todo_id(), modified=None, contents=contents, status=TodoStatus.uncompleted())

    def __str__(self) -> str:
        mark = "x" if self.status.is_completed else " "
        return f"[{mark}] {self.contents}"


@dataclass(frozen=True)
class TodoFilter:
    """
    Query descriptor for list_todos. A status of None disables filtering.
    """

    status: Optional[TodoStatus] = None

    def matches(self, item: TodoItem) -> bool:
        return self.status is None or item.status == self.status
