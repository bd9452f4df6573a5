from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Literal, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from .models import StatusKind, TodoItem, TodoStatus
from .utils import as_utc


# PUBLIC_INTERFACE
class CompletedStatusDoc(BaseModel):
    """
    Persisted form of a Completed status: ``{"Completed": "<timestamp>"}``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    completed: datetime = Field(..., alias=StatusKind.COMPLETED.value, description="Completion timestamp")

    @field_validator("completed")
    @classmethod
    def normalize_completed(cls, v: datetime) -> datetime:
        return as_utc(v)  # type: ignore[return-value]


# The Uncompleted case is stored as the bare tag string.
StatusDoc = Union[Literal["Uncompleted"], CompletedStatusDoc]


# PUBLIC_INTERFACE
class TodoItemDoc(BaseModel):
    """
    Schema of one item in the persisted todo document.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "01890a5d-ac96-774b-bcce-b302099a8057",
                "modified": "2025-01-26T09:00:00.000001Z",
                "contents": "Buy Groceries",
                "status": {"Completed": "2025-01-26T09:00:00.000001Z"},
            }
        }
    )

    id: UUID = Field(..., description="Time-ordered unique identifier of the item")
    modified: Optional[datetime] = Field(default=None, description="Time of the last status update")
    contents: str = Field(..., description="Task text")
    status: StatusDoc = Field(..., description="'Uncompleted' or {'Completed': <timestamp>}")

    @field_validator("modified")
    @classmethod
    def normalize_modified(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v)

    @classmethod
    def from_item(cls, item: TodoItem) -> "TodoItemDoc":
        status: StatusDoc
        if item.status.is_completed:
            status = CompletedStatusDoc(completed=item.status.completed_at)
        else:
            status = StatusKind.UNCOMPLETED.value
        return cls(id=item.id, modified=item.modified, contents=item.contents, status=status)

    def to_item(self) -> TodoItem:
        if isinstance(self.status, CompletedStatusDoc):
            status = TodoStatus.completed(self.status.completed)
        else:
            status = TodoStatus.uncompleted()
        return TodoItem(id=self.id, modified=self.modified, contents=self.contents, status=status)


_DOCUMENT = TypeAdapter(List[TodoItemDoc])


# PUBLIC_INTERFACE
def dump_document(items: Iterable[TodoItem]) -> str:
    """Serialize the collection as a pretty-printed JSON array."""
    docs = [TodoItemDoc.from_item(item) for item in items]
    return _DOCUMENT.dump_json(docs, indent=2, by_alias=True).decode("utf-8")


# PUBLIC_INTERFACE
def load_document(data: Union[str, bytes]) -> List[TodoItem]:
    """
    Parse a JSON document into items, preserving document order.

    Raises:
        pydantic.ValidationError: if the document does not match the schema.
    """
    return [doc.to_item() for doc in _DOCUMENT.validate_json(data)]
