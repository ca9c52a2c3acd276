"""Task data models."""

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# datetime-local inputs carry minute precision: YYYY-MM-DDTHH:MM
DEADLINE_INPUT_LENGTH = 16


class TaskStatus(str, Enum):
    """Statuses the task store accepts."""

    PLANNED = "PLANNED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    @classmethod
    def values(cls) -> list[str]:
        return [status.value for status in cls]


class Task(BaseModel):
    """A task as returned by the server.

    Status stays a plain string so that a value the client does not know
    about is still displayed instead of failing the whole load.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Union[int, str]
    title: str
    description: Optional[str] = None
    status: str
    deadline: Optional[str] = None
    date_created: Optional[str] = Field(default=None, alias="dateCreated")


class TaskDraft(BaseModel):
    """The editable subset of a task, sent on create and update."""

    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.PLANNED
    deadline: str = ""

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value

    @field_validator("description", "deadline", mode="before")
    @classmethod
    def none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def to_payload(self) -> dict[str, Any]:
        """Serialize for the wire; an empty deadline goes out as null."""
        return {
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "deadline": self.deadline or None,
        }


def trim_deadline(deadline: Optional[str]) -> str:
    """Drop anything past minute precision from a server timestamp."""
    if not deadline:
        return ""
    return deadline[:DEADLINE_INPUT_LENGTH]
