"""Client-side view state.

Every slice is immutable; transitions build a new ViewState with
dataclasses.replace instead of patching the old one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from taskman_cli.models.task import Task, TaskDraft, TaskStatus, trim_deadline


class SearchMode(str, Enum):
    """What the search box matches against."""

    ID = "id"
    TITLE = "title"


class MessageLevel(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class StatusMessage:
    """Outcome of the last user action."""

    text: str
    level: MessageLevel = MessageLevel.INFO

    @classmethod
    def info(cls, text: str) -> StatusMessage:
        return cls(text, MessageLevel.INFO)

    @classmethod
    def success(cls, text: str) -> StatusMessage:
        return cls(text, MessageLevel.SUCCESS)

    @classmethod
    def error(cls, text: str) -> StatusMessage:
        return cls(text, MessageLevel.ERROR)


@dataclass(frozen=True)
class FormState:
    """The draft being typed into the task form.

    Unlike TaskDraft the title may be blank here; it is only checked when the
    form is submitted.
    """

    title: str = ""
    description: str = ""
    status: TaskStatus = TaskStatus.PLANNED
    deadline: str = ""

    @classmethod
    def from_task(cls, task: Task) -> FormState:
        try:
            status = TaskStatus(task.status)
        except ValueError:
            status = TaskStatus.PLANNED
        return cls(
            title=task.title,
            description=task.description or "",
            status=status,
            deadline=trim_deadline(task.deadline),
        )

    def to_draft(self) -> TaskDraft:
        """Raises pydantic.ValidationError when the title is blank."""
        return TaskDraft(
            title=self.title,
            description=self.description,
            status=self.status,
            deadline=self.deadline,
        )


@dataclass(frozen=True)
class SearchState:
    mode: SearchMode = SearchMode.TITLE
    text: str = ""
    selected_status: Optional[str] = None


@dataclass(frozen=True)
class ViewState:
    """Everything the task page shows."""

    tasks: tuple[Task, ...] = ()
    known_statuses: tuple[str, ...] = ()
    form: FormState = field(default_factory=FormState)
    edit_target: Optional[Union[int, str]] = None
    search: SearchState = field(default_factory=SearchState)
    message: Optional[StatusMessage] = None

    @property
    def editing(self) -> bool:
        return self.edit_target is not None
