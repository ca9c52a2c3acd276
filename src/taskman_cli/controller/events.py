"""Named user actions dispatched to TaskViewController."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from taskman_cli.models.task import Task


@dataclass(frozen=True)
class LoadTasks:
    pass


@dataclass(frozen=True)
class SetFormField:
    field: str
    value: Any


@dataclass(frozen=True)
class SubmitForm:
    pass


@dataclass(frozen=True)
class EditTask:
    task: Task


@dataclass(frozen=True)
class CancelEdit:
    pass


@dataclass(frozen=True)
class RequestDelete:
    task_id: Union[int, str]


@dataclass(frozen=True)
class SetSearchMode:
    mode: str


@dataclass(frozen=True)
class SetSearchText:
    text: str


@dataclass(frozen=True)
class SubmitSearch:
    pass


@dataclass(frozen=True)
class SelectStatusFilter:
    status: str


@dataclass(frozen=True)
class ResetSearch:
    pass


Event = Union[
    LoadTasks,
    SetFormField,
    SubmitForm,
    EditTask,
    CancelEdit,
    RequestDelete,
    SetSearchMode,
    SetSearchText,
    SubmitSearch,
    SelectStatusFilter,
    ResetSearch,
]
