"""View state and the controller that drives it."""

from taskman_cli.controller.events import (
    CancelEdit,
    EditTask,
    LoadTasks,
    RequestDelete,
    ResetSearch,
    SelectStatusFilter,
    SetFormField,
    SetSearchMode,
    SetSearchText,
    SubmitForm,
    SubmitSearch,
)
from taskman_cli.controller.state import (
    FormState,
    MessageLevel,
    SearchMode,
    SearchState,
    StatusMessage,
    ViewState,
)
from taskman_cli.controller.view_controller import TaskViewController

__all__ = [
    "CancelEdit",
    "EditTask",
    "FormState",
    "LoadTasks",
    "MessageLevel",
    "RequestDelete",
    "ResetSearch",
    "SearchMode",
    "SearchState",
    "SelectStatusFilter",
    "SetFormField",
    "SetSearchMode",
    "SetSearchText",
    "StatusMessage",
    "SubmitForm",
    "SubmitSearch",
    "TaskViewController",
    "ViewState",
]
