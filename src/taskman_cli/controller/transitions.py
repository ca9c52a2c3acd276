"""Pure state transitions for the task page.

Each function takes the current ViewState plus whatever the triggering
action produced and returns the next ViewState. None of them perform I/O,
so every rule can be checked without a server or a screen.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import fields, replace
from typing import Any, Optional, Union

from taskman_cli.controller.state import (
    FormState,
    SearchMode,
    StatusMessage,
    ViewState,
)
from taskman_cli.models.task import Task, TaskStatus

FORM_FIELDS = frozenset(f.name for f in fields(FormState))


def distinct_statuses(tasks: Iterable[Task]) -> tuple[str, ...]:
    """Statuses present in the tasks, in order of first appearance."""
    return tuple(dict.fromkeys(task.status for task in tasks))


def tasks_loaded(state: ViewState, tasks: Iterable[Task]) -> ViewState:
    tasks = tuple(tasks)
    return replace(
        state,
        tasks=tasks,
        known_statuses=distinct_statuses(tasks),
        message=None,
    )


def load_failed(state: ViewState) -> ViewState:
    return replace(state, message=StatusMessage.error("Failed to load tasks"))


def set_form_field(state: ViewState, name: str, value: Any) -> ViewState:
    if name not in FORM_FIELDS:
        return replace(
            state, message=StatusMessage.error(f"Unknown form field: {name}")
        )
    if name == "status":
        try:
            value = TaskStatus(value)
        except ValueError:
            return replace(
                state, message=StatusMessage.error(f"Invalid status: {value}")
            )
    elif value is None:
        value = ""
    return replace(state, form=replace(state.form, **{name: value}))


def blank_title(state: ViewState) -> ViewState:
    return replace(state, message=StatusMessage.error("Title is required"))


def submit_succeeded(state: ViewState, updated: bool) -> ViewState:
    text = "Task updated successfully" if updated else "Task added successfully"
    return replace(
        state,
        form=FormState(),
        edit_target=None,
        message=StatusMessage.success(text),
    )


def submit_failed(state: ViewState) -> ViewState:
    return replace(state, message=StatusMessage.error("Operation failed"))


def begin_edit(state: ViewState, task: Task) -> ViewState:
    return replace(
        state,
        form=FormState.from_task(task),
        edit_target=task.id,
        message=StatusMessage.info(f"Editing task #{task.id}"),
    )


def cancel_edit(state: ViewState) -> ViewState:
    return replace(
        state,
        form=FormState(),
        edit_target=None,
        message=StatusMessage.info("Edit canceled"),
    )


def delete_succeeded(state: ViewState) -> ViewState:
    return replace(state, message=StatusMessage.success("Task deleted successfully"))


def delete_failed(state: ViewState) -> ViewState:
    return replace(state, message=StatusMessage.error("Failed to delete task"))


def set_search_mode(state: ViewState, mode: Union[str, SearchMode]) -> ViewState:
    try:
        mode = SearchMode(mode)
    except ValueError:
        return replace(state, message=StatusMessage.error("Invalid search type"))
    return replace(state, search=replace(state.search, mode=mode))


def set_search_text(state: ViewState, text: str) -> ViewState:
    return replace(state, search=replace(state.search, text=text))


def search_completed(state: ViewState, tasks: Iterable[Task]) -> ViewState:
    return replace(
        state,
        tasks=tuple(tasks),
        message=StatusMessage.info("Search completed"),
    )


def search_failed(state: ViewState) -> ViewState:
    return replace(
        state,
        tasks=(),
        message=StatusMessage.error("No matching task found"),
    )


def status_filtered(
    state: ViewState, status: str, tasks: Iterable[Task]
) -> ViewState:
    return replace(
        state,
        tasks=tuple(tasks),
        search=replace(state.search, selected_status=status),
        message=StatusMessage.info(f"Filtered by status: {status}"),
    )


def status_filter_failed(state: ViewState, status: str) -> ViewState:
    return replace(
        state,
        search=replace(state.search, selected_status=status),
        message=StatusMessage.error("Failed to filter by status"),
    )


def search_reset(state: ViewState) -> ViewState:
    return replace(state, search=replace(state.search, text=""))


def show_message(state: ViewState, message: Optional[StatusMessage]) -> ViewState:
    return replace(state, message=message)
