"""Task commands - one-shot versions of the actions on the task page."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Optional

import typer

from taskman_cli.api.client import get_client
from taskman_cli.api.tasks import TasksAPI
from taskman_cli.config import get_config_manager
from taskman_cli.controller import (
    EditTask,
    LoadTasks,
    MessageLevel,
    RequestDelete,
    SearchMode,
    SelectStatusFilter,
    SetFormField,
    SetSearchMode,
    SetSearchText,
    SubmitForm,
    SubmitSearch,
    TaskViewController,
    ViewState,
)
from taskman_cli.controller.view_controller import ConfirmFn
from taskman_cli.models.task import TaskStatus
from taskman_cli.ui.formatters import format_info, format_message, format_output
from taskman_cli.utils.console import get_console
from taskman_cli.utils.exit_codes import (
    ERROR_INVALID_ARGS,
    ERROR_NETWORK,
    ERROR_NOT_FOUND,
)
from taskman_cli.utils.typer_helpers import SuggestingGroup

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Task management commands")
console = get_console()

OUTPUT_HELP = "Output format (table, json, yaml)"


def _always(prompt: str) -> bool:
    return True


@asynccontextmanager
async def open_controller(
    confirm: Optional[ConfirmFn] = None,
) -> AsyncIterator[TaskViewController]:
    """A controller bound to a fresh API client that is closed afterwards."""
    client = get_client()
    try:
        kwargs = {"discard_stale": client.config.ui.discard_stale}
        if confirm is not None:
            kwargs["confirm"] = confirm
        yield TaskViewController(TasksAPI(client), **kwargs)
    finally:
        await client.close()


def _output_format(output: Optional[str]) -> str:
    return output or get_config_manager().config.ui.output


def _finish(state: ViewState, failure_code: int = ERROR_NETWORK) -> None:
    """Show the status message and exit non-zero if it reports a failure."""
    format_message(state.message)
    if state.message is not None and state.message.level is MessageLevel.ERROR:
        raise typer.Exit(code=failure_code)


@app.command("list")
@command_wrapper
async def list_tasks(
    output: Optional[str] = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """List all tasks."""
    async with open_controller() as controller:
        state = await controller.dispatch(LoadTasks())
    _finish(state)
    format_output(list(state.tasks), _output_format(output))


@app.command("get")
@command_wrapper
async def get_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """Show one task."""
    async with get_client() as client:
        task = await TasksAPI(client).get_task(task_id)
    format_output(task, _output_format(output))


@app.command("search")
@command_wrapper
async def search_tasks(
    text: str = typer.Argument(..., help="Title fragment or task ID"),
    by: SearchMode = typer.Option(
        SearchMode.TITLE, "--by", "-b", help="Match against title or id"
    ),
    output: Optional[str] = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """Search tasks by title or by ID."""
    async with open_controller() as controller:
        await controller.dispatch(SetSearchMode(by.value))
        await controller.dispatch(SetSearchText(text))
        state = await controller.dispatch(SubmitSearch())
    _finish(state, failure_code=ERROR_NOT_FOUND)
    format_output(list(state.tasks), _output_format(output))


@app.command("filter")
@command_wrapper
async def filter_tasks(
    status: str = typer.Argument(..., help="Status value, e.g. IN_PROGRESS"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """List tasks with the given status."""
    async with open_controller() as controller:
        state = await controller.dispatch(SelectStatusFilter(status.upper()))
    _finish(state)
    format_output(list(state.tasks), _output_format(output))


@app.command("statuses")
@command_wrapper
async def list_statuses(
    output: Optional[str] = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """List the statuses the server accepts."""
    async with get_client() as client:
        statuses = await TasksAPI(client).list_statuses()
    format_output(statuses, _output_format(output))


@app.command("add")
@command_wrapper
async def add_task(
    title: str = typer.Option(..., "--title", "-t", help="Task title"),
    description: str = typer.Option("", "--description", "-d", help="Description"),
    status: TaskStatus = typer.Option(
        TaskStatus.PLANNED, "--status", "-s", case_sensitive=False, help="Status"
    ),
    deadline: str = typer.Option(
        "", "--deadline", help="Deadline as YYYY-MM-DDTHH:MM"
    ),
) -> None:
    """Create a task."""
    if not title.strip():
        raise AppError("Title is required", exit_code=ERROR_INVALID_ARGS)

    async with open_controller() as controller:
        for name, value in (
            ("title", title),
            ("description", description),
            ("status", status),
            ("deadline", deadline),
        ):
            await controller.dispatch(SetFormField(name, value))
        state = await controller.dispatch(SubmitForm())
    _finish(state)


@app.command("update")
@command_wrapper
async def update_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    description: Optional[str] = typer.Option(
        None, "--description", "-d", help="New description"
    ),
    status: Optional[TaskStatus] = typer.Option(
        None, "--status", "-s", case_sensitive=False, help="New status"
    ),
    deadline: Optional[str] = typer.Option(
        None, "--deadline", help="New deadline as YYYY-MM-DDTHH:MM ('' clears it)"
    ),
) -> None:
    """Update a task; fields that are not given keep their current value."""
    if title is not None and not title.strip():
        raise AppError("Title is required", exit_code=ERROR_INVALID_ARGS)

    async with open_controller() as controller:
        task = await controller.api.get_task(task_id)
        await controller.dispatch(EditTask(task))
        for name, value in (
            ("title", title),
            ("description", description),
            ("status", status),
            ("deadline", deadline),
        ):
            if value is not None:
                await controller.dispatch(SetFormField(name, value))
        state = await controller.dispatch(SubmitForm())
    _finish(state)


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
) -> None:
    """Delete a task."""
    config = get_config_manager().config
    confirm = _always if force or not config.ui.confirm_delete else typer.confirm

    async with open_controller(confirm=confirm) as controller:
        state = await controller.dispatch(RequestDelete(task_id))

    if state.message is None:
        format_info("Cancelled")
        return
    _finish(state)
