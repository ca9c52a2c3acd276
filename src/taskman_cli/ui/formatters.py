"""Output formatters for tasks and statuses."""

import json
from collections.abc import Iterable, Sequence
from typing import Any, Optional

import yaml
from rich.table import Table

from taskman_cli.controller.state import MessageLevel, StatusMessage
from taskman_cli.models.task import Task, TaskStatus
from taskman_cli.utils.console import get_console

console = get_console()

STATUS_SEPARATOR = "_"

TASK_COLUMNS = ("ID", "Title", "Description", "Status", "Deadline", "Created")

STATUS_STYLES = {
    TaskStatus.PLANNED.value: "cyan",
    TaskStatus.IN_PROGRESS.value: "yellow",
    TaskStatus.COMPLETED.value: "green",
    TaskStatus.FAILED.value: "red",
}

MESSAGE_STYLES = {
    MessageLevel.INFO: ("bold blue", "Info"),
    MessageLevel.SUCCESS: ("bold green", "Success"),
    MessageLevel.ERROR: ("bold red", "Error"),
}


def format_status(status: str, first_only: bool = False) -> str:
    """Turn a status value into a label: ``IN_PROGRESS`` -> ``In progress``.

    The first character is upper-cased, the rest lower-cased and every
    separator becomes a space. ``first_only`` keeps the older behaviour of
    replacing only the first separator, which leaves labels such as
    ``Not yet_started`` for multi-word statuses.
    """
    if not status:
        return ""
    rest = status[1:].lower()
    if first_only:
        rest = rest.replace(STATUS_SEPARATOR, " ", 1)
    else:
        rest = rest.replace(STATUS_SEPARATOR, " ")
    return status[0].upper() + rest


def format_deadline(deadline: Optional[str]) -> str:
    """Show an ISO timestamp with a space instead of the ``T``."""
    if not deadline:
        return ""
    return deadline.replace("T", " ", 1)


def status_options(statuses: Iterable[str]) -> list[tuple[str, str]]:
    """(label, value) pairs for a status picker."""
    return [(format_status(status), status) for status in statuses]


def task_row(task: Task) -> tuple[str, ...]:
    """Display strings for one task, in TASK_COLUMNS order."""
    return (
        str(task.id),
        task.title,
        task.description or "",
        format_status(task.status),
        format_deadline(task.deadline),
        format_deadline(task.date_created),
    )


def build_task_table(tasks: Sequence[Task], title: Optional[str] = None) -> Table:
    """Rich table of tasks; a single placeholder row when there are none."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    for column in TASK_COLUMNS:
        table.add_column(column, no_wrap=column in ("ID", "Status", "Deadline"))

    if not tasks:
        table.add_row("", "[yellow]No tasks found[/yellow]", "", "", "", "")
        return table

    for task in tasks:
        row = list(task_row(task))
        style = STATUS_STYLES.get(task.status)
        if style:
            row[3] = f"[{style}]{row[3]}[/{style}]"
        table.add_row(*row)
    return table


def format_single_task(task: Task) -> None:
    """Format a single task as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in zip(TASK_COLUMNS, task_row(task)):
        table.add_row(key, value or "-")

    console.print(table)


def _plain(data: Any) -> Any:
    if isinstance(data, Task):
        return data.model_dump(by_alias=True)
    if isinstance(data, (list, tuple)):
        return [_plain(item) for item in data]
    return data


def format_output(data: Any, output_format: str = "table") -> None:
    """Format and display tasks (or a list of statuses) in the given format."""
    if output_format == "json":
        print(json.dumps(_plain(data), indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(_plain(data), default_flow_style=False, sort_keys=False))
    elif isinstance(data, Task):
        format_single_task(data)
    elif isinstance(data, (list, tuple)) and all(isinstance(t, Task) for t in data):
        console.print(build_task_table(data))
    else:
        for item in data:
            console.print(item)


def format_message(message: Optional[StatusMessage]) -> None:
    """Display a controller status message, if there is one."""
    if message is None:
        return
    style, label = MESSAGE_STYLES[message.level]
    console.print(f"[{style}]{label}:[/{style}] {message.text}")


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")
