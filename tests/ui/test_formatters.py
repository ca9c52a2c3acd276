"""Tests for output formatters."""

import json

import pytest
import yaml
from rich.console import Console

from taskman_cli.controller.state import StatusMessage
from taskman_cli.models.task import Task
from taskman_cli.ui import formatters
from taskman_cli.ui.formatters import (
    build_task_table,
    format_deadline,
    format_status,
    status_options,
    task_row,
)
from tests.fakes import make_task


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        ("IN_PROGRESS", "In progress"),
        ("PLANNED", "Planned"),
        ("COMPLETED", "Completed"),
        ("failed", "Failed"),
        ("", ""),
    ],
)
def test_format_status(status, expected):
    assert format_status(status) == expected


def test_format_status_replaces_every_separator():
    assert format_status("NOT_YET_STARTED") == "Not yet started"


def test_format_status_first_only_matches_older_labels():
    assert format_status("NOT_YET_STARTED", first_only=True) == "Not yet_started"
    assert format_status("IN_PROGRESS", first_only=True) == "In progress"


@pytest.mark.parametrize(
    ("deadline", "expected"),
    [
        ("2026-11-01T09:30:00", "2026-11-01 09:30:00"),
        (None, ""),
        ("", ""),
    ],
)
def test_format_deadline(deadline, expected):
    assert format_deadline(deadline) == expected


def test_status_options_pairs_labels_with_values():
    assert status_options(["PLANNED", "IN_PROGRESS"]) == [
        ("Planned", "PLANNED"),
        ("In progress", "IN_PROGRESS"),
    ]


def test_task_row():
    task = Task(
        id=4,
        title="A",
        description=None,
        status="IN_PROGRESS",
        deadline="2026-11-01T09:30:00",
        dateCreated="2026-10-01T08:00:00",
    )

    assert task_row(task) == (
        "4",
        "A",
        "",
        "In progress",
        "2026-11-01 09:30:00",
        "2026-10-01 08:00:00",
    )


def _render(renderable) -> str:
    console = Console(width=120, record=True)
    console.print(renderable)
    return console.export_text()


def test_build_task_table_lists_tasks():
    text = _render(build_task_table([make_task(1, "Buy milk", "COMPLETED")]))

    assert "Buy milk" in text
    assert "Completed" in text


def test_build_task_table_placeholder():
    assert "No tasks found" in _render(build_task_table([]))


def test_format_output_json(capsys):
    formatters.format_output([make_task(1, "A")], "json")

    data = json.loads(capsys.readouterr().out)
    assert data[0]["id"] == 1
    assert data[0]["dateCreated"] is None


def test_format_output_yaml(capsys):
    formatters.format_output(make_task(2, "B"), "yaml")

    data = yaml.safe_load(capsys.readouterr().out)
    assert data["title"] == "B"


def test_format_message_uses_level_label(capsys):
    formatters.format_message(StatusMessage.error("Failed to load tasks"))
    formatters.format_message(None)

    out = capsys.readouterr().out
    assert "Error:" in out
    assert "Failed to load tasks" in out
