"""Tests for task models."""

import pytest
from pydantic import ValidationError

from taskman_cli.models.task import Task, TaskDraft, TaskStatus, trim_deadline


def test_status_values():
    assert TaskStatus.values() == ["PLANNED", "IN_PROGRESS", "COMPLETED", "FAILED"]


def test_task_accepts_wire_shape_with_missing_optionals():
    task = Task.model_validate({"id": 3, "title": "A", "status": "PLANNED"})

    assert task.description is None
    assert task.deadline is None
    assert task.date_created is None


def test_task_keeps_unknown_status():
    task = Task.model_validate({"id": 3, "title": "A", "status": "ON_HOLD"})

    assert task.status == "ON_HOLD"


def test_draft_defaults():
    draft = TaskDraft(title="A")

    assert draft.status is TaskStatus.PLANNED
    assert draft.description == ""
    assert draft.deadline == ""


@pytest.mark.parametrize("title", ["", "   "])
def test_draft_rejects_blank_title(title):
    with pytest.raises(ValidationError):
        TaskDraft(title=title)


def test_draft_rejects_unknown_status():
    with pytest.raises(ValidationError):
        TaskDraft(title="A", status="ON_HOLD")


def test_draft_payload_sends_empty_deadline_as_null():
    payload = TaskDraft(title="A", description=None).to_payload()

    assert payload == {
        "title": "A",
        "description": "",
        "status": "PLANNED",
        "deadline": None,
    }


@pytest.mark.parametrize(
    ("deadline", "expected"),
    [
        ("2026-11-01T09:30:15.123456", "2026-11-01T09:30"),
        ("2026-11-01T09:30", "2026-11-01T09:30"),
        (None, ""),
        ("", ""),
    ],
)
def test_trim_deadline(deadline, expected):
    assert trim_deadline(deadline) == expected
