"""Tasks API endpoints."""

from typing import Union
from urllib.parse import quote

import httpx

from taskman_cli.api.client import APIClient
from taskman_cli.api.errors import NetworkError
from taskman_cli.config import TASKS_ROOT
from taskman_cli.models.task import Task, TaskDraft

TaskId = Union[int, str]


def _segment(value: TaskId) -> str:
    """Percent-encode a value for use as a single path segment."""
    return quote(str(value), safe="")


def _decode_one(response: httpx.Response) -> Task:
    try:
        return Task.model_validate(response.json())
    except ValueError as e:
        raise NetworkError(
            "Malformed task in response", status_code=response.status_code
        ) from e


def _decode_many(response: httpx.Response) -> list[Task]:
    try:
        return [Task.model_validate(item) for item in response.json()]
    except (TypeError, ValueError) as e:
        raise NetworkError(
            "Malformed task list in response", status_code=response.status_code
        ) from e


class TasksAPI:
    """Tasks API client."""

    def __init__(self, client: APIClient):
        self.client = client

    async def list_tasks(self) -> list[Task]:
        """List every task."""
        response = await self.client.get(TASKS_ROOT)
        return _decode_many(response)

    async def get_task(self, task_id: TaskId) -> Task:
        """Get a specific task by ID."""
        response = await self.client.get(
            f"{TASKS_ROOT}/search/id/{_segment(task_id)}"
        )
        return _decode_one(response)

    async def search_by_title(self, text: str) -> list[Task]:
        """Find tasks whose title contains the text."""
        response = await self.client.get(
            f"{TASKS_ROOT}/search/title/{_segment(text)}"
        )
        return _decode_many(response)

    async def search_by_status(self, status: str) -> list[Task]:
        """Find tasks with the given status."""
        response = await self.client.get(
            f"{TASKS_ROOT}/search/status/{_segment(status)}"
        )
        return _decode_many(response)

    async def list_statuses(self) -> list[str]:
        """List every status the server accepts."""
        response = await self.client.get(f"{TASKS_ROOT}/statuses")
        try:
            return [str(status) for status in response.json()]
        except (TypeError, ValueError) as e:
            raise NetworkError(
                "Malformed status list in response", status_code=response.status_code
            ) from e

    async def create_task(self, draft: TaskDraft) -> None:
        """Create a new task."""
        await self.client.post(TASKS_ROOT, json=draft.to_payload())

    async def update_task(self, task_id: TaskId, draft: TaskDraft) -> None:
        """Replace a task's editable fields."""
        await self.client.put(
            f"{TASKS_ROOT}/{_segment(task_id)}", json=draft.to_payload()
        )

    async def delete_task(self, task_id: TaskId) -> None:
        """Delete a task."""
        await self.client.delete(f"{TASKS_ROOT}/{_segment(task_id)}")
