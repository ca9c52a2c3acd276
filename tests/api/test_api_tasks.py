"""Tests for Tasks API."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from taskman_cli.api.client import APIClient
from taskman_cli.api.errors import NetworkError
from taskman_cli.api.tasks import TasksAPI
from taskman_cli.models.task import Task, TaskDraft, TaskStatus

TASK_JSON = {
    "id": 1,
    "title": "A",
    "description": "first",
    "status": "PLANNED",
    "deadline": "2026-11-01T09:30:00",
    "dateCreated": "2026-10-01T12:00:00.123",
}


@pytest.fixture
def mock_client():
    """Create a mock API client."""
    client = MagicMock(spec=APIClient)
    client.get = AsyncMock()
    client.post = AsyncMock()
    client.put = AsyncMock()
    client.delete = AsyncMock()
    return client


def _response(payload):
    response = MagicMock()
    response.status_code = 200
    response.json.return_value = payload
    return response


@pytest.mark.asyncio
async def test_list_tasks_keeps_server_order(mock_client):
    second = dict(TASK_JSON, id=2, title="B", status="FAILED")
    mock_client.get.return_value = _response([second, TASK_JSON])

    result = await TasksAPI(mock_client).list_tasks()

    assert [task.id for task in result] == [2, 1]
    assert result[1].date_created == "2026-10-01T12:00:00.123"
    mock_client.get.assert_called_once_with("/api/tasks")


@pytest.mark.asyncio
async def test_get_task(mock_client):
    mock_client.get.return_value = _response(TASK_JSON)

    task = await TasksAPI(mock_client).get_task(1)

    assert task == Task.model_validate(TASK_JSON)
    mock_client.get.assert_called_once_with("/api/tasks/search/id/1")


@pytest.mark.asyncio
async def test_search_by_title_percent_encodes(mock_client):
    mock_client.get.return_value = _response([])

    result = await TasksAPI(mock_client).search_by_title("buy milk/eggs?")

    assert result == []
    mock_client.get.assert_called_once_with(
        "/api/tasks/search/title/buy%20milk%2Feggs%3F"
    )


@pytest.mark.asyncio
async def test_search_by_status(mock_client):
    mock_client.get.return_value = _response([TASK_JSON])

    result = await TasksAPI(mock_client).search_by_status("IN_PROGRESS")

    assert len(result) == 1
    mock_client.get.assert_called_once_with("/api/tasks/search/status/IN_PROGRESS")


@pytest.mark.asyncio
async def test_list_statuses(mock_client):
    mock_client.get.return_value = _response(TaskStatus.values())

    result = await TasksAPI(mock_client).list_statuses()

    assert result == ["PLANNED", "IN_PROGRESS", "COMPLETED", "FAILED"]
    mock_client.get.assert_called_once_with("/api/tasks/statuses")


@pytest.mark.asyncio
async def test_create_task_posts_draft(mock_client):
    draft = TaskDraft(title="A", status=TaskStatus.IN_PROGRESS)

    result = await TasksAPI(mock_client).create_task(draft)

    assert result is None
    mock_client.post.assert_called_once_with(
        "/api/tasks",
        json={
            "title": "A",
            "description": "",
            "status": "IN_PROGRESS",
            "deadline": None,
        },
    )


@pytest.mark.asyncio
async def test_update_task_puts_to_item(mock_client):
    draft = TaskDraft(title="A", deadline="2026-11-01T09:30")

    await TasksAPI(mock_client).update_task(7, draft)

    mock_client.put.assert_called_once_with(
        "/api/tasks/7",
        json={
            "title": "A",
            "description": "",
            "status": "PLANNED",
            "deadline": "2026-11-01T09:30",
        },
    )


@pytest.mark.asyncio
async def test_delete_task(mock_client):
    await TasksAPI(mock_client).delete_task(7)

    mock_client.delete.assert_called_once_with("/api/tasks/7")


@pytest.mark.asyncio
async def test_malformed_body_becomes_network_error(mock_client):
    response = _response(None)
    response.json.side_effect = ValueError("Expecting value")
    mock_client.get.return_value = response

    with pytest.raises(NetworkError):
        await TasksAPI(mock_client).get_task(1)


@pytest.mark.asyncio
async def test_wrong_shape_becomes_network_error(mock_client):
    mock_client.get.return_value = _response([{"id": 1}])

    with pytest.raises(NetworkError):
        await TasksAPI(mock_client).list_tasks()


@pytest.mark.asyncio
async def test_failures_propagate(mock_client):
    mock_client.get.side_effect = NetworkError("GET /api/tasks failed", status_code=500)

    with pytest.raises(NetworkError):
        await TasksAPI(mock_client).list_tasks()
