"""Tests for the Textual task page, driven headlessly."""

import pytest
from textual.widgets import Button, DataTable, Input, Static

from taskman_cli.api.client import APIClient
from taskman_cli.api.errors import NetworkError
from taskman_cli.ui.app import ConfirmScreen, TaskManagerApp
from tests.fakes import make_task


def _app(mock_api) -> TaskManagerApp:
    return TaskManagerApp(APIClient(), api=mock_api)


async def _settle(app, pilot) -> None:
    await app.workers.wait_for_complete()
    await pilot.pause()


@pytest.mark.asyncio
async def test_page_loads_tasks_on_mount(mock_api):
    mock_api.list_tasks.return_value = [make_task(1, "A"), make_task(2, "B", "FAILED")]
    app = _app(mock_api)

    async with app.run_test() as pilot:
        await _settle(app, pilot)

        assert app.query_one("#tasks", DataTable).row_count == 2
        assert app.controller.state.known_statuses == ("PLANNED", "FAILED")


@pytest.mark.asyncio
async def test_load_failure_shows_message(mock_api):
    mock_api.list_tasks.side_effect = NetworkError("down")
    app = _app(mock_api)

    async with app.run_test() as pilot:
        await _settle(app, pilot)

        message = app.query_one("#message", Static)
        assert message.has_class("error")
        assert app.controller.state.message.text == "Failed to load tasks"


@pytest.mark.asyncio
async def test_edit_selected_fills_form(mock_api):
    mock_api.list_tasks.return_value = [
        make_task(1, "A", description="first", deadline="2026-11-01T09:30:00")
    ]
    app = _app(mock_api)

    async with app.run_test() as pilot:
        await _settle(app, pilot)

        app.action_edit_selected()
        await _settle(app, pilot)

        assert app.query_one("#title-input", Input).value == "A"
        assert app.query_one("#deadline-input", Input).value == "2026-11-01T09:30"
        assert str(app.query_one("#submit", Button).label) == "Update Task"
        assert app.controller.state.edit_target == 1


@pytest.mark.asyncio
async def test_delete_asks_for_confirmation(mock_api):
    mock_api.list_tasks.return_value = [make_task(1, "A")]
    app = _app(mock_api)

    async with app.run_test() as pilot:
        await _settle(app, pilot)

        app.action_delete_selected()
        await pilot.pause(0.2)
        assert isinstance(app.screen, ConfirmScreen)

        await pilot.press("escape")
        await _settle(app, pilot)

        mock_api.delete_task.assert_not_called()
        assert not isinstance(app.screen, ConfirmScreen)
