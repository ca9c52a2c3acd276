"""Shared test fixtures and configuration.

Keeps every test away from the real config and log directories and from
whatever TASKMAN_API_URL the developer has exported.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from taskman_cli.api.tasks import TasksAPI


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Point config and log directories at tmp_path and reset singletons."""
    import taskman_cli.config as config_mod
    import taskman_cli.utils.logger as logger_mod

    monkeypatch.delenv(config_mod.ENDPOINT_ENV_VAR, raising=False)
    config_mod._config_managers.clear()
    logger_mod.close_logger()

    with (
        patch(
            "taskman_cli.config.user_config_dir",
            return_value=str(tmp_path / "config"),
        ),
        patch(
            "taskman_cli.utils.logger.user_log_dir",
            return_value=str(tmp_path / "logs"),
        ),
    ):
        yield tmp_path

    config_mod._config_managers.clear()
    logger_mod.close_logger()


@pytest.fixture
def mock_api():
    """A TasksAPI stand-in whose coroutines are AsyncMocks."""
    api = MagicMock(spec=TasksAPI)
    api.list_tasks = AsyncMock(return_value=[])
    api.get_task = AsyncMock()
    api.search_by_title = AsyncMock(return_value=[])
    api.search_by_status = AsyncMock(return_value=[])
    api.list_statuses = AsyncMock(return_value=[])
    api.create_task = AsyncMock()
    api.update_task = AsyncMock()
    api.delete_task = AsyncMock()
    return api
