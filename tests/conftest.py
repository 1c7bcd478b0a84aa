"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from the real config, data and log
directories.
"""

from __future__ import annotations

import itertools
from unittest.mock import patch

import pytest

from todolist_cli.adapters import MemoryKeyValueStorage
from todolist_cli.services.persistence import TaskPersistence
from todolist_cli.services.task_store import TaskStore
from todolist_cli.utils.logger import reset_logger


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Point config, data and log directories at *tmp_path*.

    Also clears the lru_cache so each test gets a fresh ConfigService.
    """
    from todolist_cli.services.config_service import get_config_service

    config_dir = tmp_path / "config"
    data_dir = tmp_path / "data"
    monkeypatch.setenv("TODOLIST_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("TODOLIST_DATA_DIR", raising=False)

    get_config_service.cache_clear()
    with patch(
        "todolist_cli.services.config_service.user_config_dir",
        return_value=str(config_dir),
    ):
        with patch(
            "todolist_cli.services.config_service.user_data_dir",
            return_value=str(data_dir),
        ):
            yield tmp_path
    get_config_service.cache_clear()
    reset_logger()


# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def storage():
    return MemoryKeyValueStorage()


@pytest.fixture()
def persistence(storage):
    return TaskPersistence(storage)


@pytest.fixture()
def clock():
    """Deterministic clock: 1000, 2000, 3000, ... milliseconds."""
    ticks = itertools.count(1000, 1000)
    return lambda: next(ticks)


@pytest.fixture()
def id_factory():
    """Deterministic ids: task-1, task-2, ..."""
    counter = itertools.count(1)
    return lambda: f"task-{next(counter)}"


@pytest.fixture()
def store(persistence, id_factory, clock):
    return TaskStore(persistence, id_factory=id_factory, clock=clock)
