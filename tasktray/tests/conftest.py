# -*- coding: utf-8 -*-
from __future__ import annotations

from pathlib import Path

import pytest

from tasktray.todo_store import TodoStore
from tasktray.user_settings import UserSettings


@pytest.fixture(autouse=True)
def _isolate_user_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Keep tests away from the real ~/.config/tasktray."""
    import tasktray.user_settings as user_settings

    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setattr(user_settings, "_user_settings", None)


@pytest.fixture
def _isolate_test_logs(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Reset the logging session and point the log base dir at ``tmp_path``."""
    import tasktray.logger_config as logger_config

    monkeypatch.setenv(logger_config.LOG_BASE_DIR_ENV, str(tmp_path / "logs"))
    monkeypatch.setattr(logger_config, "_LOG_BASE_SESSION_DIR", None)
    monkeypatch.setattr(logger_config, "_LOG_SESSION_DIR", None)
    monkeypatch.setattr(logger_config, "_CONSOLE_HANDLER_ID", None)
    monkeypatch.setattr(logger_config, "_FILE_HANDLER_ID", None)
    yield
    logger_config.logger.remove()


@pytest.fixture
def store() -> TodoStore:
    return TodoStore()


@pytest.fixture
def seeded_store() -> TodoStore:
    todo_store = TodoStore()
    todo_store.initialize_seed_data()
    return todo_store


@pytest.fixture
def settings(tmp_path: Path) -> UserSettings:
    return UserSettings(config_dir=tmp_path / "config")
