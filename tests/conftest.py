"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state and a
deterministic clock for everything that depends on 'now'.
"""

from __future__ import annotations

import logging
from datetime import datetime
from unittest.mock import patch
from zoneinfo import ZoneInfo

import pytest

from habitpomo_cli.adapters.file_storage import MemoryStorageGateway
from habitpomo_cli.repositories.habit_repository import HabitRepository
from habitpomo_cli.services import config_service
from habitpomo_cli.services.time_source import ManualTimeSource
from habitpomo_cli.services.timer_registry import TimerRegistry
from habitpomo_cli.utils.ui.console import set_color

BERLIN = ZoneInfo("Europe/Berlin")


def _clear_factories() -> None:
    config_service.get_config_service.cache_clear()
    config_service.get_time_source.cache_clear()
    config_service.get_habit_repository.cache_clear()
    config_service.get_timer_registry.cache_clear()


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path):
    """Point config, data and log directories at *tmp_path* for every test."""
    import habitpomo_cli.utils.logger as logger_mod

    config_dir = str(tmp_path / "config")
    data_dir = str(tmp_path / "data")
    log_dir = str(tmp_path / "logs")

    _clear_factories()
    logger_mod._logger = None
    with patch("habitpomo_cli.services.config_service.user_config_dir", return_value=config_dir):
        with patch("habitpomo_cli.services.config_service.user_data_dir", return_value=data_dir):
            with patch("habitpomo_cli.utils.logger.user_log_dir", return_value=log_dir):
                yield tmp_path
    _clear_factories()

    app_logger = logging.getLogger("habitpomo_cli")
    for handler in list(app_logger.handlers):
        handler.close()
        app_logger.removeHandler(handler)
    app_logger.propagate = True
    app_logger.setLevel(logging.NOTSET)
    logger_mod._logger = None
    set_color(True)


# ---------------------------------------------------------------------------
# Core objects on a manual clock
# ---------------------------------------------------------------------------


@pytest.fixture()
def tz():
    return BERLIN


@pytest.fixture()
def clock(tz) -> ManualTimeSource:
    """Manual clock starting 2026-03-14 09:00 Berlin time."""
    return ManualTimeSource(datetime(2026, 3, 14, 9, 0, tzinfo=tz))


@pytest.fixture()
def gateway() -> MemoryStorageGateway:
    return MemoryStorageGateway()


@pytest.fixture()
def repository(gateway, clock, tz) -> HabitRepository:
    return HabitRepository(gateway, clock, tz)


@pytest.fixture()
def registry(repository, clock) -> TimerRegistry:
    return TimerRegistry(repository, clock)
