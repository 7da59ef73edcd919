"""Configuration service for managing habitpomo-cli configuration.

This module provides the ConfigService class, the single source of truth
for configuration. It handles:

- Loading and saving config.json
- Dot-path get/set/reset of individual settings
- Resolving the habit data file and the 'today' timezone

It also exposes cached factories for the objects every command shares:
the time source, the habit repository and the timer registry.
"""

from __future__ import annotations

import json
from datetime import tzinfo
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, ValidationError

from habitpomo_cli.adapters.file_storage import FileStorageGateway
from habitpomo_cli.models.config_models import AppConfig
from habitpomo_cli.repositories.habit_repository import HabitRepository
from habitpomo_cli.services.time_source import PollingTimeSource
from habitpomo_cli.services.timer_registry import TimerRegistry
from habitpomo_cli.utils.calendar import resolve_timezone

DEFAULT_DATA_FILE = "habits.json"


class ConfigService:
    """Service for loading, saving and querying application configuration."""

    def __init__(self):
        """Initialize the config service."""

        self.config_dir = Path(user_config_dir("habitpomo_cli"))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir("habitpomo_cli"))

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from storage."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # Expected on first run
            self._config = AppConfig()
            self.save_config()
        except Exception as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Save the current configuration to storage."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))

            self.config_path.chmod(0o600)
        except Exception as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key.

        Raises:
            KeyError: If no setting has that key
        """
        return _lookup(self.config, key)

    def set(self, key: str, value: Any) -> AppConfig:
        """Set a configuration value by dot-separated key and save.

        Raises:
            KeyError: If no setting has that key
            ValueError: If the value does not validate
        """
        _lookup(self.config, key)
        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            current = current[k]
        current[keys[-1]] = value

        try:
            self._config = AppConfig.model_validate(config_dict)
        except ValidationError as e:
            raise ValueError(f"Invalid value for '{key}': {value}") from e
        self.save_config()
        return self._config

    def reset(self, key: str | None = None) -> None:
        """Reset one setting, or the whole configuration, to defaults."""
        if key is None:
            self._config = AppConfig()
            self.save_config()
        else:
            self.set(key, _lookup(AppConfig(), key))

    @property
    def timezone(self) -> tzinfo:
        return resolve_timezone(self.config.timezone)

    @property
    def data_path(self) -> Path:
        """Where the habit collection is stored."""
        if self.config.data_file:
            return Path(self.config.data_file).expanduser()
        return self.data_dir / DEFAULT_DATA_FILE

    def as_dict(self) -> dict[str, Any]:
        return json.loads(self.config.model_dump_json())


def _lookup(config: BaseModel, key: str) -> Any:
    value: Any = config
    for k in key.split("."):
        if not isinstance(value, BaseModel) or k not in type(value).model_fields:
            raise KeyError(key)
        value = getattr(value, k)
    return value


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service


@lru_cache(maxsize=1)
def get_time_source() -> PollingTimeSource:
    """Process-wide tick source, pumped by the focus loop."""
    return PollingTimeSource()


@lru_cache(maxsize=1)
def get_habit_repository() -> HabitRepository:
    """Repository backed by the configured data file."""
    config_service = get_config_service()
    return HabitRepository(
        gateway=FileStorageGateway(config_service.data_path),
        time_source=get_time_source(),
        tz=config_service.timezone,
    )


@lru_cache(maxsize=1)
def get_timer_registry() -> TimerRegistry:
    """Registry of live timers; never persisted."""
    return TimerRegistry(get_habit_repository(), get_time_source())
