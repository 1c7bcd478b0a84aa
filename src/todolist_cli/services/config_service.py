"""Configuration service for todolist-cli.

ConfigService is the single source of truth for configuration and the
composition root of the task engine. It handles:

- Loading and saving config.json
- Dotted-key get/set/reset
- Building the storage adapter and the TaskStore from configuration
"""

from __future__ import annotations

import json
import logging
import os
from functools import lru_cache
from json import JSONDecodeError
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, ValidationError

from todolist_cli.adapters import FileKeyValueStorage, MemoryKeyValueStorage
from todolist_cli.models import AppConfig
from todolist_cli.repositories import KeyValueStorage
from todolist_cli.services.persistence import TaskPersistence
from todolist_cli.services.task_store import TaskStore

logger = logging.getLogger(__name__)

_APP_NAME = "todolist_cli"
DATA_DIR_ENV = "TODOLIST_DATA_DIR"


class ConfigService:
    """Service for loading, saving and querying application configuration."""

    def __init__(self):
        """Initialize the config service."""

        self.config_dir = Path(user_config_dir(_APP_NAME))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir(_APP_NAME))

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from disk, falling back to defaults."""
        if not self.config_path.exists():
            return AppConfig()
        try:
            with open(self.config_path, encoding="utf-8") as f:
                return AppConfig.model_validate_json(f.read())
        except (OSError, JSONDecodeError, ValidationError) as e:
            logger.warning("config %s unreadable, using defaults: %s", self.config_path, e)
            return AppConfig()

    def save_config(self, config: AppConfig | None = None) -> None:
        """Write configuration to disk."""
        if config is not None:
            self._config = config
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w", encoding="utf-8") as f:
            json.dump(self.config.model_dump(mode="json"), f, indent=2)

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not exist
        """
        value: Any = self.config
        for part in key.split("."):
            if not isinstance(value, BaseModel) or part not in type(value).model_fields:
                raise KeyError(key)
            value = getattr(value, part)
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key and save.

        Raises:
            KeyError: If the key does not exist
            ValueError: If the value is invalid for the key
        """
        self.get(key)
        *parents, leaf = key.split(".")
        config_dict = self.config.model_dump(mode="json")
        current = config_dict
        for part in parents:
            current = current[part]
        current[leaf] = value

        try:
            new_config = AppConfig.model_validate(config_dict)
        except ValidationError as e:
            raise ValueError(f"Invalid value for {key}: {e.errors()[0]['msg']}") from e
        self.save_config(new_config)

    def reset(self, key: str | None = None) -> None:
        """Reset one key, or the whole configuration, to defaults."""
        if key is None:
            self.save_config(AppConfig())
            return
        self.get(key)
        default_value: Any = AppConfig()
        for part in key.split("."):
            default_value = getattr(default_value, part)
        if isinstance(default_value, BaseModel):
            default_value = default_value.model_dump(mode="json")
        self.set(key, default_value)

    # ---- composition root ----

    def get_storage_dir(self) -> Path:
        """Directory of the file storage backend.

        TODOLIST_DATA_DIR wins over ``storage.data_dir``, which wins over the
        platform data directory.
        """
        override = os.environ.get(DATA_DIR_ENV) or self.config.storage.data_dir
        return Path(override).expanduser() if override else self.data_dir

    def build_storage(self) -> KeyValueStorage:
        if self.config.storage.backend == "memory":
            return MemoryKeyValueStorage()
        return FileKeyValueStorage(self.get_storage_dir())

    def build_task_store(self) -> TaskStore:
        persistence = TaskPersistence(self.build_storage(), key=self.config.storage.key)
        return TaskStore.open(persistence)


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get the process-wide ConfigService."""
    return ConfigService()


def get_task_store() -> TaskStore:
    """Build the TaskStore for the current configuration."""
    return get_config_service().build_task_store()
