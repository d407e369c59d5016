"""Configuration service for managing Taskboard configuration.

This module provides the ConfigService class, which is the single source of truth
for all configuration management in Taskboard. It handles:

- Loading and saving config.json
- Dotted-key get/set/reset used by ``taskboard config``
- Board preferences (filters, sort, last refresh) remembered by the client
"""

from __future__ import annotations

import os
from datetime import datetime
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir
from pydantic import BaseModel

from taskboard.models.config_models import AppConfig, BoardPreferences

API_URL_ENV = "TASKBOARD_API_URL"


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self):
        """Initialize the config service."""

        self.config_dir = Path(user_config_dir("taskboard"))
        self.config_path = self.config_dir / "config.json"

        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    @property
    def api_endpoint(self) -> str:
        """API base URL, with the environment variable taking priority."""
        env_url = os.getenv(API_URL_ENV)
        if env_url:
            return env_url.rstrip("/")
        return self.config.api.endpoint

    def load_config(self) -> AppConfig:
        """Load configuration from storage."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run: write the defaults out
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
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self.get_from_config(self.config, key)

    @staticmethod
    def get_from_config(config: AppConfig, key: str) -> Any:
        """Get value from a config object using dot notation."""
        value: Any = config
        for k in key.split("."):
            if isinstance(value, BaseModel) and k in type(value).model_fields:
                value = getattr(value, k)
            else:
                return None
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not name a known setting
            pydantic.ValidationError: If the value is invalid for the setting
        """
        *parents, leaf = key.split(".")
        owner = self.get(".".join(parents)) if parents else self.config
        if not isinstance(owner, BaseModel) or leaf not in type(owner).model_fields:
            raise KeyError(f"Unknown configuration key '{key}'")

        config_dict = self.config.model_dump()
        current = config_dict
        for k in parents:
            current = current[k]
        current[leaf] = value

        self._config = AppConfig.model_validate(config_dict)
        self.save_config()

    def reset(self, key: str | None = None) -> None:
        """Reset the whole configuration, or a single key, to defaults."""
        if key is None:
            self._config = AppConfig()
            self.save_config()
            return
        self.set(key, self.get_from_config(AppConfig(), key))

    @property
    def preferences(self) -> BoardPreferences:
        """Board view/filter/sort preferences."""
        return self.config.preferences

    def save_preferences(self, **changes: Any) -> BoardPreferences:
        """Update and persist some preference fields."""
        updated = self.config.preferences.model_copy(update=changes)
        self.config.preferences = BoardPreferences.model_validate(updated.model_dump())
        self.save_config()
        return self.config.preferences

    def record_refresh(self, timestamp: datetime) -> None:
        """Remember when the board last loaded tasks."""
        self.save_preferences(last_refresh=timestamp)


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
