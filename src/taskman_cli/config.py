"""Configuration management for the taskman CLI."""

import json
import os
from pathlib import Path
from typing import Any, Optional

from platformdirs import user_config_dir
from pydantic import BaseModel, Field, ValidationError

ENDPOINT_ENV_VAR = "TASKMAN_API_URL"
TASKS_ROOT = "/api/tasks"


class APIConfig(BaseModel):
    """API configuration."""

    endpoint: str = Field(default="http://localhost:8080")
    timeout: int = Field(default=30, gt=0)


class UIConfig(BaseModel):
    """UI configuration."""

    output: str = Field(default="table")
    confirm_delete: bool = Field(default=True)
    discard_stale: bool = Field(default=False)


class Config(BaseModel):
    """Main configuration."""

    api: APIConfig = Field(default_factory=APIConfig)
    ui: UIConfig = Field(default_factory=UIConfig)


class ConfigManager:
    """Manages taskman configuration for one profile."""

    def __init__(self, profile: str = "default"):
        self.profile = profile
        self.config_dir = Path(user_config_dir("taskman_cli"))
        self.config_file = self.config_dir / f"{profile}.json"

        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    @property
    def endpoint(self) -> str:
        """Origin of the task store; the environment variable wins when set."""
        override = os.environ.get(ENDPOINT_ENV_VAR, "").strip()
        return (override or self.config.api.endpoint).rstrip("/")

    @property
    def tasks_url(self) -> str:
        """Base URL every task route is built against."""
        return f"{self.endpoint}{TASKS_ROOT}"

    def load_config(self) -> Config:
        """Load configuration from file."""
        if self.config_file.exists():
            try:
                with open(self.config_file, encoding="utf-8") as f:
                    data = json.load(f)
                return Config(**data)
            except (OSError, ValueError, ValidationError):
                # If config is corrupted, return default
                return Config()
        return Config()

    def save_config(self, config: Optional[Config] = None) -> None:
        """Save configuration to file."""
        if config is None:
            config = self.config

        with open(self.config_file, "w", encoding="utf-8") as f:
            json.dump(config.model_dump(), f, indent=2)

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self.get_from_config(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises KeyError for an unknown key and pydantic's ValidationError
        when the value does not fit the field.
        """
        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                raise KeyError(key)
            current = current[k]
        if keys[-1] not in current or isinstance(current[keys[-1]], dict):
            raise KeyError(key)

        current[keys[-1]] = value

        self._config = Config(**config_dict)
        self.save_config()

    def reset(self, key: Optional[str] = None) -> None:
        """Reset configuration to defaults."""
        if key is None:
            self._config = Config()
        else:
            default_value = self.get_from_config(Config(), key)
            if default_value is None:
                raise KeyError(key)
            self.set(key, default_value)
        self.save_config()

    def get_from_config(self, config: Config, key: str) -> Any:
        """Get value from a config object using dot notation."""
        value: Any = config
        for k in key.split("."):
            if isinstance(value, BaseModel):
                value = getattr(value, k, None)
            else:
                return None
        return value


_config_managers: dict[str, ConfigManager] = {}


def get_config_manager(profile: str = "default") -> ConfigManager:
    """Get the config manager for a profile, creating it on first use."""
    if profile not in _config_managers:
        _config_managers[profile] = ConfigManager(profile)
    return _config_managers[profile]
