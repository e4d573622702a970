"""
Configuration management for cc-history.

Values are resolved in order: environment variable, config file, default.
The config file lives at ~/.cc-history/config.json.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class Config:
    """Layered configuration backed by a JSON file."""

    DEFAULTS: dict[str, Any] = {
        "log_dir": "~/.claude/projects",
        "log_level": "WARNING",
        "page_size": 15,
        "preview_length": 60,
    }

    ENV_MAPPINGS: dict[str, str] = {
        "log_dir": "CC_HISTORY_LOG_DIR",
        "log_level": "LOG_LEVEL",
        "page_size": "CC_HISTORY_PAGE_SIZE",
        "preview_length": "CC_HISTORY_PREVIEW_LENGTH",
    }

    def __init__(self, config_dir: Path | None = None):
        if config_dir is None:
            config_dir = Path.home() / ".cc-history"
        self.config_dir = Path(config_dir)
        self.config_file = self.config_dir / "config.json"

    def _load_config_file(self) -> dict[str, Any]:
        """Load values stored in the config file, or an empty dict."""
        if not self.config_file.exists():
            return {}

        try:
            with open(self.config_file) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.info(f"Error loading config file {self.config_file}: {e}")
            return {}

        return data if isinstance(data, dict) else {}

    def _save_config_file(self, data: dict[str, Any]):
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w") as f:
            json.dump(data, f, indent=2)

    def _parse_value(self, value: str, key: str) -> Any:
        """Parse a string (from the environment) using the type of the key's default."""
        default = self.DEFAULTS.get(key)

        if isinstance(default, bool):
            return value.lower() in ("true", "1", "yes", "on")
        if isinstance(default, int):
            try:
                return int(value)
            except ValueError:
                return default
        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value.

        Args:
            key: Configuration key
            default: Returned when the key has no default of its own

        Returns:
            The environment value, the config file value, or the default
        """
        env_key = self.ENV_MAPPINGS.get(key, key.upper())
        env_value = os.getenv(env_key)
        if env_value is not None:
            return self._parse_value(env_value, key)

        file_config = self._load_config_file()
        if key in file_config:
            return file_config[key]

        return self.DEFAULTS.get(key, default)

    def set(self, key: str, value: Any):
        """Persist a value to the config file."""
        data = self._load_config_file()
        data[key] = value
        self._save_config_file(data)

    def unset(self, key: str):
        """Remove a value from the config file."""
        data = self._load_config_file()
        if key in data:
            del data[key]
            self._save_config_file(data)

    def get_all(self) -> dict[str, Any]:
        """Get every known key with its resolved value."""
        return {key: self.get(key) for key in self.DEFAULTS}
