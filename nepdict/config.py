"""Configuration management for nepdict."""

import os
import copy
import json
from pathlib import Path
from typing import Optional, Dict, Any

from pydantic import ValidationError

from . import constants
from .error_handling import ConfigurationError
from .models import NepdictConfig


class ConfigManager:
    """Manages configuration loading and validation."""

    DEFAULT_CONFIG = {
        "data": {
            "data_dir": constants.DEFAULT_DATA_DIR,
            "sources": list(constants.DEFAULT_SOURCE_FILES),
        },
        "search": {
            "max_results": constants.MAX_SEARCH_RESULTS,
            "advanced_max_results": constants.MAX_ADVANCED_RESULTS,
            "similar_max_results": constants.MAX_SIMILAR_RESULTS,
            "fuzzy_threshold": constants.FUZZY_THRESHOLD,
            "suggestion_limit": constants.DEFAULT_SUGGESTION_LIMIT,
            "suggestion_min_length": constants.MIN_SUGGESTION_LENGTH,
            "random_sample_size": constants.DEFAULT_RANDOM_SAMPLE_SIZE,
        },
        "cache": {
            "enabled": True,
            "max_entries": constants.DEFAULT_CACHE_MAX_ENTRIES,
        },
        "logging": {
            "format": "text",
            "level": "INFO",
            "log_file": None,
        },
    }

    def __init__(self, config_path: Optional[str] = None):
        """Initialize config manager.

        Args:
            config_path: Path to a JSON config file. If None, uses defaults + env vars
        """
        self.config_path = Path(config_path) if config_path else None
        self._config: Optional[NepdictConfig] = None

    def load(self) -> NepdictConfig:
        """Load configuration from defaults, file and environment.

        Raises:
            ConfigurationError: If the file cannot be parsed or values are invalid
        """
        if self._config:
            return self._config

        config_dict = copy.deepcopy(self.DEFAULT_CONFIG)

        if self.config_path:
            if not self.config_path.exists():
                raise ConfigurationError(
                    f"Config file not found: {self.config_path}",
                    config_key="config_path",
                )
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    file_config = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(
                    f"Invalid JSON in config file {self.config_path}: {e}",
                    config_key="config_path",
                ) from e
            if not isinstance(file_config, dict):
                raise ConfigurationError(
                    f"Config file {self.config_path} must contain a JSON object",
                    config_key="config_path",
                )
            config_dict = self._deep_merge(config_dict, file_config)

        config_dict = self._apply_env_overrides(config_dict)

        try:
            self._config = NepdictConfig(**config_dict)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
        return self._config

    def _deep_merge(self, base: Dict[str, Any], update: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in update.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides."""
        data_dir = os.getenv("NEPDICT_DATA_DIR")
        if data_dir:
            config.setdefault("data", {})["data_dir"] = data_dir

        log_level = os.getenv("NEPDICT_LOG_LEVEL")
        if log_level:
            config.setdefault("logging", {})["level"] = log_level

        log_format = os.getenv("NEPDICT_LOG_FORMAT")
        if log_format:
            config.setdefault("logging", {})["format"] = log_format

        max_entries = os.getenv("NEPDICT_CACHE_MAX_ENTRIES")
        if max_entries:
            try:
                config.setdefault("cache", {})["max_entries"] = int(max_entries)
            except ValueError as e:
                raise ConfigurationError(
                    f"NEPDICT_CACHE_MAX_ENTRIES must be an integer, got {max_entries!r}",
                    config_key="cache.max_entries",
                ) from e

        if os.getenv("NEPDICT_CACHE_DISABLED", "").lower() in ("true", "1", "yes"):
            config.setdefault("cache", {})["enabled"] = False

        return config

    def save_template(self, path: str) -> None:
        """Save the default configuration as a JSON template."""
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.DEFAULT_CONFIG, f, indent=2)

    @property
    def config(self) -> NepdictConfig:
        """Get the loaded configuration."""
        return self.load()
