"""
Configuration Manager - Handle file diff settings persistence
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Mapping

from pydantic import ValidationError

from models.config import FileDiffConfig

logger = logging.getLogger(__name__)

CONFIG_SECTION = "fileDiff"

# field name -> environment variable
_ENV_INT_FIELDS = {
    "context_lines": "FILE_DIFF_CONTEXT_LINES",
    "fold_context": "FILE_DIFF_FOLD_CONTEXT",
    "fold_threshold": "FILE_DIFF_FOLD_THRESHOLD",
    "line_number_start": "FILE_DIFF_LINE_NUMBER_START",
    "max_matrix_cells": "FILE_DIFF_MATRIX_CELLS",
    "highlight_max_length": "FILE_DIFF_HIGHLIGHT_MAX_LENGTH",
    "pair_window": "FILE_DIFF_PAIR_WINDOW",
}
_ENV_BOOL_FIELDS = {
    "trim_trailing_newline": "FILE_DIFF_TRIM_TRAILING_NEWLINE",
    "action_timestamp": "FILE_DIFF_ACTION_TIMESTAMP",
}
_ENV_STR_FIELDS = {
    "fallback_language": "FILE_DIFF_FALLBACK_LANGUAGE",
    "diff_backend": "FILE_DIFF_BACKEND",
    "highlighter": "FILE_DIFF_HIGHLIGHTER",
}


class ConfigManager:
    """Manage configuration persistence"""

    _instance = None
    _config_file = None

    def __init__(self):
        try:
            # Explicit directory wins
            config_dir = os.environ.get("FILE_DIFF_CONFIG_DIR")

            # Then ~/.file_diff
            if not config_dir:
                try:
                    config_dir = os.path.expanduser("~/.file_diff")
                except Exception:
                    config_dir = None

            if config_dir:
                config_path = Path(config_dir)
                try:
                    config_path.mkdir(parents=True, exist_ok=True)
                    self._config_file = config_path / "config.json"
                except OSError as e:
                    logger.warning("Cannot write to %s: %s", config_dir, e)
                    self._config_file = None

            # Last resort: system temp dir
            if not self._config_file:
                tmp_dir = Path(tempfile.gettempdir()) / "file_diff"
                tmp_dir.mkdir(parents=True, exist_ok=True)
                self._config_file = tmp_dir / "config.json"
                logger.info("Using temporary config path: %s", self._config_file)

        except Exception as e:
            logger.error("Critical error in ConfigManager init: %s", e)
            self._config_file = Path(tempfile.gettempdir()) / "file_diff_config_fallback.json"

        self._config = self._load_config()

    @classmethod
    def get_instance(cls) -> "ConfigManager":
        """Get singleton instance"""
        if cls._instance is None:
            cls._instance = ConfigManager()
        return cls._instance

    @property
    def config_file(self) -> Path:
        return self._config_file

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from file"""
        if not self._config_file.exists():
            return self._default_config()

        try:
            with open(self._config_file) as f:
                return json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Error loading config: %s", e)
            return self._default_config()

    def _default_config(self) -> dict[str, Any]:
        """Get default configuration"""
        return {
            CONFIG_SECTION: {},
            "server": {"host": "127.0.0.1", "port": 8000},
        }

    def get_config(self) -> dict[str, Any]:
        """Get current configuration"""
        # Reload config from file to ensure we have the latest
        self._config = self._load_config()
        return self._config.copy()

    def save_config(self, config: dict[str, Any]):
        """Save configuration to file"""
        self._config.update(config)

        self._config_file.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(self._config_file, "w") as f:
                json.dump(self._config, f, indent=2)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}")

    def get(self, key: str, default=None):
        """Get specific config value"""
        return self._config.get(key, default)

    def set(self, key: str, value: Any):
        """Set specific config value"""
        self._config[key] = value
        self.save_config(self._config)

    # ========== File diff section ==========

    def get_diff_overrides(self) -> dict[str, Any]:
        """Persisted file diff overrides (camelCase keys)"""
        section = self.get_config().get(CONFIG_SECTION) or {}
        return dict(section)

    def update_diff_overrides(self, overrides: Mapping[str, Any]) -> dict[str, Any]:
        """Merge overrides into the persisted file diff section"""
        merged = {**self.get_diff_overrides(), **overrides}
        self.set(CONFIG_SECTION, merged)
        return merged

    def reset_diff_overrides(self):
        """Drop every persisted file diff override"""
        self.set(CONFIG_SECTION, {})


def env_diff_settings(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Read file diff settings from environment variables"""
    environ = os.environ if environ is None else environ
    defaults = FileDiffConfig()
    values: dict[str, Any] = {}

    for field, key in _ENV_INT_FIELDS.items():
        if key in environ:
            try:
                values[field] = int(environ[key].strip(), 10)
            except ValueError:
                logger.warning("Ignoring non-integer %s=%r", key, environ[key])
                values[field] = getattr(defaults, field)

    for field, key in _ENV_BOOL_FIELDS.items():
        if key in environ:
            values[field] = environ[key].strip().lower() == "true"

    for field, key in _ENV_STR_FIELDS.items():
        if key in environ:
            values[field] = environ[key]

    return values


def _valid_settings(values: Mapping[str, Any], source: str) -> dict[str, Any]:
    """Keep the settings that validate on their own, logging the rest"""
    valid = {}
    for key, value in values.items():
        try:
            FileDiffConfig.model_validate({key: value})
        except ValidationError as e:
            logger.warning("Ignoring invalid %s setting %s=%r: %s", source, key, value, e)
            continue
        valid[key] = value
    return valid


def get_file_diff_config(config_manager: ConfigManager | None = None) -> FileDiffConfig:
    """Build the effective config: defaults, then env vars, then persisted overrides"""
    base = FileDiffConfig.model_validate(_valid_settings(env_diff_settings(), "environment"))

    if config_manager is None:
        return base

    overrides = _valid_settings(config_manager.get_diff_overrides(), "persisted")
    if not overrides:
        return base

    return FileDiffConfig.model_validate({**base.model_dump(by_alias=True), **overrides})
