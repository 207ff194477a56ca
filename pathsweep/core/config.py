"""Configuration management for pathsweep."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .constants import (
    CONFIG_FILE,
    CONFIG_VERSION,
    DEFAULT_SETTINGS,
    DELETION_TIMEOUT_MS,
    DIRECTORY_DELETION_BACKOFF_MS,
)

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when configuration is invalid."""
    pass


@dataclass(frozen=True)
class DeletionSettings:
    """Timing and concurrency knobs for a deletion run."""

    timeout_ms: int = DELETION_TIMEOUT_MS
    backoff_ms: int = DIRECTORY_DELETION_BACKOFF_MS
    max_workers: int | None = None

    def __post_init__(self) -> None:
        errors = _validate_settings(self.to_dict())
        if errors:
            raise ConfigError(f"Invalid deletion settings: {'; '.join(errors)}")

    @property
    def timeout(self) -> float:
        """Directory removal timeout in seconds."""
        return self.timeout_ms / 1000.0

    @property
    def backoff(self) -> float:
        """Back-off between removal attempts in seconds."""
        return self.backoff_ms / 1000.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "timeout_ms": self.timeout_ms,
            "backoff_ms": self.backoff_ms,
            "max_workers": self.max_workers,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DeletionSettings:
        """Create instance from dictionary, ignoring unknown keys."""
        return cls(
            timeout_ms=data.get("timeout_ms", DELETION_TIMEOUT_MS),
            backoff_ms=data.get("backoff_ms", DIRECTORY_DELETION_BACKOFF_MS),
            max_workers=data.get("max_workers"),
        )

    def with_overrides(self, **overrides: Any) -> DeletionSettings:
        """Return a copy with every non-None override applied."""
        data = self.to_dict()
        data.update({key: value for key, value in overrides.items() if value is not None})
        return DeletionSettings.from_dict(data)


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _validate_settings(settings: dict[str, Any]) -> list[str]:
    """Validate deletion settings and return list of errors."""
    errors = []

    for key in ("timeout_ms", "backoff_ms"):
        if not _is_positive_int(settings.get(key)):
            errors.append(f"'{key}' must be a positive integer")

    max_workers = settings.get("max_workers")
    if max_workers is not None and not _is_positive_int(max_workers):
        errors.append("'max_workers' must be a positive integer or null")

    return errors


class ConfigManager:
    """Manages application configuration loading, validation, and persistence."""

    def __init__(self, config_path: Path | None = None):
        self.config_path = config_path or CONFIG_FILE
        self._config: dict[str, Any] = {}
        self._ensure_directories()
        self.load()

    def _ensure_directories(self) -> None:
        """Create the configuration directory if it doesn't exist."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

    def _create_default_config(self) -> dict[str, Any]:
        """Generate default configuration."""
        return {
            "version": CONFIG_VERSION,
            "settings": DEFAULT_SETTINGS.copy(),
        }

    def _validate_config(self, config: dict[str, Any]) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if not isinstance(config, dict):
            return ["Configuration must be a JSON object"]

        if not isinstance(config.get("version"), int):
            errors.append("Missing or invalid 'version' field")

        settings = config.get("settings")
        if not isinstance(settings, dict):
            errors.append("Missing or invalid 'settings' field")
        else:
            merged = DEFAULT_SETTINGS.copy()
            merged.update(settings)
            errors.extend(_validate_settings(merged))

        return errors

    def load(self) -> None:
        """Load configuration from file, creating defaults if needed."""
        if not self.config_path.exists():
            logger.info("Config file not found, creating defaults at %s", self.config_path)
            self._config = self._create_default_config()
            self.save()
            return

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                loaded_config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in config file: {e}") from e

        errors = self._validate_config(loaded_config)
        if errors:
            for error in errors:
                logger.error("Config validation error: %s", error)
            raise ConfigError(f"Configuration validation failed: {'; '.join(errors)}")

        self._config = loaded_config
        logger.debug("Configuration loaded from %s", self.config_path)

    def save(self) -> None:
        """Save current configuration to file."""
        with open(self.config_path, "w", encoding="utf-8") as f:
            json.dump(self._config, f, indent=2)
        logger.debug("Configuration saved to %s", self.config_path)

    @property
    def config(self) -> dict[str, Any]:
        """Return a copy of the current configuration."""
        return self._config.copy()

    @property
    def settings(self) -> dict[str, Any]:
        """Return application settings."""
        return self._config.get("settings", {}).copy()

    @property
    def deletion_settings(self) -> DeletionSettings:
        """Return the settings as a DeletionSettings value."""
        return DeletionSettings.from_dict(self.settings)

    def update_settings(self, **kwargs: Any) -> None:
        """Update settings with provided values after validation."""
        merged = DEFAULT_SETTINGS.copy()
        merged.update(self._config.get("settings", {}))
        merged.update(kwargs)
        errors = _validate_settings(merged)
        if errors:
            raise ConfigError(f"Invalid settings: {'; '.join(errors)}")
        self._config.setdefault("settings", {}).update(kwargs)
