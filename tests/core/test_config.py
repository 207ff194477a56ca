"""Tests for configuration management."""

import json

import pytest

from pathsweep.core.config import ConfigManager, ConfigError, DeletionSettings
from pathsweep.core.constants import (
    DEFAULT_SETTINGS,
    DELETION_TIMEOUT_MS,
    DIRECTORY_DELETION_BACKOFF_MS,
)


class TestDeletionSettings:
    """Tests for DeletionSettings value object."""

    def test_defaults(self):
        """Defaults match the documented constants."""
        settings = DeletionSettings()
        assert settings.timeout_ms == DELETION_TIMEOUT_MS == 10000
        assert settings.backoff_ms == DIRECTORY_DELETION_BACKOFF_MS == 500
        assert settings.max_workers is None

    def test_seconds_properties(self):
        """timeout and backoff are exposed in seconds."""
        settings = DeletionSettings(timeout_ms=1500, backoff_ms=250)
        assert settings.timeout == pytest.approx(1.5)
        assert settings.backoff == pytest.approx(0.25)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"timeout_ms": 0},
            {"backoff_ms": -1},
            {"max_workers": 0},
            {"timeout_ms": "fast"},
            {"backoff_ms": True},
        ],
    )
    def test_rejects_invalid_values(self, kwargs):
        """Non-positive or non-integer values are rejected."""
        with pytest.raises(ConfigError, match="Invalid deletion settings"):
            DeletionSettings(**kwargs)

    def test_from_dict_ignores_unknown_keys(self):
        """Unknown keys in a settings dict are ignored."""
        settings = DeletionSettings.from_dict({"timeout_ms": 42, "theme": "dark"})
        assert settings.timeout_ms == 42
        assert settings.backoff_ms == DIRECTORY_DELETION_BACKOFF_MS

    def test_with_overrides_skips_none(self):
        """None overrides keep the current values."""
        settings = DeletionSettings(timeout_ms=1000, backoff_ms=100, max_workers=2)
        updated = settings.with_overrides(timeout_ms=None, backoff_ms=20, max_workers=None)

        assert updated.timeout_ms == 1000
        assert updated.backoff_ms == 20
        assert updated.max_workers == 2

    def test_settings_are_immutable(self):
        """Settings cannot be changed after creation."""
        settings = DeletionSettings()
        with pytest.raises(AttributeError):
            settings.timeout_ms = 1


class TestConfigManager:
    """Tests for ConfigManager class."""

    def test_creates_default_config_on_first_run(self, temp_config_file):
        """ConfigManager creates default config when file doesn't exist."""
        cm = ConfigManager(config_path=temp_config_file)

        assert temp_config_file.exists()
        assert cm.config["version"] == 1
        assert cm.settings == DEFAULT_SETTINGS
        assert cm.deletion_settings == DeletionSettings()

    def test_loads_existing_config(self, temp_config_with_data, valid_config_data):
        """ConfigManager loads existing valid config file."""
        cm = ConfigManager(config_path=temp_config_with_data)

        assert cm.settings == valid_config_data["settings"]
        assert cm.deletion_settings == DeletionSettings(timeout_ms=2000, backoff_ms=100, max_workers=4)

    def test_partial_settings_fall_back_to_defaults(self, temp_config_file):
        """Missing settings keys take their default values."""
        temp_config_file.parent.mkdir(parents=True, exist_ok=True)
        temp_config_file.write_text(json.dumps({"version": 1, "settings": {"backoff_ms": 10}}))

        cm = ConfigManager(config_path=temp_config_file)
        assert cm.deletion_settings.backoff_ms == 10
        assert cm.deletion_settings.timeout_ms == DELETION_TIMEOUT_MS

    def test_save_persists_changes(self, temp_config_file):
        """Changes are persisted after save."""
        cm = ConfigManager(config_path=temp_config_file)
        cm.update_settings(timeout_ms=2500)
        cm.save()

        cm2 = ConfigManager(config_path=temp_config_file)
        assert cm2.settings["timeout_ms"] == 2500

    def test_update_settings_rejects_invalid_values(self, temp_config_file):
        """Invalid setting updates raise and leave settings untouched."""
        cm = ConfigManager(config_path=temp_config_file)

        with pytest.raises(ConfigError, match="Invalid settings"):
            cm.update_settings(backoff_ms=0)
        assert cm.settings["backoff_ms"] == DIRECTORY_DELETION_BACKOFF_MS

    def test_raises_on_invalid_json(self, temp_config_file):
        """ConfigError raised when config contains invalid JSON."""
        temp_config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(temp_config_file, "w") as f:
            f.write("{ invalid json }")

        with pytest.raises(ConfigError, match="Invalid JSON"):
            ConfigManager(config_path=temp_config_file)

    def test_raises_on_missing_version(self, temp_config_file):
        """ConfigError raised when version field is missing."""
        temp_config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(temp_config_file, "w") as f:
            json.dump({"settings": {}}, f)

        with pytest.raises(ConfigError, match="validation failed"):
            ConfigManager(config_path=temp_config_file)

    def test_raises_on_invalid_timeout(self, temp_config_file):
        """ConfigError raised when a timing setting is not positive."""
        temp_config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(temp_config_file, "w") as f:
            json.dump({"version": 1, "settings": {"timeout_ms": -5}}, f)

        with pytest.raises(ConfigError, match="timeout_ms"):
            ConfigManager(config_path=temp_config_file)

    def test_raises_on_non_object(self, temp_config_file):
        """ConfigError raised when the file is not a JSON object."""
        temp_config_file.parent.mkdir(parents=True, exist_ok=True)
        temp_config_file.write_text("[1, 2, 3]")

        with pytest.raises(ConfigError, match="JSON object"):
            ConfigManager(config_path=temp_config_file)
