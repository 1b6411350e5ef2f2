"""
Tests for settings infrastructure.

Tests:
- BaseSettings immutable update pattern and serialization
- AccessSettings validation
- load_settings JSON parsing and error reporting
"""

import json
import os
import tempfile
from pathlib import Path

import pytest

from genutil_pkg.config import (
    DEFAULT_READ_BUFFER_SIZE,
    AccessSettings,
    get_default_settings,
    load_settings,
    resolve_settings,
)
from genutil_pkg.exceptions import ConfigurationError, FileNotFoundError as GenutilFileNotFoundError


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def write_json(path: Path, data) -> Path:
    path.write_text(json.dumps(data))
    return path


class TestAccessSettingsDefaults:
    """Tests for default values."""

    def test_defaults(self):
        """Test default settings values."""
        settings = AccessSettings()
        assert settings.read_buffer_size == DEFAULT_READ_BUFFER_SIZE == 20 * 4096
        assert settings.null_device == os.devnull
        assert settings.xz_tool == "xzcat"
        assert settings.unzip_tool == "unzip"
        assert settings.log_level == "INFO"

    def test_resolve_settings(self):
        """Test that None resolves to the module defaults."""
        custom = AccessSettings(read_buffer_size=10)
        assert resolve_settings(None) is get_default_settings()
        assert resolve_settings(custom) is custom


class TestAccessSettingsValidation:
    """Tests for __post_init__ validation."""

    @pytest.mark.parametrize("size", [0, -1, "4096", 1.5, True])
    def test_invalid_buffer_size(self, size):
        """Test that only positive integers are accepted."""
        with pytest.raises(ConfigurationError, match="read_buffer_size"):
            AccessSettings(read_buffer_size=size)

    @pytest.mark.parametrize("field", ["null_device", "xz_tool", "unzip_tool"])
    def test_empty_strings_rejected(self, field):
        """Test that tool and device names must be non-empty."""
        with pytest.raises(ConfigurationError, match=field):
            AccessSettings(**{field: ""})

    def test_log_level_normalized(self):
        """Test that log levels are upper-cased."""
        assert AccessSettings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        """Test that unknown log levels are rejected."""
        with pytest.raises(ConfigurationError, match="Invalid log_level"):
            AccessSettings(log_level="LOUD")


class TestBaseSettings:
    """Tests for BaseSettings behavior through AccessSettings."""

    def test_update_returns_new_instance(self):
        """Test immutable update."""
        settings = AccessSettings()
        updated = settings.update(read_buffer_size=4096)

        assert updated is not settings
        assert updated.read_buffer_size == 4096
        assert settings.read_buffer_size == DEFAULT_READ_BUFFER_SIZE

    def test_update_validates(self):
        """Test that update() re-runs validation."""
        with pytest.raises(ConfigurationError):
            AccessSettings().update(read_buffer_size=0)

    def test_update_unknown_field(self):
        """Test that typos are rejected."""
        with pytest.raises(ValueError, match="Unknown setting"):
            AccessSettings().update(read_bufer_size=10)

    def test_dict_round_trip(self):
        """Test to_dict()/from_dict()."""
        settings = AccessSettings(unzip_tool="/opt/bin/unzip")
        assert AccessSettings.from_dict(settings.to_dict()) == settings

    def test_from_dict_unknown_field(self):
        """Test that from_dict rejects unknown keys."""
        with pytest.raises(ValueError, match="Allowed settings"):
            AccessSettings.from_dict({"colour": "red"})

    def test_str_and_repr(self):
        """Test printable forms."""
        settings = AccessSettings()
        assert str(settings).startswith("AccessSettings:")
        assert "xz_tool: xzcat" in str(settings)
        assert repr(settings).startswith("AccessSettings(read_buffer_size=81920")


class TestLoadSettings:
    """Tests for load_settings."""

    def test_options_wrapper(self, temp_dir):
        """Test settings nested under "options"."""
        path = write_json(temp_dir / "settings.json", {"options": {"read_buffer_size": 4096, "log_level": "debug"}})

        settings = load_settings(path)

        assert settings.read_buffer_size == 4096
        assert settings.log_level == "DEBUG"
        assert settings.xz_tool == "xzcat"

    def test_flat_object(self, temp_dir):
        """Test settings given as a flat object."""
        path = write_json(temp_dir / "settings.json", {"xz_tool": "unxz-stream"})
        assert load_settings(str(path)).xz_tool == "unxz-stream"

    def test_missing_file(self, temp_dir):
        """Test that a missing settings file raises the package FileNotFoundError."""
        with pytest.raises(GenutilFileNotFoundError, match="Settings file not found") as exc_info:
            load_settings(temp_dir / "missing.json")
        assert not isinstance(exc_info.value, ConfigurationError)

    def test_malformed_json(self, temp_dir):
        """Test that malformed JSON raises ConfigurationError."""
        path = temp_dir / "settings.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            load_settings(path)

    def test_non_object(self, temp_dir):
        """Test that a JSON list is rejected."""
        path = write_json(temp_dir / "settings.json", [1, 2])
        with pytest.raises(ConfigurationError, match="JSON object"):
            load_settings(path)

    def test_options_not_dict(self, temp_dir):
        """Test that "options" must be an object."""
        path = write_json(temp_dir / "settings.json", {"options": "fast"})
        with pytest.raises(ConfigurationError, match="'options' must be a dictionary"):
            load_settings(path)

    def test_unknown_setting(self, temp_dir):
        """Test that unknown keys are reported as ConfigurationError."""
        path = write_json(temp_dir / "settings.json", {"options": {"threads": 4}})
        with pytest.raises(ConfigurationError, match="threads"):
            load_settings(path)

    def test_invalid_value(self, temp_dir):
        """Test that invalid values are reported as ConfigurationError."""
        path = write_json(temp_dir / "settings.json", {"read_buffer_size": -5})
        with pytest.raises(ConfigurationError):
            load_settings(path)
