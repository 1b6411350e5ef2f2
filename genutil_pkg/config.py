"""
Settings for file resolution and stream access.

Main Components:
    - AccessSettings: tunables shared by the resolver and the stream openers
    - load_settings: JSON settings-file parser
    - get_default_settings: module-wide defaults used when callers pass None

Example settings file:

.. code-block:: json

    {
      "options": {
        "read_buffer_size": 65536,
        "xz_tool": "xzcat",
        "log_level": "DEBUG"
      }
    }

A flat object without the "options" wrapper is accepted too.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from genutil_pkg.utils.settings import BaseSettings
from genutil_pkg.logger import get_logger, setup_logging
from genutil_pkg.exceptions import (
    ConfigurationError,
    FileNotFoundError as GenutilFileNotFoundError
)

DEFAULT_READ_BUFFER_SIZE = 20 * 4096
VALID_LOG_LEVELS = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}


@dataclass
class AccessSettings(BaseSettings):
    """
    Settings for resolving and opening files.

    Attributes:
        read_buffer_size: Buffer size in bytes of the readers returned by open_any
        null_device: Path reported for files that could not be resolved
        xz_tool: Executable that writes a decompressed .xz file to stdout
        unzip_tool: Executable that extracts zip entries (called with -p)
        log_level: Console level used by setup_logging_from_settings
    """
    read_buffer_size: int = DEFAULT_READ_BUFFER_SIZE
    null_device: str = os.devnull
    xz_tool: str = "xzcat"
    unzip_tool: str = "unzip"
    log_level: str = "INFO"

    def __post_init__(self):
        if not isinstance(self.read_buffer_size, int) or isinstance(self.read_buffer_size, bool) \
                or self.read_buffer_size <= 0:
            raise ConfigurationError(
                f"'read_buffer_size' must be a positive integer, got {self.read_buffer_size!r}"
            )
        for name in ('null_device', 'xz_tool', 'unzip_tool'):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise ConfigurationError(f"'{name}' must be a non-empty string, got {value!r}")
        if str(self.log_level).upper() not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log_level '{self.log_level}'. "
                f"Must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}"
            )
        self.log_level = str(self.log_level).upper()


_DEFAULT_SETTINGS = AccessSettings()


def get_default_settings() -> AccessSettings:
    """Return the settings used when a function receives ``settings=None``."""
    return _DEFAULT_SETTINGS


def resolve_settings(settings: Optional[AccessSettings]) -> AccessSettings:
    return settings if settings is not None else _DEFAULT_SETTINGS


def load_settings(config_path: Union[str, Path]) -> AccessSettings:
    """
    Load and validate AccessSettings from a JSON file.

    Args:
        config_path: Path to the settings file

    Returns:
        Validated AccessSettings

    Raises:
        FileNotFoundError: If the settings file doesn't exist (package exception)
        ConfigurationError: If the JSON is malformed or holds invalid settings
    """
    logger = get_logger()
    logger.info(f"Loading settings from: {config_path}")

    config_file = Path(config_path)
    if not config_file.exists():
        error_msg = f"Settings file not found: {config_path}"
        logger.error(error_msg)
        raise GenutilFileNotFoundError(error_msg)

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        error_msg = f"Invalid JSON in settings file: {e}"
        logger.error(error_msg)
        raise ConfigurationError(error_msg) from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file must hold a JSON object, got {type(data).__name__}")

    options = data.get('options', data)
    if not isinstance(options, dict):
        raise ConfigurationError("'options' must be a dictionary")

    try:
        settings = AccessSettings.from_dict(options)
    except (ValueError, TypeError) as e:
        error_msg = f"Settings validation failed: {e}"
        logger.error(error_msg)
        raise ConfigurationError(error_msg) from e

    logger.debug("Settings loaded", **settings.to_dict())
    return settings


def setup_logging_from_settings(settings: Optional[AccessSettings] = None, log_file: Optional[Path] = None):
    """Set up package logging at the level named by ``settings.log_level``."""
    return setup_logging(resolve_settings(settings).log_level, log_file)
