"""
Configuration loader: reads distro-pkg.yml into a Settings model.

Lookup order:
    explicit path (--config)  >  DISTRO_PKG_CONFIG  >  distro-pkg.yml
    found walking up from the cwd  >  built-in defaults

A missing file is only an error when it was named explicitly.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from distro_pkg.core.config.settings import Settings

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "distro-pkg.yml"
CONFIG_ENV_VAR = "DISTRO_PKG_CONFIG"


class ConfigError(Exception):
    """Raised when the configuration file is invalid or missing."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Nearest distro-pkg.yml in ``start_dir`` (default: cwd) or any parent."""
    start = (start_dir or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILE
        if candidate.is_file():
            return candidate
    return None


def load_settings(path: Path | None = None) -> Settings:
    """Load and validate settings.

    Args:
        path: Explicit path to a config file. If None, consults
            DISTRO_PKG_CONFIG and then searches upward from the cwd.

    Returns:
        Validated Settings model (defaults when no file is found).

    Raises:
        ConfigError: If an explicitly named file is missing, or any
            file found is unreadable or invalid.
    """
    explicit = path is not None
    if path is None and os.environ.get(CONFIG_ENV_VAR):
        path = Path(os.environ[CONFIG_ENV_VAR])
        explicit = True
    if path is None:
        path = find_config_file()

    if path is None:
        logger.debug("No %s found, using defaults", CONFIG_FILE)
        return Settings()

    if not path.is_file():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        return Settings()

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return Settings()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The file may nest everything under a "distro_pkg" key or be flat
    settings_data = data.get("distro_pkg", data)

    try:
        return Settings.model_validate(settings_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e
