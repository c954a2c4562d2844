"""
Settings model: every tunable path, threshold and endpoint.

Defaults describe a stock Linux host; a ``distro-pkg.yml`` file only
needs the keys it wants to override.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseModel):
    """Runtime configuration for distro-pkg."""

    # Host identity
    os_release_path: Path = Path("/etc/os-release")

    # Debian staleness heuristic
    apt_archive_cache_dir: Path = Path("/var/cache/apt/archives")
    cache_max_age_seconds: int = Field(default=86400, ge=0)

    # Installer
    noninteractive: bool = True

    # Mirror switching
    ci_env_var: str = "CI"
    ip_lookup_url: str = "https://ipinfo.io/json"
    ubuntu_mirror_url_template: str = "http://{region}.archive.ubuntu.com"
    apt_sources_file: Path = Path("/etc/apt/sources.list")
    apt_sources_file_deb822: Path = Path("/etc/apt/sources.list.d/ubuntu.sources")
    http_timeout_seconds: int = Field(default=10, gt=0)

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    @field_validator("log_level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @field_validator("ubuntu_mirror_url_template")
    @classmethod
    def _has_region_placeholder(cls, value: str) -> str:
        if "{region}" not in value:
            raise ValueError("ubuntu_mirror_url_template must contain '{region}'")
        return value
