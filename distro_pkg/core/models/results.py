"""
Operation results returned by the mutating services.

Failures are never represented here; they are raised as
``distro_pkg.core.errors`` exceptions.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class CacheRefreshResult(BaseModel):
    """Outcome of a package index refresh."""

    backend: str
    status: Literal["refreshed", "skipped"] = "refreshed"
    age_seconds: int | None = None  # Debian staleness check only

    @property
    def skipped(self) -> bool:
        return self.status == "skipped"

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()


class InstallResult(BaseModel):
    """Outcome of a package installation."""

    backend: str | None = None
    packages: list[str] = Field(default_factory=list)
    status: Literal["installed", "noop"] = "installed"

    @classmethod
    def noop(cls) -> InstallResult:
        return cls(status="noop")

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()


class MirrorSwitchResult(BaseModel):
    """Outcome of the Ubuntu local mirror switch."""

    status: Literal["switched", "unchanged", "skipped"]
    region: str | None = None
    sources_file: str | None = None
    reason: str = ""

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()
