"""
Backend base: the contract between services and native package tools.

Services never assemble package-manager argv themselves; they ask a
backend for a ``CommandSpec`` and hand it to the subprocess runner.

A backend covers up to three roles. A role it does not serve returns
None from the matching ``*_command`` method:

    query    - are these packages installed?       (dpkg, rpm, pacman)
    install  - install these packages, no prompts  (apt-get, dnf, yum, pacman)
    refresh  - refresh the local package index     (apt-get, dnf, yum)
"""

from __future__ import annotations

import shutil
from abc import ABC, abstractmethod

from pydantic import BaseModel, Field


class CommandSpec(BaseModel):
    """One external invocation: argv plus per-invocation env overrides."""

    argv: list[str]
    env: dict[str, str] = Field(default_factory=dict)

    def __str__(self) -> str:
        prefix = " ".join(f"{k}={v}" for k, v in self.env.items())
        cmd = " ".join(self.argv)
        return f"{prefix} {cmd}" if prefix else cmd


class PackageBackend(ABC):
    """Abstract base class for native package tools.

    To add a backend:
        1. Subclass PackageBackend
        2. Implement name and whichever *_command roles the tool serves
        3. Register it in the BackendRegistry
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The backend identifier, also the selector callers pass in."""

    @property
    def executable(self) -> str:
        """Executable looked up on PATH (defaults to the name)."""
        return self.name

    def is_available(self) -> bool:
        """Whether the underlying tool is on the search path."""
        return shutil.which(self.executable) is not None

    def query_command(self, packages: list[str]) -> CommandSpec | None:
        return None

    def install_command(
        self,
        packages: list[str],
        *,
        noninteractive: bool = True,
    ) -> CommandSpec | None:
        return None

    def refresh_command(self) -> CommandSpec | None:
        return None

    @property
    def roles(self) -> list[str]:
        """Roles this backend serves, probed with a placeholder package."""
        probe = ["_"]
        roles = []
        if self.query_command(probe) is not None:
            roles.append("query")
        if self.install_command(probe) is not None:
            roles.append("install")
        if self.refresh_command() is not None:
            roles.append("refresh")
        return roles

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
