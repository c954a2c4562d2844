"""
Shared test fixtures and configuration.

No test runs a real package manager: external commands go through
``FakeRunner``, ``shutil.which`` answers from the ``on_path`` set, and
the effective uid is pinned by ``as_root`` / ``as_user``.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from distro_pkg.core import context
from distro_pkg.core.config.settings import Settings
from distro_pkg.core.services import (
    cache_refresh,
    mirror_switch,
    package_install,
    package_query,
    privilege,
)


@dataclass
class Call:
    argv: list[str]
    env: dict[str, str]
    capture_output: bool


@dataclass
class FakeRunner:
    """Stand-in for ``run_command`` that records every invocation.

    ``failing`` holds command prefixes ("dnf" or "dnf install") whose
    invocations exit 1.
    """

    calls: list[Call] = field(default_factory=list)
    failing: set[str] = field(default_factory=set)
    stdout: dict[str, str] = field(default_factory=lambda: {"whoami": "root\n"})

    def __call__(self, cmd, *, env_overrides=None, capture_output=True, timeout=None):
        self.calls.append(Call(list(cmd), dict(env_overrides or {}), capture_output))
        if cmd[0] in self.failing or " ".join(cmd[:2]) in self.failing:
            return {
                "ok": False,
                "returncode": 1,
                "error": "Command failed (exit 1)",
                "stderr": "",
                "stdout": "",
                "elapsed_ms": 0,
            }
        return {
            "ok": True,
            "returncode": 0,
            "stdout": self.stdout.get(cmd[0], ""),
            "elapsed_ms": 0,
        }

    @property
    def argvs(self) -> list[list[str]]:
        return [c.argv for c in self.calls]

    def ran(self, *argv: str) -> bool:
        return list(argv) in self.argvs


@pytest.fixture
def fake_runner(monkeypatch) -> FakeRunner:
    runner = FakeRunner()
    for module in (privilege, package_query, package_install, cache_refresh, mirror_switch):
        monkeypatch.setattr(module, "run_command", runner)
    return runner


@pytest.fixture
def on_path(monkeypatch) -> set[str]:
    """Commands visible to ``shutil.which``; add to the set to install one."""
    available = {"whoami"}
    monkeypatch.setattr(
        "shutil.which",
        lambda cmd, *a, **kw: f"/usr/bin/{cmd}" if cmd in available else None,
    )
    return available


@pytest.fixture
def as_root(monkeypatch):
    monkeypatch.setattr("os.geteuid", lambda: 0)


@pytest.fixture
def as_user(monkeypatch):
    monkeypatch.setattr("os.geteuid", lambda: 1000)


@pytest.fixture(autouse=True)
def settings(tmp_path: Path, monkeypatch) -> Settings:
    """Settings whose every host path lives under ``tmp_path``."""
    monkeypatch.delenv("DISTRO_PKG_CONFIG", raising=False)
    monkeypatch.delenv("DISTRO_PKG_LOG_LEVEL", raising=False)
    monkeypatch.delenv("DISTRO_PKG_LOG_FILE", raising=False)
    monkeypatch.delenv("CI", raising=False)

    archives = tmp_path / "var" / "cache" / "apt" / "archives"
    archives.mkdir(parents=True)
    apt_dir = tmp_path / "etc" / "apt"
    (apt_dir / "sources.list.d").mkdir(parents=True)

    s = Settings(
        os_release_path=tmp_path / "etc" / "os-release",
        apt_archive_cache_dir=archives,
        apt_sources_file=apt_dir / "sources.list",
        apt_sources_file_deb822=apt_dir / "sources.list.d" / "ubuntu.sources",
    )
    context.set_settings(s)
    yield s
    context.set_settings(None)


@pytest.fixture
def os_release(settings: Settings):
    """Write os-release content for the current test."""

    def _write(text: str) -> Path:
        settings.os_release_path.write_text(text)
        return settings.os_release_path

    return _write


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """CLI tests call setup_logging(); undo it after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
