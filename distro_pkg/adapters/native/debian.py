"""
Debian-family backends: dpkg for queries, apt-get for install and refresh.
"""

from __future__ import annotations

from distro_pkg.adapters.base import CommandSpec, PackageBackend


class DpkgBackend(PackageBackend):
    """Query installed packages through ``dpkg --status``."""

    @property
    def name(self) -> str:
        return "dpkg"

    def query_command(self, packages: list[str]) -> CommandSpec:
        return CommandSpec(argv=["dpkg", "--status", *packages])


class AptGetBackend(PackageBackend):
    """Install and refresh through ``apt-get``.

    Non-interactive installs set ``DEBIAN_FRONTEND=noninteractive`` on the
    child process only, which silences the debconf frontend prompts.
    """

    @property
    def name(self) -> str:
        return "apt-get"

    def install_command(
        self,
        packages: list[str],
        *,
        noninteractive: bool = True,
    ) -> CommandSpec:
        if not noninteractive:
            return CommandSpec(argv=["apt-get", "install", *packages])
        return CommandSpec(
            argv=["apt-get", "install", "-y", *packages],
            env={"DEBIAN_FRONTEND": "noninteractive"},
        )

    def refresh_command(self) -> CommandSpec:
        return CommandSpec(argv=["apt-get", "update"])
