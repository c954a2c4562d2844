"""
Arch-family backend: pacman for queries and installs.

No refresh role: a bare ``pacman -Sy`` without ``-u`` leaves the host
in a partial-upgrade state.
"""

from __future__ import annotations

from distro_pkg.adapters.base import CommandSpec, PackageBackend


class PacmanBackend(PackageBackend):
    @property
    def name(self) -> str:
        return "pacman"

    def query_command(self, packages: list[str]) -> CommandSpec:
        return CommandSpec(argv=["pacman", "-Q", *packages])

    def install_command(
        self,
        packages: list[str],
        *,
        noninteractive: bool = True,
    ) -> CommandSpec:
        argv = ["pacman", "-S"]
        if noninteractive:
            argv.append("--noconfirm")
        return CommandSpec(argv=argv + list(packages))
