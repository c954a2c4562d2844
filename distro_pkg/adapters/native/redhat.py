"""
RHEL-family backends: rpm for queries, dnf (or legacy yum) for
install and cache refresh.
"""

from __future__ import annotations

from distro_pkg.adapters.base import CommandSpec, PackageBackend


class RpmBackend(PackageBackend):
    """Query installed packages through ``rpm --query``."""

    @property
    def name(self) -> str:
        return "rpm"

    def query_command(self, packages: list[str]) -> CommandSpec:
        return CommandSpec(argv=["rpm", "--query", *packages])


class _YumLikeBackend(PackageBackend):
    """dnf and yum share their command-line surface."""

    def install_command(
        self,
        packages: list[str],
        *,
        noninteractive: bool = True,
    ) -> CommandSpec:
        argv = [self.name, "install"]
        if noninteractive:
            argv.append("-y")
        return CommandSpec(argv=argv + list(packages))

    def refresh_command(self) -> CommandSpec:
        return CommandSpec(argv=[self.name, "makecache"])


class DnfBackend(_YumLikeBackend):
    @property
    def name(self) -> str:
        return "dnf"


class YumBackend(_YumLikeBackend):
    @property
    def name(self) -> str:
        return "yum"
