"""
Package query service.

Read-only: asks the native tool whether every package in a set is
installed, in one bulk invocation. Installed/not-installed is decided by
the tool's exit status alone; held or half-configured states count as
whatever the tool reports.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from distro_pkg.adapters.registry import BackendRegistry, get_registry
from distro_pkg.core.errors import DistroPkgError, GenericError
from distro_pkg.core.models.distro import DistroIdentity
from distro_pkg.core.services.distro_identity import resolve_distro_identity
from distro_pkg.core.services.package_managers import get_profile
from distro_pkg.core.services.subprocess_runner import run_command

logger = logging.getLogger(__name__)


def normalize_packages(packages: Iterable[str]) -> list[str]:
    """Drop blanks and duplicates, keeping first-seen order."""
    seen: dict[str, None] = {}
    for name in packages:
        name = name.strip()
        if name:
            seen.setdefault(name, None)
    return list(seen)


def check_packages_installed(
    packages: Iterable[str],
    package_manager: str,
    *,
    registry: BackendRegistry | None = None,
) -> bool:
    """Whether every package is installed according to ``package_manager``.

    Args:
        packages: Package names (distro naming).
        package_manager: Query backend: ``pacman``, ``dpkg`` or ``rpm``.

    Returns:
        True if all are installed (or the set is empty), else False.

    Raises:
        GenericError: The package manager has no query role.
    """
    pkgs = normalize_packages(packages)
    if not pkgs:
        return True

    backend = (registry or get_registry()).get(package_manager)
    spec = backend.query_command(pkgs) if backend else None
    if spec is None:
        logger.error("Unsupported package manager: %s.", package_manager)
        raise GenericError(f"Unsupported package manager: {package_manager}")

    result = run_command(spec.argv, env_overrides=spec.env or None)
    if not result["ok"]:
        logger.debug(
            "%s reports missing packages among: %s", package_manager, ", ".join(pkgs),
        )
        return False
    return True


def check_distro_packages_installed(
    packages: Iterable[str],
    *,
    identity: DistroIdentity | None = None,
    registry: BackendRegistry | None = None,
) -> bool:
    """Distribution-agnostic ``check_packages_installed``.

    Raises:
        GenericError: The host distribution could not be determined.
        UnsupportedDistributionError: The host has no profile.
    """
    pkgs = normalize_packages(packages)
    if not pkgs:
        return True

    if identity is None:
        try:
            identity = resolve_distro_identity()
        except DistroPkgError as e:
            logger.error("Unable to determine the OS distribution identifier.")
            raise GenericError("Unable to determine the OS distribution") from e

    profile = get_profile(identity)
    return check_packages_installed(pkgs, profile.query_backend, registry=registry)
