"""
Package installer.

Installs a package set through one native tool, non-interactively and
auto-confirming. Nothing is rolled back: a failure partway through
leaves the host as the tool left it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from distro_pkg.adapters.base import CommandSpec
from distro_pkg.adapters.registry import BackendRegistry, get_registry
from distro_pkg.core.context import get_settings
from distro_pkg.core.errors import DistroPkgError, GenericError
from distro_pkg.core.models.distro import DistroIdentity
from distro_pkg.core.models.results import InstallResult
from distro_pkg.core.services.distro_identity import resolve_distro_identity
from distro_pkg.core.services.package_managers import get_profile
from distro_pkg.core.services.package_query import normalize_packages
from distro_pkg.core.services.privilege import check_running_user
from distro_pkg.core.services.subprocess_runner import run_command

logger = logging.getLogger(__name__)


def build_install_command(
    packages: list[str],
    package_manager: str,
    *,
    noninteractive: bool = True,
    registry: BackendRegistry | None = None,
) -> CommandSpec:
    """Build the install invocation for ``package_manager``.

    Environment overrides (``DEBIAN_FRONTEND`` for apt-get) travel in the
    returned spec and apply to that child process only.

    Raises:
        GenericError: The package manager has no install role.
    """
    backend = (registry or get_registry()).get(package_manager)
    spec = backend.install_command(packages, noninteractive=noninteractive) if backend else None
    if spec is None:
        logger.error("Unsupported package manager: %s.", package_manager, stacklevel=2)
        raise GenericError(f"Unsupported package manager: {package_manager}")
    return spec


def install_packages(
    packages: Iterable[str],
    package_manager: str,
    *,
    noninteractive: bool | None = None,
    registry: BackendRegistry | None = None,
) -> InstallResult:
    """Install ``packages`` with ``package_manager``.

    Args:
        packages: Package names (distro naming).
        package_manager: ``apt-get``, ``dnf``, ``yum`` or ``pacman``.
        noninteractive: Suppress prompts; defaults to the configured value.

    Raises:
        GenericError: Unsupported package manager, or the install failed.
    """
    pkgs = normalize_packages(packages)
    if not pkgs:
        return InstallResult.noop()

    result = _run_install(pkgs, package_manager, noninteractive, registry)
    if not result["ok"]:
        logger.error(
            "Unable to install packages(%s) with %s: %s",
            ", ".join(pkgs), package_manager, result["error"],
        )
        raise GenericError(f"{package_manager} failed to install {', '.join(pkgs)}")

    return InstallResult(backend=package_manager, packages=pkgs)


def _run_install(
    pkgs: list[str],
    package_manager: str,
    noninteractive: bool | None,
    registry: BackendRegistry | None,
) -> dict:
    if noninteractive is None:
        noninteractive = get_settings().noninteractive

    spec = build_install_command(
        pkgs, package_manager, noninteractive=noninteractive, registry=registry,
    )
    logger.debug("Installing via %s: %s", package_manager, spec)
    return run_command(spec.argv, env_overrides=spec.env or None, capture_output=False)


def install_distro_packages(
    packages: Iterable[str],
    *,
    identity: DistroIdentity | None = None,
    noninteractive: bool | None = None,
    registry: BackendRegistry | None = None,
) -> InstallResult:
    """Distribution-agnostic ``install_packages``.

    RHEL-family hosts try dnf and fall back to yum without reporting the
    dnf failure; only both failing is an error.

    Raises:
        PrerequisiteError / InsufficientPrivilegeError: Privilege guard failed.
        GenericError: Distribution undetermined, or the install failed.
        UnsupportedDistributionError: The host has no profile.
    """
    pkgs = normalize_packages(packages)
    if not pkgs:
        return InstallResult.noop()

    try:
        check_running_user()
    except DistroPkgError:
        logger.error("The running user check has failed.")
        raise

    if identity is None:
        try:
            identity = resolve_distro_identity()
        except DistroPkgError as e:
            logger.error("Unable to determine the OS distribution identifier.")
            raise GenericError("Unable to determine the OS distribution") from e

    profile = get_profile(identity)

    failures: list[str] = []
    for package_manager in profile.install_backends:
        result = _run_install(pkgs, package_manager, noninteractive, registry)
        if result["ok"]:
            return InstallResult(backend=package_manager, packages=pkgs)
        logger.debug("%s install attempt failed: %s", package_manager, result["error"])
        failures.append(package_manager)

    logger.error(
        "Unable to install packages(%s) with %s.", ", ".join(pkgs), " or ".join(failures),
    )
    raise GenericError(f"Unable to install packages: {', '.join(pkgs)}")
