"""
Package index refresh.

RHEL-family hosts refresh unconditionally (``dnf makecache``, falling
back to ``yum makecache``). Debian-family hosts only run ``apt-get
update`` when the APT archive cache directory is older than
``cache_max_age_seconds``; the directory's mtime is the freshness
marker, and it is stamped after every successful refresh.
"""

from __future__ import annotations

import logging
import os
import time
from typing import TextIO

from distro_pkg.adapters.registry import BackendRegistry, get_registry
from distro_pkg.core.context import get_settings
from distro_pkg.core.errors import (
    DistroPkgError,
    FatalConfigurationError,
    GenericError,
)
from distro_pkg.core.models.distro import DistroFamily, DistroIdentity
from distro_pkg.core.models.results import CacheRefreshResult
from distro_pkg.core.services.command_check import command_exists
from distro_pkg.core.services.distro_identity import resolve_distro_identity
from distro_pkg.core.services.package_managers import (
    check_distro_specific_required_commands,
)
from distro_pkg.core.services.privilege import check_running_user
from distro_pkg.core.services.progress import print_progress
from distro_pkg.core.services.subprocess_runner import run_command

logger = logging.getLogger(__name__)


def _refresh_with(backend_name: str, label: str, registry: BackendRegistry | None) -> bool:
    if not command_exists(backend_name):
        return False

    backend = (registry or get_registry()).get(backend_name)
    spec = backend.refresh_command() if backend else None
    if spec is None:
        raise GenericError(f"{backend_name} cannot refresh a package index")

    result = run_command(spec.argv, env_overrides=spec.env or None, capture_output=False)
    if not result["ok"]:
        logger.error("Unable to refresh the %s local cache.", label, stacklevel=2)
        raise GenericError(f"Unable to refresh the {label} local cache: {result['error']}")
    return True


def refresh_dnf_local_cache(*, registry: BackendRegistry | None = None) -> bool:
    """Run ``dnf makecache``.

    Returns:
        False if dnf is not installed, True once the cache is refreshed.

    Raises:
        GenericError: dnf exited non-zero.
    """
    return _refresh_with("dnf", "DNF", registry)


def refresh_yum_local_cache(*, registry: BackendRegistry | None = None) -> bool:
    """Run ``yum makecache``; same contract as ``refresh_dnf_local_cache``."""
    return _refresh_with("yum", "YUM", registry)


def _guard_running_user() -> None:
    try:
        check_running_user()
    except DistroPkgError:
        logger.error("The running user check has failed.", stacklevel=2)
        raise


def refresh_redhat_local_cache(*, registry: BackendRegistry | None = None) -> CacheRefreshResult:
    """Refresh the RHEL package index with dnf, or yum when dnf is unusable.

    Raises:
        PrerequisiteError / InsufficientPrivilegeError: Privilege guard failed.
        GenericError: Neither dnf nor yum refreshed the cache.
    """
    _guard_running_user()

    try:
        if refresh_dnf_local_cache(registry=registry):
            return CacheRefreshResult(backend="dnf")
    except GenericError:
        logger.debug("dnf makecache failed, trying yum")

    try:
        if refresh_yum_local_cache(registry=registry):
            return CacheRefreshResult(backend="yum")
    except GenericError:
        logger.debug("yum makecache failed")

    logger.error("No suitable package manager commands are found.")
    raise GenericError("No suitable package manager commands are found.")


def get_apt_archive_cache_mtime() -> int:
    """Epoch mtime of the APT archive cache directory.

    Raises:
        GenericError: The directory could not be stat'ed.
    """
    cache_dir = get_settings().apt_archive_cache_dir
    try:
        return int(os.stat(cache_dir).st_mtime)
    except OSError as e:
        logger.error(
            "Unable to query the modification time of the APT software sources cache directory(%s).",
            cache_dir,
        )
        raise GenericError(f"Unable to stat {cache_dir}: {e}") from e


def refresh_debian_local_cache(
    now: float | None = None,
    *,
    registry: BackendRegistry | None = None,
) -> CacheRefreshResult:
    """Run ``apt-get update`` unless the index was refreshed recently.

    Args:
        now: Current epoch time; defaults to ``time.time()``.

    Raises:
        PrerequisiteError / InsufficientPrivilegeError: Privilege guard failed.
        GenericError: The cache mtime is unreadable or apt-get failed.
    """
    _guard_running_user()

    settings = get_settings()
    if now is None:
        now = time.time()
    age = int(now) - get_apt_archive_cache_mtime()

    if age < settings.cache_max_age_seconds:
        logger.info("The last refresh time is less than 1 day, skipping...")
        return CacheRefreshResult(backend="apt-get", status="skipped", age_seconds=age)

    logger.info("Refreshing the APT local package cache...")
    backend = (registry or get_registry()).get("apt-get")
    spec = backend.refresh_command() if backend else None
    if spec is None:
        logger.error("Unsupported package manager: apt-get.")
        raise GenericError("apt-get cannot refresh a package index")
    result = run_command(spec.argv, env_overrides=spec.env or None, capture_output=False)
    if not result["ok"]:
        logger.error("Unable to refresh the APT local package cache.")
        raise GenericError(f"apt-get update failed: {result['error']}")

    try:
        os.utime(settings.apt_archive_cache_dir, (now, now))
    except OSError as e:
        logger.warning(
            "Unable to update the modification time of %s: %s",
            settings.apt_archive_cache_dir, e,
        )

    return CacheRefreshResult(backend="apt-get", age_seconds=age)


def refresh_package_manager_local_cache(
    identity: DistroIdentity | None = None,
    *,
    registry: BackendRegistry | None = None,
    progress_stream: TextIO | None = None,
) -> CacheRefreshResult:
    """Refresh the host's package index through its native tool.

    The progress banner goes to ``progress_stream`` (default stdout).

    Raises:
        GenericError: The distribution could not be determined, or the
            refresh failed.
        UnsupportedDistributionError / PrerequisiteError: Required
            commands are unknown or missing.
        FatalConfigurationError: The family has no refresh path (exit 99).
    """
    print_progress("Refreshing the package manager local cache...", stream=progress_stream)

    if identity is None:
        try:
            identity = resolve_distro_identity()
        except DistroPkgError as e:
            logger.error("Unable to determine the OS distribution identifier.")
            raise GenericError("Unable to determine the OS distribution") from e

    try:
        check_distro_specific_required_commands(identity.id, identity.categories)
    except DistroPkgError:
        logger.error("Package manager command check failed.")
        raise

    if identity.family is DistroFamily.REDHAT:
        try:
            return refresh_redhat_local_cache(registry=registry)
        except GenericError:
            logger.error("Unable to refresh the RedHat software management system's local cache.")
            raise
    if identity.family is DistroFamily.DEBIAN:
        try:
            return refresh_debian_local_cache(registry=registry)
        except GenericError:
            logger.error("Unable to refresh the Debian software management system's local cache.")
            raise

    msg = f'The OS distribution "{identity.id}" is not supported for cache refresh.'
    logger.critical(msg)
    raise FatalConfigurationError(msg)
