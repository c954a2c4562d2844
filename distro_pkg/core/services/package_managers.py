"""
Package manager selector.

Maps a distribution to the native commands its operations need. The
precedence mirrors ``classify_family``: an ``ID_LIKE`` substring match
always wins, and the bare ``ID`` is only consulted when ``ID_LIKE`` is
empty.
"""

from __future__ import annotations

import logging

from distro_pkg.core.errors import UnsupportedDistributionError
from distro_pkg.core.models.distro import (
    PROFILES,
    DistroFamily,
    DistroIdentity,
    PackageManagerProfile,
    classify_family,
)
from distro_pkg.core.services.command_check import (
    check_command_existence,
    command_exists,
)

logger = logging.getLogger(__name__)


def unsupported(distro_id: str, distro_categories: str) -> UnsupportedDistributionError:
    """Log and build the error for a host without a profile."""
    if distro_categories:
        msg = f"Unsupported OS distribution categories: {distro_categories}."
    else:
        msg = f"Unsupported OS distribution: {distro_id}."
    logger.error(msg, stacklevel=2)
    return UnsupportedDistributionError(msg)


def get_profile(identity: DistroIdentity) -> PackageManagerProfile:
    """Return the package-manager profile for ``identity``.

    Raises:
        UnsupportedDistributionError: The family is unknown.
    """
    profile = PROFILES.get(identity.family)
    if profile is None:
        raise unsupported(identity.id, identity.categories)
    return profile


def determine_required_commands(distro_id: str, distro_categories: str) -> list[str]:
    """Ordered list of commands the host's package operations require.

    ``debian`` -> dpkg, apt-get; ``rhel`` -> rpm plus dnf (or yum when
    dnf is absent); empty categories with id ``arch`` -> pacman.

    Raises:
        UnsupportedDistributionError: No profile matches.
    """
    family = classify_family(distro_id, distro_categories)
    profile = PROFILES.get(family)
    if profile is None:
        raise unsupported(distro_id, distro_categories)

    required = list(profile.required_commands)
    if family is DistroFamily.REDHAT:
        required.append("dnf" if command_exists("dnf") else "yum")
    return required


def check_distro_specific_required_commands(distro_id: str, distro_categories: str) -> list[str]:
    """Require every command the host's package operations need.

    Returns:
        The commands that were checked.

    Raises:
        UnsupportedDistributionError: No profile matches.
        NotFoundError: A required command is missing.
    """
    required = determine_required_commands(distro_id, distro_categories)
    for command in required:
        check_command_existence(command)
    return required
