"""
Privilege guard for state-mutating operations.

Cache refreshes, installs and mirror rewrites call ``check_running_user``
before touching the host; a non-root caller is rejected before any
network or filesystem mutation.
"""

from __future__ import annotations

import logging
import os

from distro_pkg.core.errors import GenericError, InsufficientPrivilegeError
from distro_pkg.core.services.command_check import check_required_commands
from distro_pkg.core.services.subprocess_runner import run_command

logger = logging.getLogger(__name__)

# For querying the current username
_REQUIRED_COMMANDS = ("whoami",)


def check_running_user() -> str:
    """Require the effective user to be the superuser.

    Returns:
        The running user's name, as reported by ``whoami``.

    Raises:
        PrerequisiteError: ``whoami`` is not available.
        InsufficientPrivilegeError: The effective uid is not 0.
        GenericError: The username could not be resolved.
    """
    check_required_commands(_REQUIRED_COMMANDS)

    logger.info("Checking running user...")
    if os.geteuid() != 0:
        logger.error("This program requires to be run as the superuser(root).")
        raise InsufficientPrivilegeError("This program requires to be run as the superuser(root).")

    result = run_command(["whoami"])
    username = result.get("stdout", "").strip()
    if not result["ok"] or not username:
        logger.error("Unable to query the running user's username.")
        raise GenericError(result.get("error") or "whoami returned no username")

    logger.info("The running user is acceptable(%s).", username)
    return username
