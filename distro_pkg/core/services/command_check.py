"""
Command availability checks.

Read-only probes of the command search path. Nothing here runs the
commands it looks for.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable

from distro_pkg.core.errors import NotFoundError, PrerequisiteError

logger = logging.getLogger(__name__)


def command_exists(command: str) -> bool:
    """Whether ``command`` resolves on PATH. Silent."""
    return shutil.which(command) is not None


def check_command_existence(command: str) -> None:
    """Require ``command`` to be on PATH.

    Raises:
        NotFoundError: The command is not found; the diagnostic names it.
    """
    if not command_exists(command):
        logger.error(
            'The "%s" command is required but not found in your command search PATHs.',
            command,
        )
        raise NotFoundError(command)


def check_required_commands(commands: Iterable[str]) -> None:
    """Require every command, reporting all missing ones before failing.

    Raises:
        PrerequisiteError: At least one command is missing.
    """
    missing = []
    for command in commands:
        if not command_exists(command):
            logger.error(
                'This function requires the "%s" command to be available '
                "in your command search PATHs.",
                command,
            )
            missing.append(command)

    if missing:
        logger.error("Required command check failed.")
        raise PrerequisiteError(f"Missing required commands: {', '.join(missing)}")
