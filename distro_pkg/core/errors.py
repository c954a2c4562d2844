"""
Error taxonomy for package-management operations.

Every service logs its own diagnostic and then raises one of these.
The CLI maps them onto process exit codes via ``exit_code``.

    PrerequisiteError            1   missing command/file, nothing mutated
    NotFoundError                1   a specific named command is absent
    GenericError                 2   failed external command, parse failure
    UnsupportedDistributionError 2   no package-manager profile matches
    InsufficientPrivilegeError   3   caller is not the superuser
    FatalConfigurationError      99  programming error, terminates process
"""

from __future__ import annotations

FATAL_EXIT_CODE = 99


class DistroPkgError(Exception):
    """Base class for all recoverable distro-pkg failures."""

    exit_code: int = 2


class PrerequisiteError(DistroPkgError):
    """A required command or input file is missing."""

    exit_code = 1


class NotFoundError(PrerequisiteError):
    """A named command could not be found in the search path."""

    def __init__(self, command: str):
        super().__init__(
            f'The "{command}" command is required but not found '
            "in your command search PATHs."
        )
        self.command = command


class GenericError(DistroPkgError):
    """Failed external command, parse failure or unexpected missing field."""

    exit_code = 2


class UnsupportedDistributionError(DistroPkgError):
    """The host does not match any known package-manager profile."""

    exit_code = 2


class InsufficientPrivilegeError(DistroPkgError, PermissionError):
    """The effective user is not the superuser."""

    exit_code = 3


class FatalConfigurationError(SystemExit):
    """A configuration cascade hit a case that can only be a programming error.

    Subclasses ``SystemExit`` so an uncaught instance terminates the
    process with ``FATAL_EXIT_CODE`` instead of being handled like a
    runtime condition.
    """

    def __init__(self, message: str):
        super().__init__(FATAL_EXIT_CODE)
        self.message = message

    def __str__(self) -> str:
        return self.message
