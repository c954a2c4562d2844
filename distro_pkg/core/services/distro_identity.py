"""
Distribution identity resolver.

Reads the os-release file with an explicit ``KEY=value`` parser. The
file is never sourced or executed; values follow shell quoting rules,
which ``shlex`` handles without expansion.
"""

from __future__ import annotations

import logging
import re
import shlex
from pathlib import Path

from distro_pkg.core.context import get_settings
from distro_pkg.core.errors import GenericError, PrerequisiteError
from distro_pkg.core.models.distro import DistroIdentity

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def parse_os_release(text: str) -> dict[str, str]:
    """Parse os-release content into a plain mapping.

    Blank lines and ``#`` comments are skipped.  Each remaining line must
    be ``KEY=value`` where value is a single (optionally quoted) shell
    word.

    Raises:
        ValueError: On the first line that does not follow that shape.
    """
    data: dict[str, str] = {}
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        key, sep, value = line.partition("=")
        if not sep or not _KEY_RE.match(key):
            raise ValueError(f"line {lineno}: expected KEY=value, got {raw!r}")

        try:
            words = shlex.split(value, comments=False, posix=True)
        except ValueError as e:
            raise ValueError(f"line {lineno}: {e}") from e

        if len(words) > 1:
            raise ValueError(f"line {lineno}: unquoted whitespace in value of {key}")
        data[key] = words[0] if words else ""
    return data


def load_os_release(path: Path | None = None) -> dict[str, str]:
    """Load and parse the os-release file.

    Raises:
        PrerequisiteError: The file is missing, unreadable or malformed.
    """
    path = path or get_settings().os_release_path
    try:
        return parse_os_release(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValueError) as e:
        logger.error("Unable to load the operating system information file(%s): %s", path, e)
        raise PrerequisiteError(
            f"Unable to load the operating system information file: {path}"
        ) from e


def get_distro_identifier(path: Path | None = None) -> str:
    """Return the distribution ``ID`` (e.g. ``ubuntu``, ``arch``).

    Raises:
        PrerequisiteError: The os-release file cannot be loaded.
        GenericError: The file has no ``ID`` assignment.
    """
    path = path or get_settings().os_release_path
    return _identifier_from(load_os_release(path), path)


def get_distro_categories(path: Path | None = None) -> str:
    """Return ``ID_LIKE``, or an empty string when the file has none.

    Arch Linux ships no ``ID_LIKE`` at all.

    Raises:
        PrerequisiteError: The os-release file cannot be loaded.
    """
    return load_os_release(path).get("ID_LIKE", "")


def resolve_distro_identity(path: Path | None = None) -> DistroIdentity:
    """Read the host identity once and derive its family."""
    path = path or get_settings().os_release_path
    info = load_os_release(path)

    identity = DistroIdentity(
        id=_identifier_from(info, path),
        categories=info.get("ID_LIKE", ""),
    )
    logger.debug(
        "Resolved distribution id=%s categories=%r family=%s",
        identity.id, identity.categories, identity.family.value,
    )
    return identity


def _identifier_from(info: dict[str, str], path: Path) -> str:
    distro_id = info.get("ID", "")
    if not distro_id:
        logger.error(
            "The ID variable assignment not found from the operating system information file(%s).",
            path,
        )
        raise GenericError(f"No ID assignment in {path}")
    return distro_id
