"""
Progress banners printed between long-running steps.

    ----------------------------------------------
    Refreshing the package manager local cache...
    ----------------------------------------------
"""

from __future__ import annotations

import logging
import sys
import unicodedata
from typing import TextIO

from distro_pkg.core.errors import FatalConfigurationError

logger = logging.getLogger(__name__)


def display_width(text: str) -> int:
    """Terminal columns occupied by ``text``; wide CJK characters count as two."""
    width = 0
    for char in text:
        if unicodedata.combining(char):
            continue
        width += 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1
    return width


def format_progress(message: str, separator_char: str = "-") -> str:
    """Build the banner for ``message``.

    Raises:
        FatalConfigurationError: ``separator_char`` is not a single character.
    """
    if len(separator_char) != 1:
        msg = "The separator_char parameter only accepts a single character as its argument."
        logger.critical(msg, stacklevel=2)
        raise FatalConfigurationError(msg)

    separator = separator_char * display_width(message)
    return f"\n{separator}\n{message}\n{separator}\n"


def print_progress(message: str, separator_char: str = "-", *, stream: TextIO | None = None) -> None:
    """Write the banner for ``message`` to stdout (or ``stream``)."""
    out = stream or sys.stdout
    out.write(format_progress(message, separator_char))
    out.flush()
