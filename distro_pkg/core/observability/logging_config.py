"""
Process-wide logging setup.

``setup_logging`` runs once, from the CLI group callback; modules only
ever call ``logging.getLogger(__name__)``.

Console lines name the operation that emitted them and tag the severity::

    refresh_debian_local_cache: Info: The last refresh time is less than 1 day, skipping...
    check_running_user: Error: This program requires to be run as the superuser(root).

Level precedence (resolved by the caller):
    CLI flag  >  DISTRO_PKG_LOG_LEVEL  >  config file  >  INFO
"""

from __future__ import annotations

import logging
import sys

DEFAULT_LEVEL = logging.INFO

# ── Line formats ────────────────────────────────────────────────

CONSOLE_FORMAT = "%(funcName)s: %(severity)s: %(message)s"
# At DEBUG the console also shows time and source location
CONSOLE_DEBUG_FORMAT = "%(asctime)s %(name)s:%(lineno)d %(funcName)s: %(severity)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s:%(lineno)d %(funcName)s: %(message)s"

_SEVERITY_TAGS = {
    logging.DEBUG: "Debug",
    logging.INFO: "Info",
    logging.WARNING: "Warning",
    logging.ERROR: "Error",
    logging.CRITICAL: "FATAL",
}


class DiagnosticFormatter(logging.Formatter):
    """Formatter that exposes ``%(severity)s`` (Info/Warning/Error/FATAL)."""

    def format(self, record: logging.LogRecord) -> str:
        record.severity = _SEVERITY_TAGS.get(record.levelno, record.levelname.title())
        return super().format(record)


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install the console handler (stderr) and, optionally, a file handler.

    Replaces whatever handlers the root logger had, so calling it twice
    does not duplicate output.

    Args:
        level: Console level name. Unknown names mean INFO.
        log_file: Also append full-detail records to this file.
        log_file_level: Level for the file; defaults to ``level``.
    """
    console_level = _parse_level(level)
    handlers: list[logging.Handler] = [_console_handler(console_level)]

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        handlers.append(_file_handler(log_file, file_level))

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    # Root passes everything any handler wants; each handler filters itself
    root.setLevel(min(h.level for h in handlers))


def _console_handler(level: int) -> logging.Handler:
    fmt = CONSOLE_DEBUG_FORMAT if level <= logging.DEBUG else CONSOLE_FORMAT
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(DiagnosticFormatter(fmt, datefmt="%H:%M:%S"))
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def _parse_level(name: str | None) -> int:
    if not name:
        return DEFAULT_LEVEL
    return logging.getLevelNamesMapping().get(name.upper(), DEFAULT_LEVEL)
