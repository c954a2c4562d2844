"""Shared helpers for CLI command modules."""

from __future__ import annotations

import sys
from typing import NoReturn

import click

from distro_pkg.core.errors import DistroPkgError


def fail(exc: DistroPkgError) -> NoReturn:
    """Report ``exc`` on stderr and exit with its status code."""
    click.secho(f"❌ {exc}", fg="red", err=True)
    sys.exit(exc.exit_code)
