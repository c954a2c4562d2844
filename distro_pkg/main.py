"""
distro-pkg — CLI entrypoint.

Usage:
    distro-pkg --help
    distro-pkg identity
    distro-pkg packages query curl git
    sudo distro-pkg packages refresh
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from distro_pkg.core.observability.logging_config import setup_logging

from distro_pkg import __version__


@click.group()
@click.version_option(version=__version__, prog_name="distro-pkg")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Only report errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to distro-pkg.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """distro-pkg — query, install and refresh native Linux packages."""
    from distro_pkg.core.config.loader import ConfigError, load_settings
    from distro_pkg.core.context import set_settings

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    try:
        settings = load_settings(ctx.obj["config_path"])
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)
    set_settings(settings)

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("DISTRO_PKG_LOG_LEVEL", settings.log_level)

    setup_logging(
        level=level,
        log_file=os.environ.get("DISTRO_PKG_LOG_FILE", settings.log_file),
        log_file_level=os.environ.get("DISTRO_PKG_LOG_FILE_LEVEL"),
    )


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def identity(as_json: bool) -> None:
    """Show the host distribution identity."""
    from distro_pkg.core.errors import DistroPkgError
    from distro_pkg.core.services.distro_identity import resolve_distro_identity
    from distro_pkg.ui.cli.common import fail

    try:
        ident = resolve_distro_identity()
    except DistroPkgError as e:
        fail(e)

    if as_json:
        payload = ident.model_dump(mode="json")
        payload["supported"] = ident.supported
        click.echo(json.dumps(payload, indent=2))
        return

    click.secho(f"🐧 {ident.id}", fg="cyan", bold=True)
    click.echo(f"   Categories: {ident.categories or '(none)'}")
    family_color = "green" if ident.supported else "yellow"
    click.echo("   Family: ", nl=False)
    click.secho(ident.family.value, fg=family_color)


@cli.command("required-commands")
@click.option("--check", is_flag=True, help="Fail if any required command is missing.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def required_commands(check: bool, as_json: bool) -> None:
    """List the native commands this host's package operations need."""
    from distro_pkg.core.errors import DistroPkgError
    from distro_pkg.core.services.command_check import command_exists
    from distro_pkg.core.services.distro_identity import resolve_distro_identity
    from distro_pkg.core.services.package_managers import (
        check_distro_specific_required_commands,
        determine_required_commands,
    )
    from distro_pkg.ui.cli.common import fail

    try:
        ident = resolve_distro_identity()
        if check:
            commands = check_distro_specific_required_commands(ident.id, ident.categories)
        else:
            commands = determine_required_commands(ident.id, ident.categories)
    except DistroPkgError as e:
        fail(e)

    status = {cmd: command_exists(cmd) for cmd in commands}

    if as_json:
        click.echo(json.dumps({"family": ident.family.value, "commands": status}, indent=2))
        return

    click.secho(f"🔧 Required commands ({ident.family.value}):", bold=True)
    for cmd, found in status.items():
        icon = "✅" if found else "❌"
        click.echo(f"   {icon} {cmd}")


@cli.command()
@click.argument("message")
@click.option("--separator", "-s", default="-", show_default=True, help="Separator character.")
def progress(message: str, separator: str) -> None:
    """Print MESSAGE framed by separator lines."""
    from distro_pkg.core.services.progress import print_progress

    print_progress(message, separator)


# ── Register sub-groups ─────────────────────────────────────────

from distro_pkg.ui.cli.mirror import mirror
from distro_pkg.ui.cli.packages import packages

cli.add_command(packages)
cli.add_command(mirror)


if __name__ == "__main__":
    cli()
