"""
CLI commands for native package operations.

Thin wrappers over ``package_query``, ``package_install`` and
``cache_refresh``.  Without ``--backend`` every command targets the
host's own package manager.
"""

from __future__ import annotations

import json
import sys

import click

from distro_pkg.core.errors import DistroPkgError
from distro_pkg.ui.cli.common import fail


@click.group()
def packages() -> None:
    """Packages — query, install, refresh."""


# ── Observe ─────────────────────────────────────────────────────


@packages.command()
@click.option(
    "--role",
    type=click.Choice(["query", "install", "refresh"]),
    default=None,
    help="Only backends serving this role.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def backends(role: str | None, as_json: bool) -> None:
    """Show known package backends and whether they are on PATH."""
    from distro_pkg.adapters.registry import get_registry

    registry = get_registry()
    names = registry.names_for_role(role) if role else registry.list_backends()
    status = registry.backend_status()
    result = {name: status[name] for name in names}

    if as_json:
        click.echo(json.dumps(result, indent=2))
        return

    click.secho("📦 Package backends:", fg="cyan", bold=True)
    for info in result.values():
        icon = "✅" if info["available"] else "❌"
        click.echo(f"   {icon} {info['name']} ({', '.join(info['roles'])})")


@packages.command()
@click.argument("names", nargs=-1, required=True)
@click.option("--backend", "-b", default=None, help="Query backend: dpkg, rpm or pacman.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def query(names: tuple[str, ...], backend: str | None, as_json: bool) -> None:
    """Check whether every package in NAMES is installed.

    Exits 1 when at least one package is missing.
    """
    from distro_pkg.core.services.package_query import (
        check_distro_packages_installed,
        check_packages_installed,
    )

    try:
        if backend:
            installed = check_packages_installed(names, backend)
        else:
            installed = check_distro_packages_installed(names)
    except DistroPkgError as e:
        fail(e)

    if as_json:
        click.echo(json.dumps({"packages": list(names), "installed": installed}, indent=2))
    elif installed:
        click.secho(f"✅ Installed: {' '.join(names)}", fg="green")
    else:
        click.secho(f"❌ Not all installed: {' '.join(names)}", fg="red")

    if not installed:
        sys.exit(1)


# ── Act ─────────────────────────────────────────────────────────


@packages.command()
@click.argument("names", nargs=-1, required=True)
@click.option("--backend", "-b", default=None, help="Install backend: apt-get, dnf, yum or pacman.")
@click.option("--interactive", is_flag=True, help="Let the package manager prompt.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def install(names: tuple[str, ...], backend: str | None, interactive: bool, as_json: bool) -> None:
    """Install NAMES with the native package manager (requires root)."""
    from distro_pkg.core.services.package_install import (
        install_distro_packages,
        install_packages,
    )

    noninteractive = False if interactive else None
    try:
        if backend:
            result = install_packages(names, backend, noninteractive=noninteractive)
        else:
            result = install_distro_packages(names, noninteractive=noninteractive)
    except DistroPkgError as e:
        fail(e)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    elif result.status == "noop":
        click.secho("✅ Nothing to install", fg="green")
    else:
        click.secho(f"✅ Installed via {result.backend}: {' '.join(result.packages)}", fg="green")


@packages.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def refresh(as_json: bool) -> None:
    """Refresh the local package index (requires root)."""
    from distro_pkg.core.services.cache_refresh import refresh_package_manager_local_cache

    try:
        # Keep stdout clean for --json
        result = refresh_package_manager_local_cache(
            progress_stream=sys.stderr if as_json else None,
        )
    except DistroPkgError as e:
        fail(e)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    elif result.skipped:
        click.secho(f"⏭️  {result.backend} index is fresh, skipped", fg="yellow")
    else:
        click.secho(f"✅ Refreshed via {result.backend}", fg="green")
