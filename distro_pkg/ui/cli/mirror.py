"""
CLI commands for APT mirror selection.
"""

from __future__ import annotations

import json
import sys

import click

from distro_pkg.core.errors import DistroPkgError
from distro_pkg.ui.cli.common import fail


@click.group()
def mirror() -> None:
    """Mirror — pick the nearest Ubuntu archive mirror."""


@mirror.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def switch(as_json: bool) -> None:
    """Switch APT sources to the local Ubuntu archive mirror."""
    from distro_pkg.core.services.mirror_switch import switch_ubuntu_local_mirror

    try:
        # Keep stdout clean for --json
        result = switch_ubuntu_local_mirror(progress_stream=sys.stderr if as_json else None)
    except DistroPkgError as e:
        fail(e)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if result.status == "switched":
        click.secho(f"✅ Switched to {result.region}.archive.ubuntu.com", fg="green", bold=True)
        click.echo(f"   Sources: {result.sources_file}")
    elif result.status == "skipped":
        click.secho(f"⏭️  Skipped ({result.reason})", fg="yellow")
    else:
        click.secho(f"ℹ️  Sources unchanged ({result.reason})", fg="cyan")
