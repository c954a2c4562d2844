"""
Ubuntu local archive mirror switcher.

Points APT at the ``<cc>.archive.ubuntu.com`` mirror for the host's
country, as reported by an IP lookup service. Every network problem
degrades to leaving the sources untouched; only a failed rewrite or a
failed index refresh is an error.
"""

from __future__ import annotations

import json
import logging
import os
import re
import urllib.error
import urllib.request
from pathlib import Path
from typing import TextIO

from distro_pkg import __version__
from distro_pkg.core.context import get_settings
from distro_pkg.core.errors import DistroPkgError, GenericError
from distro_pkg.core.models.results import MirrorSwitchResult
from distro_pkg.core.services.privilege import check_running_user
from distro_pkg.core.services.progress import print_progress
from distro_pkg.core.services.subprocess_runner import run_command

logger = logging.getLogger(__name__)

_USER_AGENT = f"distro-pkg/{__version__}"
_REGION_RE = re.compile(r"^[A-Za-z]+$")
_ARCHIVE_HOST_RE = re.compile(r"//([A-Za-z]+\.)?archive\.ubuntu\.com")


def _open(url: str, *, method: str = "GET"):
    req = urllib.request.Request(url, method=method, headers={"User-Agent": _USER_AGENT})
    return urllib.request.urlopen(req, timeout=get_settings().http_timeout_seconds)


def detect_region_code() -> str | None:
    """Lower-cased country code of the host's public IP, or None."""
    url = get_settings().ip_lookup_url
    logger.info("Detecting local region code...")
    try:
        with _open(url) as resp:
            payload = json.loads(resp.read().decode("utf-8"))
    except (urllib.error.URLError, OSError) as e:
        logger.warning(
            "Unable to detect the local region code(IP address reverse lookup "
            "service not available), falling back to the default: %s",
            e,
        )
        return None
    except ValueError:
        logger.warning("Unable to query the local region code, falling back to default.")
        return None

    country = payload.get("country") if isinstance(payload, dict) else None
    if not isinstance(country, str) or not _REGION_RE.match(country):
        logger.warning("Unable to query the local region code, falling back to default.")
        return None

    logger.info('Local region code determined to be "%s".', country)
    return country.lower()


def mirror_url(region: str) -> str:
    return get_settings().ubuntu_mirror_url_template.format(region=region)


def check_mirror_reachable(url: str) -> bool:
    """Whether ``url`` answers without an HTTP or network error."""
    logger.info("Checking whether the local Ubuntu archive mirror exists...")
    try:
        with _open(url) as resp:
            resp.read(1)
    except (urllib.error.URLError, OSError) as e:
        logger.warning(
            "The local Ubuntu archive mirror doesn't seem to exist, falling back to default: %s",
            e,
        )
        return False

    logger.info("The local Ubuntu archive mirror service seems to be available, using it.")
    return True


def select_sources_file() -> Path:
    """The deb822 ``ubuntu.sources`` file when present, else ``sources.list``."""
    settings = get_settings()
    if settings.apt_sources_file_deb822.exists():
        return settings.apt_sources_file_deb822
    return settings.apt_sources_file


def rewrite_archive_hosts(text: str, region: str) -> str:
    """Point every ``[cc.]archive.ubuntu.com`` host at ``region``'s mirror."""
    return _ARCHIVE_HOST_RE.sub(f"//{region}.archive.ubuntu.com", text)


def switch_ubuntu_local_mirror(*, progress_stream: TextIO | None = None) -> MirrorSwitchResult:
    """Switch APT to the local Ubuntu archive mirror and refresh the index.

    Skipped entirely when the CI presence flag is set. The progress banner
    goes to ``progress_stream`` (default stdout).

    Raises:
        PrerequisiteError / InsufficientPrivilegeError: Privilege guard failed.
        GenericError: The sources file could not be read or rewritten, or
            ``apt-get update`` failed.
    """
    print_progress(
        "Switching to use the local Ubuntu software archive mirror "
        "to minimize package installation time...",
        stream=progress_stream,
    )

    settings = get_settings()
    if settings.ci_env_var in os.environ:
        logger.info("CI environment detected, will not attempt to change the software sources.")
        return MirrorSwitchResult(status="skipped", reason="ci")

    region = detect_region_code()
    if region is None:
        return MirrorSwitchResult(status="unchanged", reason="region-unknown")
    if not check_mirror_reachable(mirror_url(region)):
        return MirrorSwitchResult(status="unchanged", region=region, reason="mirror-unreachable")

    sources_file = select_sources_file()
    try:
        text = sources_file.read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Unable to read the APT software sources file(%s).", sources_file)
        raise GenericError(f"Unable to read {sources_file}: {e}") from e

    if f"{region}.archive.ubuntu.com" in text:
        return MirrorSwitchResult(
            status="unchanged", region=region,
            sources_file=str(sources_file), reason="already-local",
        )

    try:
        check_running_user()
    except DistroPkgError:
        logger.error("The running user check has failed.")
        raise

    logger.info("Switching to use the local APT software repository mirror...")
    try:
        sources_file.write_text(rewrite_archive_hosts(text, region), encoding="utf-8")
    except OSError as e:
        logger.error("Unable to switch to use the local APT software repository mirror.")
        raise GenericError(f"Unable to write {sources_file}: {e}") from e

    logger.info("Refreshing the local APT software archive cache...")
    result = run_command(["apt-get", "update"], capture_output=False)
    if not result["ok"]:
        logger.error("Unable to refresh the local APT software archive cache.")
        raise GenericError(f"apt-get update failed: {result['error']}")

    return MirrorSwitchResult(status="switched", region=region, sources_file=str(sources_file))
