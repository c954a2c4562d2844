"""
Tests for package index refresh.
"""

import io
import logging
import os
import time

import pytest

from distro_pkg.adapters.registry import BackendRegistry
from distro_pkg.core.errors import (
    FATAL_EXIT_CODE,
    FatalConfigurationError,
    GenericError,
    InsufficientPrivilegeError,
    NotFoundError,
    UnsupportedDistributionError,
)
from distro_pkg.core.services.cache_refresh import (
    get_apt_archive_cache_mtime,
    refresh_debian_local_cache,
    refresh_dnf_local_cache,
    refresh_package_manager_local_cache,
    refresh_redhat_local_cache,
    refresh_yum_local_cache,
)

from tests.samples import (
    ALPINE_OS_RELEASE,
    ARCH_OS_RELEASE,
    ROCKY_OS_RELEASE,
    UBUNTU_OS_RELEASE,
)

DAY = 86400


def _age_archives(settings, seconds: int) -> int:
    stamp = int(time.time()) - seconds
    os.utime(settings.apt_archive_cache_dir, (stamp, stamp))
    return stamp


# ── RHEL ─────────────────────────────────────────────────────────────


class TestDnfYum:
    def test_dnf_absent(self, on_path, fake_runner):
        assert refresh_dnf_local_cache() is False
        assert fake_runner.calls == []

    def test_dnf_makecache(self, on_path, fake_runner):
        on_path.add("dnf")
        assert refresh_dnf_local_cache() is True
        assert fake_runner.argvs == [["dnf", "makecache"]]

    def test_yum_failure(self, on_path, fake_runner, caplog):
        on_path.add("yum")
        fake_runner.failing.add("yum")
        with pytest.raises(GenericError):
            refresh_yum_local_cache()
        assert "Unable to refresh the YUM local cache." in caplog.text


class TestRefreshRedhat:
    def test_dnf_wins(self, on_path, as_root, fake_runner):
        on_path.update({"dnf", "yum"})
        result = refresh_redhat_local_cache()
        assert result.backend == "dnf"
        assert not fake_runner.ran("yum", "makecache")

    def test_dnf_failure_falls_back_to_yum(self, on_path, as_root, fake_runner):
        on_path.update({"dnf", "yum"})
        fake_runner.failing.add("dnf")
        assert refresh_redhat_local_cache().backend == "yum"
        assert fake_runner.argvs[-2:] == [["dnf", "makecache"], ["yum", "makecache"]]

    def test_yum_only(self, on_path, as_root, fake_runner):
        on_path.add("yum")
        assert refresh_redhat_local_cache().backend == "yum"

    def test_no_tools(self, on_path, as_root, fake_runner, caplog):
        with pytest.raises(GenericError, match="No suitable package manager commands are found."):
            refresh_redhat_local_cache()

    def test_diagnostics_name_each_failed_backend(self, on_path, as_root, fake_runner, caplog):
        on_path.update({"dnf", "yum"})
        fake_runner.failing.update({"dnf", "yum"})
        with pytest.raises(GenericError):
            refresh_redhat_local_cache()
        assert "No suitable package manager commands are found." in caplog.text
        assert "Unable to refresh the DNF local cache." in caplog.text
        assert "Unable to refresh the YUM local cache." in caplog.text

    def test_requires_root(self, on_path, as_user, fake_runner):
        on_path.add("dnf")
        with pytest.raises(InsufficientPrivilegeError):
            refresh_redhat_local_cache()
        assert fake_runner.calls == []


# ── Debian ───────────────────────────────────────────────────────────


class TestRefreshDebian:
    def test_mtime(self, settings):
        stamp = _age_archives(settings, 3600)
        assert get_apt_archive_cache_mtime() == stamp

    def test_mtime_unavailable(self, settings, tmp_path):
        settings.apt_archive_cache_dir = tmp_path / "missing"
        with pytest.raises(GenericError):
            get_apt_archive_cache_mtime()

    def test_fresh_cache_is_skipped(self, settings, on_path, as_root, fake_runner, caplog):
        caplog.set_level(logging.INFO)
        _age_archives(settings, 3600)
        result = refresh_debian_local_cache()
        assert result.skipped
        assert not fake_runner.ran("apt-get", "update")
        assert "The last refresh time is less than 1 day, skipping..." in caplog.text

    def test_stale_cache_is_refreshed(self, settings, on_path, as_root, fake_runner):
        _age_archives(settings, DAY + 10)
        result = refresh_debian_local_cache()
        assert result.status == "refreshed"
        assert result.age_seconds >= DAY
        assert fake_runner.ran("apt-get", "update")

    def test_exact_threshold_refreshes(self, settings, on_path, as_root, fake_runner):
        mtime = _age_archives(settings, 0)
        refresh_debian_local_cache(now=mtime + DAY)
        assert fake_runner.ran("apt-get", "update")

    def test_second_call_within_window_is_skipped(self, settings, on_path, as_root, fake_runner):
        _age_archives(settings, 2 * DAY)
        first = refresh_debian_local_cache()
        second = refresh_debian_local_cache()
        assert first.status == "refreshed"
        assert second.skipped
        assert fake_runner.argvs.count(["apt-get", "update"]) == 1

    def test_threshold_is_configurable(self, settings, on_path, as_root, fake_runner):
        settings.cache_max_age_seconds = 60
        _age_archives(settings, 120)
        assert refresh_debian_local_cache().status == "refreshed"

    def test_apt_get_failure(self, settings, on_path, as_root, fake_runner, caplog):
        _age_archives(settings, 2 * DAY)
        fake_runner.failing.add("apt-get update")
        with pytest.raises(GenericError):
            refresh_debian_local_cache()
        assert "Unable to refresh the APT local package cache." in caplog.text

    def test_registry_without_apt_get(self, settings, on_path, as_root, fake_runner, caplog):
        _age_archives(settings, 2 * DAY)
        with pytest.raises(GenericError, match="apt-get cannot refresh"):
            refresh_debian_local_cache(registry=BackendRegistry())
        assert not fake_runner.ran("apt-get", "update")

    def test_requires_root(self, settings, on_path, as_user, fake_runner):
        _age_archives(settings, 2 * DAY)
        with pytest.raises(InsufficientPrivilegeError):
            refresh_debian_local_cache()
        assert fake_runner.calls == []


# ── Dispatcher ───────────────────────────────────────────────────────


class TestRefreshPackageManagerLocalCache:
    def test_ubuntu(self, settings, os_release, on_path, as_root, fake_runner, capsys):
        os_release(UBUNTU_OS_RELEASE)
        on_path.update({"dpkg", "apt-get"})
        _age_archives(settings, 2 * DAY)
        result = refresh_package_manager_local_cache()
        assert result.backend == "apt-get"
        assert "Refreshing the package manager local cache..." in capsys.readouterr().out

    def test_banner_stream(self, settings, os_release, on_path, as_root, fake_runner, capsys):
        os_release(UBUNTU_OS_RELEASE)
        on_path.update({"dpkg", "apt-get"})
        _age_archives(settings, 60)
        buf = io.StringIO()
        refresh_package_manager_local_cache(progress_stream=buf)
        assert "Refreshing the package manager local cache..." in buf.getvalue()
        assert capsys.readouterr().out == ""

    def test_rocky(self, os_release, on_path, as_root, fake_runner):
        os_release(ROCKY_OS_RELEASE)
        on_path.update({"rpm", "dnf"})
        assert refresh_package_manager_local_cache().backend == "dnf"

    def test_missing_tool(self, os_release, on_path, as_root, fake_runner, caplog):
        os_release(UBUNTU_OS_RELEASE)
        on_path.add("dpkg")
        with pytest.raises(NotFoundError):
            refresh_package_manager_local_cache()
        assert "Package manager command check failed." in caplog.text
        assert fake_runner.calls == []

    def test_unsupported(self, os_release, on_path, as_root, fake_runner):
        os_release(ALPINE_OS_RELEASE)
        with pytest.raises(UnsupportedDistributionError):
            refresh_package_manager_local_cache()

    def test_arch_is_fatal(self, os_release, on_path, as_root, fake_runner, caplog):
        os_release(ARCH_OS_RELEASE)
        on_path.add("pacman")
        with pytest.raises(SystemExit) as exc:
            refresh_package_manager_local_cache()
        assert isinstance(exc.value, FatalConfigurationError)
        assert exc.value.code == FATAL_EXIT_CODE == 99
        assert fake_runner.calls == []
        assert any(r.levelname == "CRITICAL" for r in caplog.records)

    def test_debian_failure_is_reported(self, settings, os_release, on_path, as_root, fake_runner, caplog):
        os_release(UBUNTU_OS_RELEASE)
        on_path.update({"dpkg", "apt-get"})
        _age_archives(settings, 2 * DAY)
        fake_runner.failing.add("apt-get")
        with pytest.raises(GenericError):
            refresh_package_manager_local_cache()
        assert "Debian software management system's local cache" in caplog.text
