"""
Tests for os-release parsing and distribution identity resolution.
"""

import pytest

from distro_pkg.core.errors import GenericError, PrerequisiteError
from distro_pkg.core.models.distro import DistroFamily, DistroIdentity, classify_family
from distro_pkg.core.services.distro_identity import (
    get_distro_categories,
    get_distro_identifier,
    load_os_release,
    parse_os_release,
    resolve_distro_identity,
)

from tests.samples import (
    ALPINE_OS_RELEASE,
    ARCH_OS_RELEASE,
    ROCKY_OS_RELEASE,
    UBUNTU_OS_RELEASE,
)

# ── Parser ───────────────────────────────────────────────────────────


class TestParseOsRelease:
    def test_unquoted_and_quoted_values(self):
        data = parse_os_release(ROCKY_OS_RELEASE)
        assert data["ID"] == "rocky"
        assert data["ID_LIKE"] == "rhel centos fedora"
        assert data["NAME"] == "Rocky Linux"

    def test_comments_and_blank_lines_skipped(self):
        data = parse_os_release("# generated\n\nID=debian\n   \n")
        assert data == {"ID": "debian"}

    def test_single_quotes_and_escapes(self):
        data = parse_os_release("A='single quoted'\nB=\"say \\\"hi\\\"\"\n")
        assert data["A"] == "single quoted"
        assert data["B"] == 'say "hi"'

    def test_empty_value(self):
        assert parse_os_release('ID_LIKE=""\n') == {"ID_LIKE": ""}

    def test_shell_syntax_is_not_evaluated(self):
        data = parse_os_release('ID="$(touch /tmp/pwned)"\nVERSION=${HOME}\n')
        assert data["ID"] == "$(touch /tmp/pwned)"
        assert data["VERSION"] == "${HOME}"

    def test_line_without_equals_rejected(self):
        with pytest.raises(ValueError, match="line 2"):
            parse_os_release("ID=arch\nexport FOO\n")

    def test_invalid_key_rejected(self):
        with pytest.raises(ValueError):
            parse_os_release("1ID=arch\n")

    def test_unquoted_whitespace_rejected(self):
        with pytest.raises(ValueError, match="unquoted whitespace"):
            parse_os_release("NAME=Arch Linux\n")

    def test_unterminated_quote_rejected(self):
        with pytest.raises(ValueError):
            parse_os_release('NAME="Arch\n')


# ── File loading ─────────────────────────────────────────────────────


class TestLoadOsRelease:
    def test_missing_file_is_prerequisite_error(self, settings, caplog):
        with pytest.raises(PrerequisiteError):
            load_os_release()
        assert "Unable to load the operating system information file" in caplog.text

    def test_malformed_file_is_prerequisite_error(self, os_release):
        os_release("ID=arch\nthis is not an assignment\n")
        with pytest.raises(PrerequisiteError):
            load_os_release()

    def test_explicit_path(self, tmp_path):
        other = tmp_path / "other-os-release"
        other.write_text("ID=debian\n")
        assert load_os_release(other) == {"ID": "debian"}


class TestIdentifierAndCategories:
    def test_ubuntu(self, os_release):
        os_release(UBUNTU_OS_RELEASE)
        assert get_distro_identifier() == "ubuntu"
        assert get_distro_categories() == "debian"

    def test_arch_has_no_categories(self, os_release):
        os_release(ARCH_OS_RELEASE)
        assert get_distro_identifier() == "arch"
        assert get_distro_categories() == ""

    def test_missing_id_is_generic_error(self, os_release, caplog):
        os_release('NAME="Nameless"\n')
        with pytest.raises(GenericError):
            get_distro_identifier()
        assert "ID variable assignment not found" in caplog.text

    def test_missing_file_for_categories(self):
        with pytest.raises(PrerequisiteError):
            get_distro_categories()


# ── Identity / family ────────────────────────────────────────────────


class TestResolveIdentity:
    @pytest.mark.parametrize(
        "text, family",
        [
            (UBUNTU_OS_RELEASE, DistroFamily.DEBIAN),
            (ROCKY_OS_RELEASE, DistroFamily.REDHAT),
            (ARCH_OS_RELEASE, DistroFamily.ARCH),
            (ALPINE_OS_RELEASE, DistroFamily.UNKNOWN),
        ],
    )
    def test_family(self, os_release, text, family):
        os_release(text)
        assert resolve_distro_identity().family is family

    def test_identity_is_frozen(self):
        ident = DistroIdentity(id="debian")
        with pytest.raises(Exception):
            ident.id = "ubuntu"

    def test_empty_id_rejected(self):
        with pytest.raises(ValueError):
            DistroIdentity(id="")

    def test_json_dump_includes_family(self):
        dumped = DistroIdentity(id="rocky", categories="rhel fedora").model_dump(mode="json")
        assert dumped == {"id": "rocky", "categories": "rhel fedora", "family": "redhat"}


class TestClassifyFamily:
    def test_categories_win_over_id(self):
        # A derivative that calls itself arch but declares debian lineage
        assert classify_family("arch", "debian") is DistroFamily.DEBIAN

    def test_debian_checked_before_rhel(self):
        assert classify_family("odd", "rhel debian") is DistroFamily.DEBIAN

    def test_substring_match(self):
        assert classify_family("linuxmint", "ubuntu debian") is DistroFamily.DEBIAN

    def test_arch_id_only_counts_without_categories(self):
        assert classify_family("manjaro", "arch") is DistroFamily.UNKNOWN

    def test_unknown(self):
        assert classify_family("alpine", "") is DistroFamily.UNKNOWN
        assert not DistroIdentity(id="alpine").supported
