"""
Distribution models: identity, family tag and package-manager profiles.

The family is derived exactly once, when a ``DistroIdentity`` is built.
Everything downstream matches on ``DistroFamily`` instead of repeating
the ``ID_LIKE`` substring tests.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field


class DistroFamily(str, Enum):
    """Package-management lineage of a distribution."""

    DEBIAN = "debian"
    REDHAT = "redhat"
    ARCH = "arch"
    UNKNOWN = "unknown"


def classify_family(distro_id: str, categories: str) -> DistroFamily:
    """Map ``(ID, ID_LIKE)`` to a family.

    Category substrings take precedence over the id. The id is only
    consulted when the category string is empty.
    """
    if "debian" in categories:
        return DistroFamily.DEBIAN
    if "rhel" in categories:
        return DistroFamily.REDHAT
    if categories == "":
        if distro_id == "arch":
            return DistroFamily.ARCH
        return DistroFamily.UNKNOWN
    return DistroFamily.UNKNOWN


class DistroIdentity(BaseModel):
    """Host distribution as read from the os-release file."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    categories: str = ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def family(self) -> DistroFamily:
        return classify_family(self.id, self.categories)

    @property
    def supported(self) -> bool:
        return self.family is not DistroFamily.UNKNOWN


class PackageManagerProfile(BaseModel):
    """Which native tools serve a distribution family.

    ``install_backends`` and ``refresh_backends`` are tried in order;
    the first one that succeeds wins.
    """

    model_config = ConfigDict(frozen=True)

    family: DistroFamily
    required_commands: tuple[str, ...]
    query_backend: str
    install_backends: tuple[str, ...]
    refresh_backends: tuple[str, ...] = ()


PROFILES: dict[DistroFamily, PackageManagerProfile] = {
    DistroFamily.DEBIAN: PackageManagerProfile(
        family=DistroFamily.DEBIAN,
        required_commands=("dpkg", "apt-get"),
        query_backend="dpkg",
        install_backends=("apt-get",),
        refresh_backends=("apt-get",),
    ),
    DistroFamily.REDHAT: PackageManagerProfile(
        family=DistroFamily.REDHAT,
        required_commands=("rpm",),  # plus dnf or yum, resolved at runtime
        query_backend="rpm",
        install_backends=("dnf", "yum"),
        refresh_backends=("dnf", "yum"),
    ),
    DistroFamily.ARCH: PackageManagerProfile(
        family=DistroFamily.ARCH,
        required_commands=("pacman",),
        query_backend="pacman",
        install_backends=("pacman",),
    ),
}
