"""
Domain models: Pydantic types for distro-pkg.

All models are re-exported here for convenient access:

    from distro_pkg.core.models import DistroIdentity, DistroFamily, InstallResult
"""

from distro_pkg.core.models.distro import (
    PROFILES,
    DistroFamily,
    DistroIdentity,
    PackageManagerProfile,
    classify_family,
)
from distro_pkg.core.models.results import (
    CacheRefreshResult,
    InstallResult,
    MirrorSwitchResult,
)

__all__ = [
    # distro.py
    "PROFILES",
    "DistroFamily",
    "DistroIdentity",
    "PackageManagerProfile",
    "classify_family",
    # results.py
    "CacheRefreshResult",
    "InstallResult",
    "MirrorSwitchResult",
]
