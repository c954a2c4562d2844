"""Adapters: bindings for native package-manager tools.

Public re-exports for convenient access.
"""

from distro_pkg.adapters.base import CommandSpec, PackageBackend
from distro_pkg.adapters.registry import (
    BackendRegistry,
    create_default_registry,
    get_registry,
)

__all__ = [
    "BackendRegistry",
    "CommandSpec",
    "PackageBackend",
    "create_default_registry",
    "get_registry",
]
