"""
Backend registry: central lookup for native package tools.

Services resolve backends by name through the registry, never by
instantiating them directly, so tests and callers can swap in their own.
"""

from __future__ import annotations

import logging
from typing import Any

from distro_pkg.adapters.base import PackageBackend
from distro_pkg.adapters.native.arch import PacmanBackend
from distro_pkg.adapters.native.debian import AptGetBackend, DpkgBackend
from distro_pkg.adapters.native.redhat import DnfBackend, RpmBackend, YumBackend

logger = logging.getLogger(__name__)


class BackendRegistry:
    """Registry of package backends keyed by name."""

    def __init__(self) -> None:
        self._backends: dict[str, PackageBackend] = {}

    def register(self, backend: PackageBackend) -> None:
        """Register a backend, replacing any with the same name."""
        name = backend.name
        if name in self._backends:
            logger.warning("Overwriting existing backend: %s", name)
        self._backends[name] = backend
        logger.debug("Registered backend: %s", name)

    def get(self, name: str) -> PackageBackend | None:
        """Look up a backend by name."""
        return self._backends.get(name)

    def list_backends(self) -> list[str]:
        """List all registered backend names."""
        return list(self._backends.keys())

    def names_for_role(self, role: str) -> list[str]:
        """Registered backend names serving ``role`` (query/install/refresh)."""
        return [name for name, b in self._backends.items() if role in b.roles]

    def backend_status(self) -> dict[str, dict[str, Any]]:
        """Availability and roles of every registered backend."""
        status = {}
        for name, backend in self._backends.items():
            status[name] = {
                "name": name,
                "available": backend.is_available(),
                "roles": backend.roles,
                "type": backend.__class__.__name__,
            }
        return status


def create_default_registry() -> BackendRegistry:
    """Registry holding every built-in backend."""
    registry = BackendRegistry()
    for backend in (
        DpkgBackend(),
        AptGetBackend(),
        RpmBackend(),
        DnfBackend(),
        YumBackend(),
        PacmanBackend(),
    ):
        registry.register(backend)
    return registry


_default_registry: BackendRegistry | None = None


def get_registry() -> BackendRegistry:
    """Process-wide default registry, created on first use."""
    global _default_registry
    if _default_registry is None:
        _default_registry = create_default_registry()
    return _default_registry
