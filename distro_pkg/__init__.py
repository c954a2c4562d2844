"""distro-pkg: distribution-agnostic package management for provisioning."""

__version__ = "0.1.0"
