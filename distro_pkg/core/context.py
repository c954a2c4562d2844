"""
Process context: the active Settings for this invocation.

Set ONCE at startup by whichever entry point launches the work:

    - CLI:    main.py   -> context.set_settings(load_settings(...))
    - Tests:  conftest  -> context.set_settings(Settings(...))

Library callers that never set anything get the built-in defaults.
Module-level singleton, no locking; a single process drives one host.
"""

from __future__ import annotations

from typing import Optional

from distro_pkg.core.config.settings import Settings

_settings: Optional[Settings] = None


def set_settings(settings: Settings | None) -> None:
    """Register the settings for the current process (None resets)."""
    global _settings
    _settings = settings


def get_settings() -> Settings:
    """Return the active settings, falling back to defaults."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
