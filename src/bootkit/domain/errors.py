"""Fatal boot errors.

Each error carries a stable ``code`` so the CLI and the fail-fast entry
point can report it without inspecting the exception type.
"""

from __future__ import annotations

from typing import Any


class BootError(Exception):
    """Base class for unmet startup preconditions."""

    code = "BOOT_FAILED"

    def __init__(self, message: str, *, detail: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail: dict[str, Any] = detail or {}


class DependencyResolutionError(BootError):
    """The locked dependency set could not be activated."""

    code = "DEPENDENCY_RESOLUTION"


class StartupCacheError(BootError):
    """The bytecode cache could not be activated."""

    code = "STARTUP_CACHE"


class ConfigurationError(BootError):
    """Settings could not be loaded or failed validation."""

    code = "CONFIG"
