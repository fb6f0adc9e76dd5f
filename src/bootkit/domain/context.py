"""Frozen records describing what the bootstrap did to the process.

The process-global side effects (env vars, warning filters,
``sys.pycache_prefix``) are mirrored here so callers and tests can see
them without reading ambient state.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field


class ProbeStatus(StrEnum):
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


class LoggingProbe(BaseModel):
    """Outcome of ensuring the logging facility is importable.

    ``UNAVAILABLE`` is a normal value, not an error: callers decide
    whether to act on it.
    """

    model_config = {"frozen": True}

    status: ProbeStatus
    module: str
    reason: str | None = None

    @property
    def available(self) -> bool:
        return self.status is ProbeStatus.AVAILABLE


class ManifestPin(BaseModel):
    """The manifest env var after pinning.

    Attributes:
        preset: True when an externally provided value was kept.
    """

    model_config = {"frozen": True}

    env_var: str
    path: Path
    preset: bool


class LockPin(BaseModel):
    model_config = {"frozen": True}

    name: str
    version: str

    def __str__(self) -> str:
        return f"{self.name}=={self.version}"


class LockReport(BaseModel):
    """Result of activating the locked dependency set."""

    model_config = {"frozen": True}

    manifest: Path
    pins: list[LockPin] = Field(default_factory=list)


class CacheState(BaseModel):
    model_config = {"frozen": True}

    enabled: bool
    cache_dir: Path | None = None
    compiled: list[Path] = Field(default_factory=list)


class BootContext(BaseModel):
    """Application context built once at startup."""

    model_config = {"frozen": True}

    manifest: ManifestPin
    logging: LoggingProbe
    lock: LockReport
    cache: CacheState
    deprecations_silenced: bool
    python_version: str
