"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, bootkit.toml only contains overrides.
An application that keeps ``requirements.lock`` next to its ``config/``
directory needs no config file at all.
"""

from __future__ import annotations

from pathlib import Path

from packaging.version import InvalidVersion, Version
from pydantic import BaseModel, Field, field_validator


class ManifestConfig(BaseModel):
    """[manifest] section."""

    model_config = {"frozen": True}

    env_var: str = "BOOTKIT_MANIFEST_PATH"
    filename: str = "requirements.lock"


class CacheConfig(BaseModel):
    """[cache] section.

    ``dir`` is resolved against the application root when relative.
    ``precompile`` lists source trees (also root-relative) that are
    byte-compiled into the cache during boot.
    """

    model_config = {"frozen": True}

    enabled: bool = True
    dir: Path = Path(".cache/bootkit/pycache")
    precompile: list[Path] = Field(default_factory=list)
    export_env: bool = True


class WarningsConfig(BaseModel):
    """[warnings] section."""

    model_config = {"frozen": True}

    silence_deprecations: bool = True
    min_version: str = "3.0"

    @field_validator("min_version")
    @classmethod
    def _check_min_version(cls, value: str) -> str:
        try:
            Version(value)
        except InvalidVersion as exc:
            raise ValueError(f"min_version {value!r} is not a version number") from exc
        return value


class LoggingConfig(BaseModel):
    """[logging] section.

    ``configure`` lets a library boot install bootkit's stderr handler on
    the ``bootkit`` logger. It is off by default so the host application's
    logging stays untouched.
    """

    model_config = {"frozen": True}

    module: str = "structlog"
    configure: bool = False
    verbose: bool = False
    json_output: bool = False
