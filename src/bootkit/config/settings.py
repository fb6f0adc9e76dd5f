"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags or ``boot()`` keyword overrides
  2. Env vars     — ``BOOTKIT_*`` prefix
  3. TOML file    — ``config/bootkit.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`bootkit.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from bootkit.config.discovery import CONFIG_FILENAME, default_config_dir, find_config
from bootkit.config.models import CacheConfig, LoggingConfig, ManifestConfig, WarningsConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``bootkit.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class BootSettings(BaseSettings):
    """Unified settings for the bootstrap and the bootkit CLI.

    Attributes:
        config_dir: Directory holding ``bootkit.toml`` (or where it would
            be). The manifest lives one directory above it.
        config_path: The discovered or explicit config file, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "BOOTKIT_",
        "env_nested_delimiter": "__",
    }

    config_dir: Path = Field(default_factory=default_config_dir)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    manifest: ManifestConfig = Field(default_factory=ManifestConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    warnings: WarningsConfig = Field(default_factory=WarningsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def app_root(self) -> Path:
        """Application root: the directory above the config directory."""
        return self.config_dir.resolve().parent

    @property
    def manifest_path(self) -> Path:
        """Derived manifest location, used when the env var is unset."""
        return self.app_root / self.manifest.filename

    @property
    def cache_dir(self) -> Path:
        """Absolute bytecode cache directory."""
        if self.cache.dir.is_absolute():
            return self.cache.dir
        return self.app_root / self.cache.dir

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        config_dir: Path | None = None,
        **cli_flags: Any,
    ) -> BootSettings:
        """Construct settings from a CLI invocation or ``boot()`` call.

        Discovers ``config/bootkit.toml`` via walk-up (or explicit
        *config_path*), resolves *config_dir* from the config file's parent
        directory, and merges flags as highest-priority overrides.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        elif config_dir is not None:
            candidate = config_dir / CONFIG_FILENAME
            toml_path = candidate if candidate.is_file() else None
        else:
            toml_path = find_config()

        resolved_dir = config_dir
        if resolved_dir is None:
            resolved_dir = toml_path.parent if toml_path else default_config_dir()

        _tls.toml_path = toml_path
        try:
            return cls(
                config_dir=resolved_dir,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None
