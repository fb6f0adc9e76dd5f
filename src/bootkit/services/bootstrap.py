"""The bootstrap sequence and the services built on it.

``bootstrap()`` runs the six boot steps in order, at most once per process:

1. pin the manifest env var (never overwriting a preset value)
2. ensure the logging facility (unavailable is ignored; handlers are only
   installed when ``[logging] configure`` is set)
3. activate the locked dependency set (fatal on failure)
4. activate the bytecode cache (fatal on failure)
5. silence deprecation warnings on new enough interpreters
6. ensure the logging facility again

A fatal step raises :class:`BootError` and leaves the process
un-bootstrapped; no later step runs.
"""

from __future__ import annotations

import logging
import os
import platform
from collections.abc import MutableMapping
from pathlib import Path
from typing import TYPE_CHECKING

from bootkit.domain.context import BootContext, CacheState, LoggingProbe
from bootkit.domain.errors import BootError
from bootkit.infrastructure import logging_guard
from bootkit.infrastructure.bytecode_cache import activate_cache, clear_cache
from bootkit.infrastructure.lockfile import activate_lock, installed_pins, write_lockfile
from bootkit.infrastructure.manifest import pin_manifest
from bootkit.infrastructure.warnings_policy import silence_deprecations
from bootkit.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from bootkit.config.settings import BootSettings

logger = logging.getLogger(__name__)

_current_context: BootContext | None = None


def bootstrap(
    settings: BootSettings,
    *,
    environ: MutableMapping[str, str] | None = None,
    python_version: str | None = None,
) -> BootContext:
    """Bootstrap the process and return its context.

    Args:
        settings: Resolved boot settings.
        environ: Environment to pin into (default: ``os.environ``).
        python_version: Interpreter version to test against the warnings
            threshold (default: the running interpreter).

    Raises:
        BootError: dependency or cache activation failed.
    """
    global _current_context

    if _current_context is not None:
        logger.debug("Already bootstrapped; reusing context")
        return _current_context

    env = os.environ if environ is None else environ

    manifest = pin_manifest(settings.manifest.env_var, settings.manifest_path, env)

    _ensure_logging(settings)

    lock = activate_lock(manifest.path)

    if settings.cache.enabled:
        cache = activate_cache(
            settings.cache_dir,
            precompile=[settings.app_root / p for p in settings.cache.precompile],
            export_env=settings.cache.export_env,
            environ=env,
        )
    else:
        cache = CacheState(enabled=False)

    silenced = False
    if settings.warnings.silence_deprecations:
        silenced = silence_deprecations(
            settings.warnings.min_version, python_version=python_version
        )

    probe = _ensure_logging(settings)

    _current_context = BootContext(
        manifest=manifest,
        logging=probe,
        lock=lock,
        cache=cache,
        deprecations_silenced=silenced,
        python_version=python_version or platform.python_version(),
    )
    logger.info(
        "Bootstrapped: %d locked dependencies, manifest %s", len(lock.pins), manifest.path
    )
    return _current_context


def _ensure_logging(settings: BootSettings) -> LoggingProbe:
    facility = logging_guard.ensure_logging(settings.logging.module)
    if facility.available and settings.logging.configure:
        from bootkit.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose or settings.logging.verbose,
            log_json=settings.log_json or settings.logging.json_output,
            owns_process=False,
        )
    return facility


def get_current_context() -> BootContext | None:
    """Return the process's BootContext, or None before a successful boot."""
    return _current_context


def _reset_for_testing() -> None:
    """Forget the boot state (test use only)."""
    global _current_context
    _current_context = None
    logging_guard._reset_for_testing()


class BootstrapService:
    """CLI-facing operations that report through :class:`ServiceResult`."""

    def __init__(self, settings: BootSettings) -> None:
        self._settings = settings

    def run(self, *, environ: MutableMapping[str, str] | None = None) -> ServiceResult:
        try:
            ctx = bootstrap(self._settings, environ=environ)
        except BootError as exc:
            logger.debug("Bootstrap failed: %s", exc.message)
            return ServiceResult(
                ok=False, op="bootstrap", error=ServiceError.from_boot_error(exc)
            )

        warnings: list[str] = []
        if not ctx.logging.available:
            warnings.append(f"Logging facility {ctx.logging.module} unavailable")
        return ServiceResult(
            ok=True, op="bootstrap", data=ctx.model_dump(mode="json"), warnings=warnings
        )

    def lock(
        self,
        names: list[str] | None = None,
        *,
        output: Path | None = None,
    ) -> ServiceResult:
        """Write installed versions of *names* (all when empty) to the manifest."""
        target = output or self._manifest_target()
        try:
            pins = installed_pins(names or None)
        except BootError as exc:
            return ServiceResult(ok=False, op="lock", error=ServiceError.from_boot_error(exc))

        write_lockfile(target, pins)
        return ServiceResult(ok=True, op="lock", data={"manifest": str(target), "count": len(pins)})

    def clear_cache(self) -> ServiceResult:
        cache_dir = self._settings.cache_dir
        removed = clear_cache(cache_dir)
        warnings = [] if removed else [f"No cache at {cache_dir}"]
        return ServiceResult(
            ok=True,
            op="cache_clear",
            data={"cache_dir": str(cache_dir), "removed": removed},
            warnings=warnings,
        )

    def _manifest_target(self) -> Path:
        current = os.environ.get(self._settings.manifest.env_var)
        return Path(current) if current else self._settings.manifest_path
