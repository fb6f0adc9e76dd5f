"""Persistent bytecode cache that survives across process runs.

Activation points ``sys.pycache_prefix`` at a dedicated directory so every
module imported afterwards reads and writes its compiled form there, and
optionally warms the cache by byte-compiling configured source trees.
"""

from __future__ import annotations

import compileall
import logging
import os
import shutil
import sys
from collections.abc import Iterable, MutableMapping
from pathlib import Path

from bootkit.domain.context import CacheState
from bootkit.domain.errors import StartupCacheError

logger = logging.getLogger(__name__)

PYCACHE_ENV_VAR = "PYTHONPYCACHEPREFIX"


def _precompile(source: Path) -> None:
    if not source.exists():
        raise StartupCacheError(
            f"Precompile source does not exist: {source}", detail={"source": str(source)}
        )
    if source.is_dir():
        ok = compileall.compile_dir(str(source), quiet=1)
    else:
        ok = compileall.compile_file(str(source), quiet=1)
    if not ok:
        raise StartupCacheError(
            f"Byte-compilation failed under {source}", detail={"source": str(source)}
        )


def activate_cache(
    cache_dir: Path,
    *,
    precompile: Iterable[Path] = (),
    export_env: bool = True,
    environ: MutableMapping[str, str] | None = None,
) -> CacheState:
    """Route bytecode to *cache_dir* and warm it from *precompile*.

    On :class:`StartupCacheError` neither ``sys.pycache_prefix`` nor
    *environ* is left changed.
    """
    env = os.environ if environ is None else environ
    try:
        cache_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StartupCacheError(
            f"Cannot create cache directory {cache_dir}: {exc}",
            detail={"cache_dir": str(cache_dir)},
        ) from exc
    if not os.access(cache_dir, os.W_OK):
        raise StartupCacheError(
            f"Cache directory is not writable: {cache_dir}",
            detail={"cache_dir": str(cache_dir)},
        )

    # compileall writes under sys.pycache_prefix; restored if warming fails.
    previous_prefix = sys.pycache_prefix
    sys.pycache_prefix = str(cache_dir)
    compiled: list[Path] = []
    try:
        for source in precompile:
            _precompile(source)
            compiled.append(source)
    except StartupCacheError:
        sys.pycache_prefix = previous_prefix
        raise

    if export_env:
        env.setdefault(PYCACHE_ENV_VAR, str(cache_dir))

    logger.debug("Bytecode cache active at %s (%d trees warmed)", cache_dir, len(compiled))
    return CacheState(enabled=True, cache_dir=cache_dir, compiled=compiled)


def clear_cache(cache_dir: Path) -> bool:
    """Delete *cache_dir*. Returns False if there was nothing to delete."""
    if not cache_dir.exists():
        return False
    shutil.rmtree(cache_dir)
    logger.debug("Removed bytecode cache %s", cache_dir)
    return True
