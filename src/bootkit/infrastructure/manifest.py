"""Pin the dependency-manifest location in the process environment."""

from __future__ import annotations

import logging
import os
from collections.abc import MutableMapping
from pathlib import Path

from bootkit.domain.context import ManifestPin

logger = logging.getLogger(__name__)


def pin_manifest(
    env_var: str,
    derived: Path,
    environ: MutableMapping[str, str] | None = None,
) -> ManifestPin:
    """Set *env_var* to *derived* unless the variable is already present.

    A present variable is kept as-is, even when empty, so repeated calls
    and externally provided values are never clobbered. The derived value
    is made absolute without resolving symlinks.
    """
    env = os.environ if environ is None else environ
    if env_var in env:
        logger.debug("Manifest pinned externally: %s=%s", env_var, env[env_var])
        return ManifestPin(env_var=env_var, path=Path(env[env_var]), preset=True)

    value = os.path.abspath(derived)
    env[env_var] = value
    logger.debug("Manifest pinned: %s=%s", env_var, value)
    return ManifestPin(env_var=env_var, path=Path(value), preset=False)
