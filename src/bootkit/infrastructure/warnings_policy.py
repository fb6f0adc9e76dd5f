"""Process-wide deprecation warning policy."""

from __future__ import annotations

import logging
import re
import sys
import warnings

from packaging.version import Version

logger = logging.getLogger(__name__)

DEPRECATION_CATEGORIES: tuple[type[Warning], ...] = (
    DeprecationWarning,
    PendingDeprecationWarning,
)

_RELEASE = re.compile(r"\d+(?:\.\d+)*")


def _release(version: str) -> Version:
    # Interpreter builds report strings such as "3.13.0+" or "3.14.0a1+";
    # only the numeric release segment takes part in the comparison.
    match = _RELEASE.match(version.strip())
    return Version(match.group(0) if match else version)


def silence_deprecations(min_version: str = "3.0", *, python_version: str | None = None) -> bool:
    """Ignore deprecation-class warnings when the interpreter is new enough.

    The filter is global and stays installed for the life of the process.
    Returns True when the filters were installed.
    """
    if python_version is None:
        current = ".".join(str(part) for part in sys.version_info[:3])
    else:
        current = python_version
    if _release(current) < Version(min_version):
        logger.debug("Python %s below %s; deprecation warnings left alone", current, min_version)
        return False

    for category in DEPRECATION_CATEGORIES:
        warnings.filterwarnings("ignore", category=category)
    logger.debug("Deprecation warnings silenced for Python %s", current)
    return True
