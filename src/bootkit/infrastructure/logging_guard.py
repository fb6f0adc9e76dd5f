"""Optional logging facility guard.

Checks that the logging module can be imported. A successful import is
remembered; a failed one is retried on the next call, so a facility that
becomes importable later in the boot is picked up. This module never
installs handlers: rendering is configured by whoever owns the process
(see :mod:`bootkit.config.logging`).
"""

from __future__ import annotations

import importlib
import logging

from bootkit.domain.context import LoggingProbe, ProbeStatus

logger = logging.getLogger(__name__)

_probes: dict[str, LoggingProbe] = {}


def ensure_logging(module: str = "structlog") -> LoggingProbe:
    """Import *module* and report whether it is available. Never raises."""
    cached = _probes.get(module)
    if cached is not None:
        return cached

    try:
        importlib.import_module(module)
    except ImportError as exc:
        logger.debug("Logging facility %s unavailable: %s", module, exc)
        return LoggingProbe(status=ProbeStatus.UNAVAILABLE, module=module, reason=str(exc))

    result = LoggingProbe(status=ProbeStatus.AVAILABLE, module=module)
    _probes[module] = result
    return result


def _reset_for_testing() -> None:
    _probes.clear()
