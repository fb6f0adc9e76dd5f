"""Log rendering for bootkit's own records.

Two owners, two scopes:

- The ``bootkit`` CLI owns its process. It configures structlog and
  installs a handler on the root logger.
- A host application calling :func:`bootkit.boot.boot` owns logging. bootkit
  only touches it when ``[logging] configure = true``, and then attaches a
  handler to the ``bootkit`` logger alone. Root handlers, the root level and
  the host's structlog configuration are left as they were.

Either way the handler renders console text or JSON lines on stderr, and
repeated calls replace the handler bootkit installed before rather than
stacking another one.
"""

from __future__ import annotations

import logging
import sys

import structlog

HANDLER_NAME = "bootkit"
BOOT_LOGGER = "bootkit"

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def _stderr_handler(log_json: bool) -> logging.Handler:
    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_SHARED_PROCESSORS,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )
    return handler


def _replace_own_handler(target: logging.Logger, handler: logging.Handler) -> None:
    for existing in [h for h in target.handlers if h.get_name() == HANDLER_NAME]:
        target.removeHandler(existing)
    target.addHandler(handler)


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    owns_process: bool = True,
) -> logging.Handler:
    """Install bootkit's stderr handler and return it.

    Args:
        verbose: DEBUG for ``bootkit`` records; WARNING+ otherwise.
        log_json: JSON lines instead of console text.
        owns_process: True for the CLI (structlog and the root logger are
            configured). False for a library boot, where only the
            ``bootkit`` logger is touched.
    """
    handler = _stderr_handler(log_json)
    boot_logger = logging.getLogger(BOOT_LOGGER)
    boot_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    if not owns_process:
        _replace_own_handler(boot_logger, handler)
        boot_logger.propagate = False
        return handler

    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    for existing in [h for h in boot_logger.handlers if h.get_name() == HANDLER_NAME]:
        boot_logger.removeHandler(existing)
    boot_logger.propagate = True

    root_logger = logging.getLogger()
    _replace_own_handler(root_logger, handler)
    root_logger.setLevel(logging.WARNING)
    return handler
