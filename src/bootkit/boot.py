"""Fail-fast entry point for application code.

Call :func:`boot` first thing in an application's entry module, before
importing anything that should see the pinned manifest, the bytecode
cache, or the deprecation policy::

    from bootkit.boot import boot

    boot()

    from myapp.web import create_app  # noqa: E402
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any, NoReturn

import click
from pydantic import ValidationError

from bootkit.config.settings import BootSettings
from bootkit.domain.context import BootContext
from bootkit.domain.errors import BootError, ConfigurationError
from bootkit.services.bootstrap import bootstrap

logger = logging.getLogger(__name__)


def _abort(exc: BootError) -> NoReturn:
    logger.error("Boot aborted (%s): %s", exc.code, exc.message)
    click.echo(f"bootkit: {exc.code}: {exc.message}", err=True)
    raise SystemExit(1) from exc


def boot(
    *,
    environ: MutableMapping[str, str] | None = None,
    python_version: str | None = None,
    **overrides: Any,
) -> BootContext:
    """Bootstrap the process or terminate it.

    *overrides* are passed to :meth:`BootSettings.from_cli` (``config_path``,
    ``config_dir``, or any settings field).

    Raises:
        SystemExit: with status 1 when the settings are invalid or a fatal
            boot step fails. The cause is printed to stderr as
            ``bootkit: <code>: <message>``.
    """
    try:
        settings = BootSettings.from_cli(**overrides)
    except (ValidationError, click.ClickException) as exc:
        _abort(ConfigurationError(f"Invalid bootkit settings: {exc}"))
    try:
        return bootstrap(settings, environ=environ, python_version=python_version)
    except BootError as exc:
        _abort(exc)
